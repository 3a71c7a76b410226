# tetris_layout.py
from dataclasses import dataclass
from tetris_config import CONFIG, COLS, ROWS, QUEUE_SIZE

# preview cell size per queue slot, front first
PREVIEW_CELLS = (18, 15, 12)


@dataclass
class Dims:
    cell: int
    margin: int
    panel_w: int
    board_w: int
    board_h: int
    total_w: int
    total_h: int
    board_x: int
    board_y: int
    panel_x: int
    panel_y: int
    hold_y: int
    next_y: int
    box: int

def compute_dims() -> Dims:
    cell = int(CONFIG["CELL_SIZE"])
    margin = 16
    panel_w = 200
    box = 4 * PREVIEW_CELLS[0] + 12

    board_w = COLS * cell
    board_h = ROWS * cell

    total_w = margin + panel_w + margin + board_w + margin + panel_w + margin
    total_h = margin + max(board_h, 30 + QUEUE_SIZE * (box + 8) + 30) + margin

    # hold box on the left panel, next queue and stats on the right
    board_x = margin + panel_w + margin
    board_y = margin
    panel_x = board_x + board_w + margin
    panel_y = margin

    return Dims(
        cell=cell, margin=margin, panel_w=panel_w,
        board_w=board_w, board_h=board_h,
        total_w=total_w, total_h=total_h,
        board_x=board_x, board_y=board_y,
        panel_x=panel_x, panel_y=panel_y,
        hold_y=margin + 30, next_y=margin + 30, box=box,
    )
