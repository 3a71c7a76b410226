"""Board grid and collision"""
from typing import Iterator, List, Optional, Tuple

from tetris_config import COLS, ROWS
from tetris_piece import Piece

Cell = Optional[str]


class Board:
    """Fixed-size grid; each cell is None or a colour tag."""

    def __init__(self, width: int = COLS, height: int = ROWS):
        self.width = width
        self.height = height
        self.grid: List[List[Cell]] = [[None] * width for _ in range(height)]
        # bumped on every mutation, lets the renderer cache locked cells
        self.revision = 0

    def _check(self, x: int, y: int):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"cell ({x}, {y}) is off the board")

    def is_occupied(self, x: int, y: int) -> Cell:
        self._check(x, y)
        return self.grid[y][x]

    def set(self, x: int, y: int, color: Cell):
        self._check(x, y)
        self.grid[y][x] = color
        self.revision += 1

    def is_row_full(self, y: int) -> bool:
        return all(c is not None for c in self.grid[y])

    def clear(self):
        for row in self.grid:
            for x in range(self.width):
                row[x] = None
        self.revision += 1

    def fill(self, color: str):
        for row in self.grid:
            for x in range(self.width):
                row[x] = color
        self.revision += 1

    def rows(self) -> Tuple[Tuple[Cell, ...], ...]:
        return tuple(tuple(r) for r in self.grid)

    def occupied_cells(self) -> Iterator[Tuple[int, int, str]]:
        for y, row in enumerate(self.grid):
            for x, c in enumerate(row):
                if c is not None:
                    yield x, y, c

    def __getitem__(self, y: int) -> List[Cell]:
        return self.grid[y]


def collide(board: Board, piece: Piece, dx: int = 0, dy: int = 0) -> bool:
    """True if the piece shifted by (dx, dy) hits a wall, the floor or a block.

    Cells above the top edge are not checked against the grid.
    """
    for bx, by in piece.cells(dx, dy):
        if bx < 0 or bx >= board.width or by >= board.height:
            return True
        if by >= 0 and board.grid[by][bx] is not None:
            return True
    return False
