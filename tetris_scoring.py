"""Row completion and connected-region bonus"""
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from tetris_board import Board
from tetris_config import LINE_SCORES, REGION_POINTS


@dataclass
class CompletedRow:
    y: int
    cells: List[Tuple[int, int, str]]


@dataclass
class Region:
    color: str
    cells: List[Tuple[int, int]]
    centroid: Tuple[float, float]
    bonus: int


@dataclass
class RegionResult:
    total: int = 0
    regions: List[Region] = field(default_factory=list)


def completed_rows(board: Board, rows: Iterable[int]) -> List[CompletedRow]:
    """Full rows among ``rows``. Rows stay on the board."""
    out = []
    for y in sorted(set(rows)):
        if 0 <= y < board.height and board.is_row_full(y):
            out.append(CompletedRow(y, [(x, y, board.grid[y][x]) for x in range(board.width)]))
    return out


def line_score(count: int) -> int:
    return LINE_SCORES[min(count, 4)] if count > 0 else 0


def connected_regions(board: Board) -> List[Tuple[str, List[Tuple[int, int]]]]:
    """Split occupied cells into 4-connected same-colour components."""
    seen = set()
    regions = []
    for y in range(board.height):
        for x in range(board.width):
            color = board.grid[y][x]
            if color is None or (x, y) in seen:
                continue
            seen.add((x, y))
            q = deque([(x, y)])
            cells = []
            while q:
                cx, cy = q.popleft()
                cells.append((cx, cy))
                for dx, dy in ((0, 1), (0, -1), (1, 0), (-1, 0)):
                    nx, ny = cx + dx, cy + dy
                    if 0 <= nx < board.width and 0 <= ny < board.height \
                            and (nx, ny) not in seen and board.grid[ny][nx] == color:
                        seen.add((nx, ny))
                        q.append((nx, ny))
            regions.append((color, cells))
    return regions


def region_bonus(board: Board, level: int) -> RegionResult:
    """Largest component per colour, worth size * REGION_POINTS * level."""
    best: Dict[str, List[Tuple[int, int]]] = {}
    for color, cells in connected_regions(board):
        if len(cells) > len(best.get(color, ())):
            best[color] = cells
    result = RegionResult()
    for color, cells in best.items():
        bonus = len(cells) * REGION_POINTS * level
        cx = sum(x for x, _ in cells) / len(cells)
        cy = sum(y for _, y in cells) / len(cells)
        result.regions.append(Region(color, cells, (cx, cy), bonus))
        result.total += bonus
    return result
