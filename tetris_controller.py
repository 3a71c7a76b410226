"""Active piece movement, rotation with wall kicks, hard drop and lock"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from tetris_board import Board, collide
from tetris_piece import Piece, block_count, rotate_cw

# Tried in order; no per-shape tables.
KICKS: List[Tuple[int, int]] = [(0, 0), (-1, 0), (1, 0), (0, -1), (-1, -1), (1, -1)]


@dataclass
class LockResult:
    color: str
    cells: List[Tuple[int, int]] = field(default_factory=list)
    rows: List[int] = field(default_factory=list)
    blocks: int = 0


class PieceController:
    def __init__(self, board: Board):
        self.board = board
        self.piece: Optional[Piece] = None

    def collides(self, dx: int = 0, dy: int = 0) -> bool:
        return self.piece is None or collide(self.board, self.piece, dx, dy)

    def move(self, dx: int, dy: int) -> bool:
        if self.collides(dx, dy):
            return False
        self.piece.x += dx
        self.piece.y += dy
        return True

    def rotate(self) -> bool:
        """Rotate clockwise, trying each kick offset; leave the piece untouched if none fit."""
        if self.piece is None:
            return False
        p = self.piece
        test = Piece(p.kind, rotate_cw(p.shape), p.color, p.x, p.y)
        for dx, dy in KICKS:
            if not collide(self.board, test, dx, dy):
                p.shape = test.shape
                p.x += dx
                p.y += dy
                return True
        return False

    def hard_drop_distance(self) -> int:
        if self.piece is None:
            return 0
        d = 0
        while not collide(self.board, self.piece, 0, d + 1):
            d += 1
        return d

    def ghost_y(self) -> Optional[int]:
        if self.piece is None:
            return None
        return self.piece.y + self.hard_drop_distance()

    def hard_drop(self) -> int:
        d = self.hard_drop_distance()
        if self.piece is not None:
            self.piece.y += d
        return d

    def lock(self) -> LockResult:
        """Copy the piece into the board. Cells above the top edge are lost."""
        p = self.piece
        assert p is not None, "lock() without an active piece"
        res = LockResult(p.color, blocks=block_count(p.shape))
        for bx, by in p.cells():
            if by >= 0:
                self.board.set(bx, by, p.color)
                res.cells.append((bx, by))
        res.rows = sorted({y for _, y in res.cells})
        self.piece = None
        return res
