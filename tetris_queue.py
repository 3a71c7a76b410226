"""Lookahead queue and hold slot"""
from collections import deque
from typing import Deque, Optional, Tuple

from tetris_config import COLS, QUEUE_SIZE
from tetris_piece import HeldPiece, Piece, PieceFactory


class PieceQueue:
    """Always holds exactly ``size`` upcoming pieces."""

    def __init__(self, factory: PieceFactory, level: int = 1, size: int = QUEUE_SIZE):
        self.factory = factory
        self.size = size
        self._items: Deque[Piece] = deque()
        self.regenerate(level)

    def regenerate(self, level: int):
        self._items = deque(self.factory.create(level) for _ in range(self.size))

    def peek(self) -> Tuple[Piece, ...]:
        return tuple(self._items)

    def advance(self, level: int) -> Piece:
        nxt = self.factory.create(level)
        piece = self._items.popleft()
        self._items.append(nxt)
        assert len(self._items) == self.size, "queue lost its length"
        return piece

    def __len__(self):
        return len(self._items)


class HoldSlot:
    def __init__(self, cols: int = COLS):
        self.cols = cols
        self.held: Optional[HeldPiece] = None
        self.can_hold = True

    def reset_turn(self):
        self.can_hold = True

    def clear(self):
        self.held = None
        self.can_hold = True

    def swap(self, active: Piece) -> Optional[Piece]:
        """Store ``active`` and return the previously held piece, freshly spawned.

        Returns None when the slot was empty; the caller then spawns from
        the queue.
        """
        prev = self.held
        self.held = active.canonical()
        if prev is None:
            return None
        return Piece.spawn(prev.kind, prev.color, prev.shape, self.cols)

    def peek_swap(self) -> Optional[Piece]:
        """The piece a swap would spawn, without touching the slot."""
        if self.held is None:
            return None
        return Piece.spawn(self.held.kind, self.held.color, self.held.shape, self.cols)
