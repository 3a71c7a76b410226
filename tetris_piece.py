"""Piece catalog, piece model and the piece factory"""
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from tetris_config import COLS, PALETTE
from tetris_rng import LcgRandom

Shape = List[List[int]]

# 1- to 4-cell pieces; entries are never mutated, copy before rotating
SHAPES: Dict[str, Tuple[Tuple[int, ...], ...]] = {
    "DOT": ((1,),),
    "I2_H": ((1, 1),),
    "I2_V": ((1,), (1,)),
    "I3_H": ((1, 1, 1),),
    "I3_V": ((1,), (1,), (1,)),
    "L3": ((1, 0), (1, 1)),
    "J3": ((0, 1), (1, 1)),
    "I4": ((1, 1, 1, 1),),
    "O4": ((1, 1), (1, 1)),
    "T4": ((0, 1, 0), (1, 1, 1)),
    "S4": ((0, 1, 1), (1, 1, 0)),
    "Z4": ((1, 1, 0), (0, 1, 1)),
    "J4": ((1, 0, 0), (1, 1, 1)),
    "L4": ((0, 0, 1), (1, 1, 1)),
}
KINDS: List[str] = list(SHAPES)


class ConfigError(ValueError):
    """Raised when the piece catalog or palette cannot produce pieces."""


def copy_shape(shape: Sequence[Sequence[int]]) -> Shape:
    return [list(row) for row in shape]


def rotate_cw(m: Sequence[Sequence[int]]) -> Shape:
    """Rotate 90 degrees clockwise: new[c][rows-1-r] = old[r][c]."""
    return [list(row) for row in zip(*m[::-1])]


def spawn_x(shape: Sequence[Sequence[int]], cols: int = COLS) -> int:
    return cols // 2 - len(shape[0]) // 2


def block_count(shape: Sequence[Sequence[int]]) -> int:
    return sum(1 for row in shape for v in row if v)


@dataclass
class HeldPiece:
    kind: str
    shape: Shape
    color: str


@dataclass
class Piece:
    kind: str
    shape: Shape
    color: str
    x: int
    y: int
    # unrotated shape as spawned; None means "same as shape"
    base_shape: Optional[Shape] = None

    def __post_init__(self):
        assert self.shape and all(len(r) == len(self.shape[0]) for r in self.shape), \
            f"malformed shape for {self.kind}"
        if self.base_shape is None:
            self.base_shape = copy_shape(self.shape)

    @staticmethod
    def spawn(kind: str, color: str, shape: Optional[Sequence[Sequence[int]]] = None,
              cols: int = COLS) -> "Piece":
        s = copy_shape(SHAPES[kind] if shape is None else shape)
        return Piece(kind, s, color, spawn_x(s, cols), 0, copy_shape(s))

    @property
    def width(self) -> int:
        return len(self.shape[0])

    @property
    def height(self) -> int:
        return len(self.shape)

    def cells(self, dx: int = 0, dy: int = 0) -> Iterator[Tuple[int, int]]:
        """Absolute board coordinates of occupied cells, offset by (dx, dy)."""
        for r, row in enumerate(self.shape):
            for c, v in enumerate(row):
                if v:
                    yield self.x + dx + c, self.y + dy + r

    def canonical(self) -> HeldPiece:
        return HeldPiece(self.kind, copy_shape(self.base_shape), self.color)


class PieceFactory:
    """Creates pieces with a uniformly random kind and a level-scaled colour."""

    def __init__(self, rng: Optional[LcgRandom] = None, palette: Optional[Sequence[str]] = None,
                 catalog: Optional[Dict[str, Sequence[Sequence[int]]]] = None, cols: int = COLS):
        self.rng = rng if rng is not None else LcgRandom()
        self.palette = list(PALETTE if palette is None else palette)
        self.catalog = dict(SHAPES if catalog is None else catalog)
        self.cols = cols
        if not self.palette:
            raise ConfigError("palette is empty")
        if not self.catalog:
            raise ConfigError("piece catalog is empty")
        self.kinds = list(self.catalog)

    def colors_for_level(self, level: int) -> List[str]:
        return self.palette[:min(level + 1, len(self.palette))]

    def create(self, level: int) -> Piece:
        kind = self.rng.choice(self.kinds)
        color = self.rng.choice(self.colors_for_level(level))
        return Piece.spawn(kind, color, self.catalog[kind], self.cols)
