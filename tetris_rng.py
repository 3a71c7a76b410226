"""Seedable LCG random source"""
import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class LcgRandom:
    """32-bit linear congruential generator.

    Piece kind and colour are drawn from here so a game can be replayed
    exactly from its seed. Without a seed one is taken from the system
    generator.
    """

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = random.getrandbits(32)
        self.seed = seed & 0xFFFFFFFF
        self.state = self.seed

    def _lcg_next(self) -> int:
        self.state = (self.state * 0x41C64E6D + 0x3039) & 0xFFFFFFFF
        return self.state

    def _rand(self) -> int:
        """15-bit value from the high bits of the state."""
        return (self._lcg_next() >> 16) & 0x7FFF

    def randbelow(self, n: int) -> int:
        if not 0 < n <= 0x8000:
            raise ValueError("randbelow() bound must be in 1..32768")
        # reject the biased tail so every index is equally likely
        limit = 0x8000 - (0x8000 % n)
        while True:
            v = self._rand()
            if v < limit:
                return v % n

    def choice(self, seq: Sequence[T]) -> T:
        return seq[self.randbelow(len(seq))]
