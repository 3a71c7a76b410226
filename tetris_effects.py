"""Particle bursts, row sweeps and region highlights.

Implements the engine's effects sink. Everything here is in pixel
coordinates relative to the board's top-left corner; ``cell`` is the
only thing it needs to know about the layout.
"""
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from tetris_scoring import CompletedRow, Region

SWEEP_MS = 450
REGION_GLOW_MS = 1600


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    color: str
    size: float
    decay: float
    life: float = 1.0


@dataclass
class RowSweep:
    y: int
    color: str
    age: float = 0.0

    @property
    def progress(self) -> float:
        return min(1.0, self.age / SWEEP_MS)


@dataclass
class RegionGlow:
    region: Region
    age: float = 0.0

    @property
    def alpha(self) -> float:
        return max(0.0, 1.0 - self.age / REGION_GLOW_MS)


class Effects:
    def __init__(self, cell: int, rng: Optional[random.Random] = None):
        self.cell = cell
        self.rng = rng or random.Random()
        self.particles: List[Particle] = []
        self.sweeps: List[RowSweep] = []
        self.glows: List[RegionGlow] = []

    @property
    def active(self) -> bool:
        return bool(self.particles or self.sweeps or self.glows)

    def burst(self, x: float, y: float, color: str, count: int = 8, spread: float = 4.0):
        r = self.rng
        for _ in range(count):
            self.particles.append(Particle(
                x=x + r.random() * self.cell,
                y=y + r.random() * self.cell,
                vx=(r.random() - 0.5) * spread,
                vy=(r.random() - 0.5) * spread,
                color=color,
                size=2 + r.random() * 3,
                decay=0.02 + r.random() * 0.02,
            ))

    # ---------- effects sink ----------
    def piece_locked(self, cells: Sequence[Tuple[int, int]], color: str):
        for bx, by in cells:
            self.burst(bx * self.cell, by * self.cell, color, 3)

    def rows_completed(self, rows: Sequence[CompletedRow]):
        for row in rows:
            self.sweeps.append(RowSweep(row.y, row.cells[0][2]))
            for bx, by, color in row.cells:
                self.burst(bx * self.cell, by * self.cell, color, 6)

    def level_completed(self, regions: Sequence[Region]):
        for region in regions:
            self.glows.append(RegionGlow(region))
            cx, cy = region.centroid
            self.burst(cx * self.cell, cy * self.cell, region.color,
                       min(60, 4 * len(region.cells)), spread=8.0)

    # ---------- animation ----------
    def update(self, dt: float):
        """Advance one frame. Particle motion is per frame, timers use ``dt`` ms."""
        alive = []
        for p in self.particles:
            p.x += p.vx
            p.y += p.vy
            p.vy += 0.1
            p.life -= p.decay
            if p.life > 0:
                alive.append(p)
        self.particles = alive
        for s in self.sweeps:
            s.age += dt
        self.sweeps = [s for s in self.sweeps if s.age < SWEEP_MS]
        for g in self.glows:
            g.age += dt
        self.glows = [g for g in self.glows if g.age < REGION_GLOW_MS]

    def clear(self):
        self.particles.clear()
        self.sweeps.clear()
        self.glows.clear()
