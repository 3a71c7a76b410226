"""
Rendering helpers for the game window.

- Pre-render bevelled cell Surfaces per colour & size and blit them.
- Pre-render the static background (grid + panel frames) when Dims change.
- Cache a BOARD SURFACE with all *locked* blocks; rebuild it only when the
  board's revision changes.
- Cache HUD text surfaces; re-render only when the display sink says so.
"""
from __future__ import annotations
import pygame
from typing import Dict, List, Optional, Sequence, Tuple
from tetris_config import COLS, ROWS
from tetris_effects import Effects
from tetris_layout import Dims, PREVIEW_CELLS
from tetris_overlay import PanelDisplay

BG = (10, 13, 34)
GRID = (40, 50, 90)
PANEL = (21, 25, 53)
FRAME = (50, 60, 100)
TEXT = (200, 210, 240)
DIM_TEXT = (165, 175, 215)


def make_block(color: str, size: int) -> pygame.Surface:
    """Solid cell with a light top/left edge and a dark bottom/right edge."""
    s = pygame.Surface((size, size), pygame.SRCALPHA)
    s.fill(pygame.Color(color))
    hi = pygame.Surface((size, 2), pygame.SRCALPHA); hi.fill((255, 255, 255, 77))
    s.blit(hi, (0, 0)); s.blit(pygame.transform.rotate(hi, 90), (0, 0))
    lo = pygame.Surface((size, 2), pygame.SRCALPHA); lo.fill((0, 0, 0, 77))
    s.blit(lo, (0, size - 2)); s.blit(pygame.transform.rotate(lo, 90), (size - 2, 0))
    pygame.draw.rect(s, (255, 255, 255, 26), (0, 0, size, size), 1)
    return s


class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font, big_font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self.big_font = big_font
        self._blocks: Dict[Tuple[str, int], pygame.Surface] = {}
        self._make_static()
        self.ghost = pygame.Surface((dims.cell, dims.cell), pygame.SRCALPHA)
        self.ghost.fill((255, 255, 255, 26))
        pygame.draw.rect(self.ghost, (255, 255, 255, 77), (0, 0, dims.cell, dims.cell), 1)
        self.board_surface = pygame.Surface((dims.board_w, dims.board_h), pygame.SRCALPHA)
        self.board_revision = -1
        self.hud: List[pygame.Surface] = []
        self.board_rect = pygame.Rect(dims.board_x, dims.board_y, dims.board_w, dims.board_h)

    def block(self, color: str, size: int) -> pygame.Surface:
        key = (color, size)
        if key not in self._blocks:
            self._blocks[key] = make_block(color, size)
        return self._blocks[key]

    # ---------- Static background (grid + panels) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill(BG)
        pygame.draw.rect(self.bg, (0, 0, 0), (d.board_x, d.board_y, d.board_w, d.board_h))
        for x in range(COLS + 1):
            X = d.board_x + x * d.cell
            pygame.draw.line(self.bg, GRID, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(ROWS + 1):
            Y = d.board_y + y * d.cell
            pygame.draw.line(self.bg, GRID, (d.board_x, Y), (d.board_x + d.board_w, Y))
        # Hold box (left), next boxes (right)
        self.hold_rect = pygame.Rect(d.margin, d.hold_y, d.box, d.box)
        self.next_rects = [pygame.Rect(d.panel_x, d.next_y + i * (d.box + 8), d.box, d.box)
                           for i in range(len(PREVIEW_CELLS))]
        for r in [self.hold_rect] + self.next_rects:
            pygame.draw.rect(self.bg, PANEL, r)
            pygame.draw.rect(self.bg, FRAME, r, 1)
        self.bg.blit(self.font.render("Hold (C)", True, TEXT), (d.margin, d.margin))
        self.bg.blit(self.font.render("Next", True, TEXT), (d.panel_x, d.margin))

    # ---------- Board surface cache ----------
    def rebuild_board_surface(self, board):
        self.board_surface.fill((0, 0, 0, 0))
        c = self.dims.cell
        for x, y, color in board.occupied_cells():
            self.board_surface.blit(self.block(color, c), (x * c, y * c))
        self.board_revision = board.revision

    def cell_pos(self, bx: int, by: int) -> Tuple[int, int]:
        return self.dims.board_x + bx * self.dims.cell, self.dims.board_y + by * self.dims.cell

    # ---------- Previews ----------
    def draw_preview(self, screen: pygame.Surface, rect: pygame.Rect, shape, color: str, size: int):
        rows, cols = len(shape), len(shape[0])
        sx = rect.x + (rect.w - cols * size) // 2
        sy = rect.y + (rect.h - rows * size) // 2
        blk = self.block(color, size)
        for y, row in enumerate(shape):
            for x, v in enumerate(row):
                if v:
                    screen.blit(blk, (sx + x * size, sy + y * size))

    # ---------- HUD ----------
    def draw_hud(self, screen: pygame.Surface, display: PanelDisplay, stats):
        d = self.dims
        if display.dirty or not self.hud:
            self.hud = [self.font.render(t, True, TEXT) for t in (
                f"Score: {display.score:,}", f"Level: {display.level}", f"Lines: {display.lines}")]
            display.dirty = False
        y = self.hold_rect.bottom + 24
        for s in self.hud:
            screen.blit(s, (d.margin, y)); y += 24
        for t in (f"Time: {stats.time_text}", f"Pieces/s: {stats.pieces_per_second:.1f}"):
            screen.blit(self.font.render(t, True, DIM_TEXT), (d.margin, y)); y += 24
        y += 12
        for t in ("Left/Right Move", "Down Soft drop", "Up Rotate", "Space Hard drop",
                  "C Hold  P Pause", "R Reset  F1 Settings"):
            screen.blit(self.font.render(t, True, DIM_TEXT), (d.margin, y)); y += 20

    # ---------- Effects ----------
    def draw_effects(self, screen: pygame.Surface, effects: Effects):
        d = self.dims
        for g in effects.glows:
            col = pygame.Color(g.region.color)
            s = pygame.Surface((d.cell, d.cell), pygame.SRCALPHA)
            s.fill((255, 255, 255, int(120 * g.alpha)))
            pygame.draw.rect(s, (col.r, col.g, col.b, int(255 * g.alpha)), (0, 0, d.cell, d.cell), 2)
            for bx, by in g.region.cells:
                screen.blit(s, self.cell_pos(bx, by))
        for sw in effects.sweeps:
            w = int(d.board_w * sw.progress)
            s = pygame.Surface((max(1, w), d.cell), pygame.SRCALPHA)
            s.fill((255, 255, 255, int(160 * (1 - sw.progress))))
            screen.blit(s, (d.board_x, d.board_y + sw.y * d.cell))
        for p in effects.particles:
            col = pygame.Color(p.color)
            col.a = max(0, min(255, int(255 * p.life)))
            r = max(1, int(p.size))
            s = pygame.Surface((r * 2, r * 2), pygame.SRCALPHA)
            pygame.draw.circle(s, col, (r, r), r)
            screen.blit(s, (d.board_x + p.x - r, d.board_y + p.y - r))

    # ---------- Frame ----------
    def draw(self, screen: pygame.Surface, game, display: PanelDisplay, effects: Effects):
        d = self.dims
        screen.blit(self.bg, (0, 0))
        if game.board.revision != self.board_revision:
            self.rebuild_board_surface(game.board)
        screen.blit(self.board_surface, (d.board_x, d.board_y))

        piece = game.active_piece
        if piece is not None:
            gy = game.ghost_y()
            for bx, by in piece.cells(0, gy - piece.y):
                if by >= 0:
                    screen.blit(self.ghost, self.cell_pos(bx, by))
            blk = self.block(piece.color, d.cell)
            for bx, by in piece.cells():
                if by >= 0:
                    screen.blit(blk, self.cell_pos(bx, by))

        for rect, size, p in zip(self.next_rects, PREVIEW_CELLS, game.next_pieces()):
            self.draw_preview(screen, rect, p.shape, p.color, size)
        held = game.held_piece
        if held is not None:
            self.draw_preview(screen, self.hold_rect, held.shape, held.color, PREVIEW_CELLS[0])

        self.draw_hud(screen, display, game.stats)
        self.draw_effects(screen, effects)
        display.draw_message(screen, self.font, self.big_font, self.board_rect)
