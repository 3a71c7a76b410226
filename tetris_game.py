"""Game state machine.

Owns the board, the active piece, the queue and hold slot, and the
session statistics. Presentation is injected: a sound sink, a display
sink and an effects sink (see the Protocol classes below). None of this
module touches pygame, so the whole engine runs headless.

State flow::

    IDLE --start--> RUNNING <--pause--> PAUSED
    RUNNING --spawn blocked--> WAITING_FOR_CONTINUE --any key--> RUNNING
    RUNNING --spawn blocked on the last level--> GAME_OVER
    any --reset--> IDLE

Rows are never removed, so the board always fills up eventually; a
blocked spawn is the level-complete trigger, not a loss.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Protocol, Sequence, Tuple

from tetris_board import Board, collide
from tetris_config import (CONFIG, HARD_DROP_PER_CELL, MAX_LEVEL, SMALL_PIECE_BONUS_BASE,
                           SOUNDS, drop_interval, line_clear_tone)
from tetris_controller import PieceController
from tetris_piece import HeldPiece, Piece, PieceFactory
from tetris_queue import HoldSlot, PieceQueue
from tetris_rng import LcgRandom
from tetris_scoring import CompletedRow, Region, completed_rows, line_score, region_bonus

log = logging.getLogger(__name__)


class GameState(Enum):
    IDLE = auto()
    RUNNING = auto()
    PAUSED = auto()
    WAITING_FOR_CONTINUE = auto()
    GAME_OVER = auto()


class Action(Enum):
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    SOFT_DROP = auto()
    ROTATE = auto()
    HARD_DROP = auto()
    HOLD = auto()
    TOGGLE_PAUSE = auto()
    CONTINUE_AFTER_LEVEL = auto()
    START = auto()
    RESET = auto()


class SoundSink(Protocol):
    def play_tone(self, frequency: float, duration: float, waveform: str, volume: float) -> None: ...
    def start_music(self) -> None: ...
    def stop_music(self) -> None: ...


class DisplaySink(Protocol):
    def show_score(self, n: int) -> None: ...
    def show_level(self, n: int) -> None: ...
    def show_lines(self, n: int) -> None: ...
    def show_overlay(self, title: str, message: str) -> None: ...
    def hide_overlay(self) -> None: ...


class EffectsSink(Protocol):
    def piece_locked(self, cells: Sequence[Tuple[int, int]], color: str) -> None: ...
    def rows_completed(self, rows: Sequence[CompletedRow]) -> None: ...
    def level_completed(self, regions: Sequence[Region]) -> None: ...


class NullSound:
    def play_tone(self, frequency, duration, waveform, volume): pass
    def start_music(self): pass
    def stop_music(self): pass


class NullDisplay:
    def show_score(self, n): pass
    def show_level(self, n): pass
    def show_lines(self, n): pass
    def show_overlay(self, title, message): pass
    def hide_overlay(self): pass


class NullEffects:
    def piece_locked(self, cells, color): pass
    def rows_completed(self, rows): pass
    def level_completed(self, regions): pass


@dataclass
class GameStats:
    score: int = 0
    level: int = 1
    lines_cleared: int = 0
    pieces_dropped: int = 0
    levels_completed: int = 0
    elapsed_ms: float = 0.0
    level_scores: List[int] = field(default_factory=lambda: [0] * MAX_LEVEL)

    @property
    def completed(self) -> bool:
        return self.level > MAX_LEVEL

    @property
    def pieces_per_second(self) -> float:
        if self.elapsed_ms <= 0:
            return 0.0
        return self.pieces_dropped / (self.elapsed_ms / 1000.0)

    @property
    def time_text(self) -> str:
        secs = int(self.elapsed_ms // 1000)
        return f"{secs // 60:02d}:{secs % 60:02d}"


class Game:
    def __init__(self, seed: Optional[int] = None, sound: Optional[SoundSink] = None,
                 display: Optional[DisplaySink] = None, effects: Optional[EffectsSink] = None,
                 factory: Optional[PieceFactory] = None):
        self.sound = sound or NullSound()
        self.display = display or NullDisplay()
        self.effects = effects or NullEffects()
        self.rng = LcgRandom(CONFIG["SEED"] if seed is None else seed)
        self.factory = factory or PieceFactory(self.rng)
        self.board = Board()
        self.controller = PieceController(self.board)
        self.hold_slot = HoldSlot(self.board.width)
        self.stats = GameStats()
        self.queue = PieceQueue(self.factory, self.stats.level)
        self.state = GameState.IDLE
        self.drop_interval = drop_interval(self.stats.level)
        self.drop_timer = 0.0
        self.last_rows: List[CompletedRow] = []
        self.last_regions: List[Region] = []
        self._update_display()

    # ---------- read-only views ----------
    @property
    def active_piece(self) -> Optional[Piece]:
        return self.controller.piece

    @property
    def held_piece(self) -> Optional[HeldPiece]:
        return self.hold_slot.held

    @property
    def can_hold(self) -> bool:
        return self.hold_slot.can_hold

    def next_pieces(self) -> Tuple[Piece, ...]:
        return self.queue.peek()

    def ghost_y(self) -> Optional[int]:
        return self.controller.ghost_y()

    # ---------- transitions ----------
    def start(self) -> bool:
        if self.state is GameState.GAME_OVER:
            self.reset()
        if self.state is not GameState.IDLE:
            return False
        log.info("game started (seed %d)", self.rng.seed)
        self.state = GameState.RUNNING
        self.drop_timer = 0.0
        self.display.hide_overlay()
        self._play("start")
        self.sound.start_music()
        self._spawn_next()
        return True

    def reset(self):
        log.info("game reset")
        self.state = GameState.IDLE
        self.stats = GameStats()
        self.board.clear()
        self.controller.piece = None
        self.hold_slot.clear()
        self.queue.regenerate(self.stats.level)
        self.drop_interval = drop_interval(self.stats.level)
        self.drop_timer = 0.0
        self.last_rows = []
        self.last_regions = []
        self.sound.stop_music()
        self.display.hide_overlay()
        self._update_display()

    def toggle_pause(self) -> bool:
        if self.state is GameState.RUNNING:
            self.state = GameState.PAUSED
            self.display.show_overlay("Paused", "Press P to resume")
        elif self.state is GameState.PAUSED:
            self.state = GameState.RUNNING
            self.display.hide_overlay()
        else:
            return False
        log.info("pause toggled: %s", self.state.name)
        return True

    def continue_level(self) -> bool:
        if self.state is not GameState.WAITING_FOR_CONTINUE:
            return False
        log.info("starting level %d", self.stats.level)
        self.board.clear()
        self.queue.regenerate(self.stats.level)
        self.hold_slot.reset_turn()
        self.drop_timer = 0.0
        self.state = GameState.RUNNING
        self.display.hide_overlay()
        self._spawn_next()
        return True

    def handle_input(self, action: Action) -> bool:
        """Apply one player action; returns False if it was ignored or rejected."""
        if action is Action.RESET:
            self.reset()
            return True
        if self.state is GameState.WAITING_FOR_CONTINUE:
            return self.continue_level()
        if action is Action.START:
            return self.start()
        if action is Action.TOGGLE_PAUSE:
            return self.toggle_pause()
        if self.state is not GameState.RUNNING or self.controller.piece is None:
            log.debug("ignored %s in %s", action.name, self.state.name)
            return False
        if action is Action.MOVE_LEFT:
            return self._move(-1, 0, "move")
        if action is Action.MOVE_RIGHT:
            return self._move(1, 0, "move")
        if action is Action.SOFT_DROP:
            return self._move(0, 1, "soft_drop")
        if action is Action.ROTATE:
            if self.controller.rotate():
                self._play("rotate")
                return True
            return False
        if action is Action.HARD_DROP:
            self._hard_drop()
            return True
        if action is Action.HOLD:
            return self.hold()
        return False

    def tick(self, dt_ms: float):
        """Advance gravity by ``dt_ms`` milliseconds."""
        if self.state is not GameState.RUNNING:
            return
        self.stats.elapsed_ms += dt_ms
        self.drop_timer += dt_ms
        if self.drop_timer >= self.drop_interval:
            if not self.controller.move(0, 1):
                self._lock_active()
            self.drop_timer = 0.0

    def hold(self) -> bool:
        active = self.controller.piece
        if active is None or not self.hold_slot.can_hold:
            return False
        incoming = self.hold_slot.peek_swap()
        if incoming is not None and collide(self.board, incoming):
            return False
        self._play("hold")
        swapped = self.hold_slot.swap(active)
        if swapped is None:
            self.controller.piece = None
            self._spawn_next()
        else:
            self.controller.piece = swapped
        self.hold_slot.can_hold = False
        return True

    # ---------- internals ----------
    def _play(self, name: str):
        self.sound.play_tone(*SOUNDS[name])

    def _add_score(self, points: int):
        if points <= 0:
            return
        self.stats.score += points
        self.stats.level_scores[min(self.stats.level, MAX_LEVEL) - 1] += points

    def _update_display(self):
        self.display.show_score(self.stats.score)
        self.display.show_level(self.stats.level)
        self.display.show_lines(self.stats.lines_cleared)

    def _move(self, dx: int, dy: int, sound: str) -> bool:
        if self.controller.move(dx, dy):
            self._play(sound)
            return True
        return False

    def _hard_drop(self):
        dist = self.controller.hard_drop()
        self._add_score(dist * HARD_DROP_PER_CELL)
        self._play("hard_drop")
        self._lock_active()

    def _lock_active(self):
        res = self.controller.lock()
        self.stats.pieces_dropped += 1
        # smaller pieces are harder to place well
        self._add_score(max(0, SMALL_PIECE_BONUS_BASE - res.blocks))
        self._play("lock")
        self.effects.piece_locked(res.cells, res.color)
        rows = completed_rows(self.board, res.rows)
        self.last_rows = rows
        if rows:
            self.stats.lines_cleared += len(rows)
            self._add_score(line_score(len(rows)))
            self.sound.play_tone(*line_clear_tone(len(rows)))
            self.effects.rows_completed(rows)
            log.debug("completed rows %s", [r.y for r in rows])
        self._update_display()
        self._spawn_next()

    def _spawn_next(self) -> bool:
        piece = self.queue.advance(self.stats.level)
        if collide(self.board, piece):
            self._complete_level()
            return False
        self.controller.piece = piece
        self.hold_slot.reset_turn()
        log.debug("spawned %s at x=%d", piece.kind, piece.x)
        return True

    def _complete_level(self):
        self.controller.piece = None
        finished = self.stats.level
        result = region_bonus(self.board, finished)
        self._add_score(result.total)
        self.last_regions = result.regions
        self.effects.level_completed(result.regions)
        self.stats.levels_completed += 1
        self.stats.level += 1
        log.info("level %d complete, region bonus %d", finished, result.total)
        if self.stats.level > MAX_LEVEL:
            self.state = GameState.GAME_OVER
            self._play("game_over")
            self.sound.stop_music()
            self.display.show_overlay(
                "Game Complete", f"Final Score: {self.stats.score:,} | Press SPACE to restart")
            log.info("all levels complete, final score %d", self.stats.score)
        else:
            self.state = GameState.WAITING_FOR_CONTINUE
            self.drop_interval = drop_interval(self.stats.level)
            self._play("level_up")
            self.display.show_overlay(
                f"Level {finished} Complete!",
                f"Region bonus: {result.total:,} | Press any key to continue")
        self._update_display()
