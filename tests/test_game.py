"""Game state machine and end-to-end scenarios"""
import pytest

from helpers import fill_around_active
from tetris_config import PALETTE
from tetris_game import Action, Game, GameState, GameStats
from tetris_piece import SHAPES, Piece, PieceFactory, copy_shape
from tetris_rng import LcgRandom

DOT_COLOR = PALETTE[0]


def put_dot(game, color=DOT_COLOR):
    game.controller.piece = Piece.spawn("DOT", color)
    return game.controller.piece


class TestStartAndReset:
    def test_new_game_is_idle(self, game, display):
        assert game.state is GameState.IDLE
        assert game.active_piece is None
        assert len(game.next_pieces()) == 3
        assert (display.score, display.level, display.lines) == (0, 1, 0)

    def test_start_spawns_first_piece(self, game, sound):
        assert game.start()
        assert game.state is GameState.RUNNING
        assert game.active_piece is not None
        assert game.active_piece.y == 0
        assert game.can_hold
        assert sound.music

    def test_start_twice_is_ignored(self, game):
        game.start()
        assert not game.start()

    def test_first_piece_comes_from_queue_front(self, game):
        front = game.next_pieces()[0]
        game.start()
        assert game.active_piece is front
        assert len(game.next_pieces()) == 3

    def test_reset_zeroes_everything(self, game, sound):
        game.start()
        game.handle_input(Action.HARD_DROP)
        game.hold()
        game.handle_input(Action.RESET)
        assert game.state is GameState.IDLE
        assert game.stats == GameStats()
        assert list(game.board.occupied_cells()) == []
        assert game.active_piece is None
        assert game.held_piece is None
        assert len(game.next_pieces()) == 3
        assert not sound.music

    def test_drop_interval(self, game):
        assert game.drop_interval == 1000


class TestPause:
    def test_toggle(self, game, display):
        game.start()
        assert game.handle_input(Action.TOGGLE_PAUSE)
        assert game.state is GameState.PAUSED
        assert display.overlay[0] == "Paused"
        assert game.handle_input(Action.TOGGLE_PAUSE)
        assert game.state is GameState.RUNNING
        assert display.overlay is None

    def test_paused_game_ignores_moves_and_gravity(self, game):
        game.start()
        piece = game.active_piece
        pos = (piece.x, piece.y)
        game.toggle_pause()
        assert not game.handle_input(Action.MOVE_LEFT)
        assert not game.handle_input(Action.HARD_DROP)
        game.tick(5000)
        assert (piece.x, piece.y) == pos
        assert game.stats.pieces_dropped == 0

    def test_pause_in_idle_is_ignored(self, game):
        assert not game.handle_input(Action.TOGGLE_PAUSE)
        assert game.state is GameState.IDLE


class TestGravity:
    def test_tick_below_interval_does_nothing(self, game):
        game.start()
        game.tick(999)
        assert game.active_piece.y == 0

    def test_tick_moves_piece_down(self, game):
        game.start()
        game.tick(1000)
        assert game.active_piece.y == 1
        assert game.drop_timer == 0

    def test_grounded_piece_locks_on_tick(self, game):
        game.start()
        piece = put_dot(game)
        piece.y = 19
        game.tick(1000)
        assert game.board.is_occupied(piece.x, 19) == DOT_COLOR
        assert game.stats.pieces_dropped == 1
        assert game.active_piece is not piece

    def test_elapsed_time(self, game):
        game.start()
        game.tick(500)
        game.tick(1500)
        assert game.stats.elapsed_ms == 2000
        assert game.stats.time_text == "00:02"


class TestInput:
    def test_moves(self, game, sound):
        game.start()
        piece = put_dot(game)
        assert game.handle_input(Action.MOVE_LEFT)
        assert game.handle_input(Action.MOVE_RIGHT)
        assert game.handle_input(Action.SOFT_DROP)
        assert (piece.x, piece.y) == (5, 1)
        assert sound.tones[-1] == (196, 0.05, "square", 0.1)

    def test_blocked_move_returns_false(self, game):
        game.start()
        piece = put_dot(game)
        piece.x = 0
        assert not game.handle_input(Action.MOVE_LEFT)
        assert piece.x == 0

    def test_rotate(self, game):
        game.start()
        game.controller.piece = Piece.spawn("I2_H", DOT_COLOR)
        assert game.handle_input(Action.ROTATE)
        assert game.active_piece.shape == [[1], [1]]

    def test_continue_outside_level_break_is_ignored(self, game):
        game.start()
        assert not game.handle_input(Action.CONTINUE_AFTER_LEVEL)
        assert game.state is GameState.RUNNING


class TestHold:
    def test_hold_flow(self, game, sound):
        game.start()
        first = game.active_piece
        front = game.next_pieces()[0]
        game.controller.rotate()
        assert game.handle_input(Action.HOLD)
        assert game.held_piece.kind == first.kind
        assert game.held_piece.shape == copy_shape(SHAPES[first.kind])
        assert game.active_piece is front
        assert not game.can_hold
        assert sound.tones[-1] == (294, 0.1, "triangle", 0.15)

    def test_second_hold_before_spawn_is_noop(self, game):
        game.start()
        game.hold()
        held, active = game.held_piece, game.active_piece
        assert not game.hold()
        assert game.held_piece is held
        assert game.active_piece is active

    def test_hold_rearms_after_spawn_and_swaps(self, game):
        game.start()
        first = game.active_piece
        game.hold()
        second = game.active_piece
        game.handle_input(Action.HARD_DROP)
        assert game.can_hold
        third = game.active_piece
        assert game.hold()
        assert game.active_piece.kind == first.kind
        assert game.active_piece.y == 0
        assert game.active_piece.x == 5 - len(SHAPES[first.kind][0]) // 2
        assert game.held_piece.kind == third.kind
        assert second is not third

    def test_hold_does_not_score(self, game):
        game.start()
        game.hold()
        assert game.stats.score == 0

    @pytest.mark.parametrize("kind, shape", [("BAR", ((1, 1, 1),)), ("DOT", ((1, 1),))])
    def test_hold_keeps_custom_catalog_shape(self, kind, shape):
        factory = PieceFactory(LcgRandom(1), catalog={kind: shape})
        game = Game(seed=1, factory=factory)
        game.start()
        assert game.handle_input(Action.HOLD)
        assert game.held_piece.shape == copy_shape(shape)
        game.handle_input(Action.HARD_DROP)
        assert game.hold()
        assert game.active_piece.shape == copy_shape(shape)

    def test_hold_rejected_when_held_spawn_is_blocked(self, game, sound):
        game.start()
        game.hold()
        game.handle_input(Action.HARD_DROP)
        assert game.can_hold
        active = game.active_piece
        active.y = 10
        x = active.x
        held = game.held_piece
        for cx, cy in game.hold_slot.peek_swap().cells():
            game.board.set(cx, cy, PALETTE[0])
        tones = len(sound.tones)
        assert not game.hold()
        assert game.active_piece is active
        assert (active.x, active.y) == (x, 10)
        assert game.held_piece is held
        assert game.can_hold
        assert len(sound.tones) == tones


class TestScoringFlow:
    def test_drop_dot_to_bottom_left(self, game, effects):
        """Dropping a DOT at column 0 on an empty board."""
        game.start()
        put_dot(game)
        for _ in range(5):
            assert game.handle_input(Action.MOVE_LEFT)
        assert game.active_piece.x == 0
        game.handle_input(Action.HARD_DROP)
        assert game.board[19][0] == DOT_COLOR
        assert game.stats.pieces_dropped == 1
        # 19 cells of hard drop + small-piece bonus
        assert game.stats.score == 19 * 2 + 4
        assert effects.locked == [([(0, 19)], DOT_COLOR)]
        assert game.state is GameState.RUNNING

    def test_completing_a_row(self, game, sound, display, effects):
        game.start()
        for x in range(1, 10):
            game.board.set(x, 19, PALETTE[1])
        put_dot(game).x = 0
        game.handle_input(Action.HARD_DROP)
        assert game.stats.lines_cleared == 1
        assert game.stats.score == 19 * 2 + 4 + 10
        assert display.score == game.stats.score
        assert display.lines == 1
        assert (440, 0.3, "triangle", 0.25) in sound.tones
        assert [r.y for r in effects.rows] == [19]
        assert game.board.is_row_full(19)
        assert game.stats.level_scores[0] == game.stats.score


class TestLevelCompletion:
    def test_full_board_completes_level_once(self, game, effects, display):
        game.start()
        fill_around_active(game)
        game.handle_input(Action.HARD_DROP)
        assert game.state is GameState.WAITING_FOR_CONTINUE
        assert game.stats.level == 2
        assert game.stats.levels_completed == 1
        assert game.active_piece is None
        assert sum(r.bonus for r in game.last_regions) == 200 * 20
        assert game.stats.score >= 200 * 20
        assert effects.regions == game.last_regions
        assert display.overlay[0] == "Level 1 Complete!"
        assert game.drop_interval == 960
        assert display.level == 2

    def test_waiting_ignores_gravity(self, game):
        game.start()
        fill_around_active(game)
        game.handle_input(Action.HARD_DROP)
        game.tick(5000)
        assert game.stats.levels_completed == 1

    def test_any_key_continues(self, game, display):
        game.start()
        fill_around_active(game)
        game.handle_input(Action.HARD_DROP)
        assert game.handle_input(Action.MOVE_LEFT)
        assert game.state is GameState.RUNNING
        assert list(game.board.occupied_cells()) == []
        assert game.active_piece is not None
        assert len(game.next_pieces()) == 3
        assert display.overlay is None

    def test_spawn_colours_follow_new_level(self, game):
        game.start()
        fill_around_active(game)
        game.handle_input(Action.HARD_DROP)
        game.continue_level()
        for p in game.next_pieces():
            assert p.color in PALETTE[:3]

    def test_last_level_ends_the_game(self, game, sound, display):
        game.start()
        game.stats.level = 5
        fill_around_active(game)
        game.handle_input(Action.HARD_DROP)
        assert game.state is GameState.GAME_OVER
        assert game.stats.level == 6
        assert game.stats.completed
        assert display.overlay[0] == "Game Complete"
        assert not sound.music
        assert sum(r.bonus for r in game.last_regions) == 200 * 20 * 5
        assert game.stats.level_scores[4] >= 200 * 20 * 5

    def test_game_over_ignores_play_and_restarts(self, game):
        game.start()
        game.stats.level = 5
        fill_around_active(game)
        game.handle_input(Action.HARD_DROP)
        assert not game.handle_input(Action.ROTATE)
        assert game.handle_input(Action.START)
        assert game.state is GameState.RUNNING
        assert game.stats.level == 1
        assert game.stats.score == 0


def test_same_seed_same_game():
    a, b = Game(seed=42), Game(seed=42)
    a.start(); b.start()
    for _ in range(10):
        assert (a.active_piece.kind, a.active_piece.color) == (b.active_piece.kind, b.active_piece.color)
        a.handle_input(Action.HARD_DROP)
        b.handle_input(Action.HARD_DROP)
        if a.state is not GameState.RUNNING:
            break
    assert a.stats == b.stats
