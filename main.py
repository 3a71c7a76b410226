import logging
import sys

import pygame

from tetris_audio import ChipAudio
from tetris_config import CONFIG
from tetris_effects import Effects
from tetris_game import Action, Game, GameState
from tetris_input import REPEAT_KEYS, ShiftRepeat, action_for_key
from tetris_layout import compute_dims
from tetris_overlay import ConfigOverlay, PanelDisplay
from tetris_render import RenderAssets

log = logging.getLogger(__name__)


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except (TypeError, pygame.error):
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main():
    logging.basicConfig(level=CONFIG["LOG_LEVEL"],
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.KEYUP])

    dims = compute_dims()
    screen = recreate_window(dims)
    pygame.display.set_caption("Tetris Levels")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 42)

    render = RenderAssets(dims, font, big_font)
    clock = pygame.time.Clock()

    display = PanelDisplay()
    effects = Effects(dims.cell)
    audio = ChipAudio()
    game = Game(sound=audio, display=display, effects=effects)

    shift = ShiftRepeat()
    soft = ShiftRepeat("DAS_MS", "SOFT_DROP_ARR_MS")
    overlay = ConfigOverlay()

    def refresh_assets_if_cell_changed():
        nonlocal dims, screen, render
        new_dims = compute_dims()
        if new_dims.cell != dims.cell:
            dims = new_dims
            screen = recreate_window(dims)
            render = RenderAssets(dims, font, big_font)
            effects.cell = dims.cell
            effects.clear()

    while True:
        dt = clock.tick(60)

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                audio.stop_music()
                pygame.quit(); sys.exit()
            if e.type != pygame.KEYDOWN:
                continue
            if e.key == pygame.K_F1:
                overlay.toggle(); continue
            if overlay.active:
                overlay.handle(e); continue
            if e.key in REPEAT_KEYS and game.state is GameState.RUNNING:
                continue
            action = action_for_key(e.key, game.state)
            if action is not None:
                game.handle_input(action)
                if action in (Action.CONTINUE_AFTER_LEVEL, Action.START, Action.RESET):
                    shift.reset(); soft.reset()

        refresh_assets_if_cell_changed()
        if game.state is GameState.IDLE and not display.overlay_visible:
            display.show_overlay("Tetris Levels", "Press ENTER to start")

        if game.state is GameState.RUNNING and not overlay.active:
            keys = pygame.key.get_pressed()
            step = shift.update(dt, keys[pygame.K_LEFT], keys[pygame.K_RIGHT])
            if step:
                game.handle_input(Action.MOVE_LEFT if step < 0 else Action.MOVE_RIGHT)
            if soft.update(dt, False, keys[pygame.K_DOWN]):
                game.handle_input(Action.SOFT_DROP)
            game.tick(dt)

        effects.update(dt)
        audio.update(dt)

        render.draw(screen, game, display, effects)
        overlay.draw(screen, font, dims.total_w, dims.total_h)
        pygame.display.flip()


if __name__ == '__main__':
    main()
