"""Key bindings and DAS/ARR auto-repeat"""
from typing import Dict, Optional
import pygame
from tetris_config import CONFIG
from tetris_game import Action, GameState

# Left/right/down are driven by ShiftRepeat, not by KEYDOWN.
KEYMAP: Dict[int, Action] = {
    pygame.K_UP: Action.ROTATE,
    pygame.K_x: Action.ROTATE,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_c: Action.HOLD,
    pygame.K_p: Action.TOGGLE_PAUSE,
    pygame.K_r: Action.RESET,
}
REPEAT_KEYS = (pygame.K_LEFT, pygame.K_RIGHT, pygame.K_DOWN)


def action_for_key(key: int, state: GameState) -> Optional[Action]:
    """Translate a KEYDOWN into an action for the current game state."""
    if state is GameState.WAITING_FOR_CONTINUE:
        return Action.CONTINUE_AFTER_LEVEL
    if state in (GameState.IDLE, GameState.GAME_OVER):
        if key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE):
            return Action.START
        if key == pygame.K_r:
            return Action.RESET
        return None
    return KEYMAP.get(key)


class ShiftRepeat:
    """Fires once on press, then again every ``arr_key`` ms after ``das_key`` ms held."""
    def __init__(self, das_key: str = "DAS_MS", arr_key: str = "ARR_MS"):
        self.das_key=das_key; self.arr_key=arr_key
        self.dir=0; self.held_ms=0; self.last=0; self.initial=False
    def reset(self):
        self.dir=0; self.held_ms=0; self.last=0; self.initial=False
    def update(self, dt, neg, pos):
        nd=(-1 if neg else 0)+(1 if pos else 0)
        if nd!=self.dir:
            self.dir=nd; self.held_ms=0; self.last=0; self.initial=False
        if self.dir==0: return 0
        self.held_ms+=dt
        if not self.initial:
            self.initial=True; return self.dir
        if self.held_ms < CONFIG[self.das_key]: return 0
        arr=CONFIG[self.arr_key]
        if arr==0: return self.dir
        self.last+=dt
        if self.last>=arr:
            self.last=0; return self.dir
        return 0
