"""Tunables, palette, scoring tables and sound cues"""
from typing import Dict, List, Tuple

COLS, ROWS = 10, 20

CONFIG = {
    "CELL_SIZE": 30,
    "DAS_MS": 170,
    "ARR_MS": 50,
    "SOFT_DROP_ARR_MS": 50,
    "SEED": None,
    "SOUND": True,
    "MUSIC": True,
    "MASTER_VOLUME": 1.0,
    "LOG_LEVEL": "INFO",
}

# Colour variety grows with level: level N draws from the first N+1 entries.
PALETTE: List[str] = [
    "#ff69b4",
    "#00e5ff",
    "#ffd400",
    "#39d353",
    "#9370db",
    "#ff8c00",
]

MAX_LEVEL = 5
QUEUE_SIZE = 3

LINE_SCORES = {0: 0, 1: 10, 2: 60, 3: 120, 4: 200}
REGION_POINTS = 20
HARD_DROP_PER_CELL = 2
SMALL_PIECE_BONUS_BASE = 5

# name -> (frequency Hz, duration s, waveform, volume)
SOUNDS: Dict[str, Tuple[float, float, str, float]] = {
    "move": (220, 0.05, "square", 0.1),
    "soft_drop": (196, 0.05, "square", 0.1),
    "rotate": (330, 0.1, "triangle", 0.15),
    "hard_drop": (130, 0.2, "sawtooth", 0.2),
    "lock": (165, 0.1, "triangle", 0.15),
    "hold": (294, 0.1, "triangle", 0.15),
    "start": (523, 0.2, "triangle", 0.2),
    "level_up": (698, 0.2, "triangle", 0.2),
    "game_over": (147, 0.5, "sawtooth", 0.3),
}
LINE_CLEAR_FREQS = [440, 523, 659, 880]
LINE_CLEAR_SOUND = (0.3, "triangle", 0.25)


def drop_interval(level: int) -> int:
    """Milliseconds between gravity steps at ``level``."""
    return max(30, 1000 - (level - 1) * 40)


def line_clear_tone(count: int) -> Tuple[float, float, str, float]:
    freq = LINE_CLEAR_FREQS[min(count, len(LINE_CLEAR_FREQS)) - 1]
    duration, wave, volume = LINE_CLEAR_SOUND
    return (freq, duration, wave, volume)
