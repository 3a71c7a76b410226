import pytest

from tetris_board import Board
from tetris_game import Game


class RecordingSound:
    def __init__(self):
        self.tones = []
        self.music = False

    def play_tone(self, frequency, duration, waveform, volume):
        self.tones.append((frequency, duration, waveform, volume))

    def start_music(self):
        self.music = True

    def stop_music(self):
        self.music = False


class RecordingDisplay:
    def __init__(self):
        self.score = self.level = self.lines = None
        self.overlay = None

    def show_score(self, n):
        self.score = n

    def show_level(self, n):
        self.level = n

    def show_lines(self, n):
        self.lines = n

    def show_overlay(self, title, message):
        self.overlay = (title, message)

    def hide_overlay(self):
        self.overlay = None


class RecordingEffects:
    def __init__(self):
        self.locked = []
        self.rows = []
        self.regions = []

    def piece_locked(self, cells, color):
        self.locked.append((list(cells), color))

    def rows_completed(self, rows):
        self.rows.extend(rows)

    def level_completed(self, regions):
        self.regions.extend(regions)


@pytest.fixture
def board():
    """Returns a new, empty Board for each test."""
    return Board()


@pytest.fixture
def sound():
    return RecordingSound()


@pytest.fixture
def display():
    return RecordingDisplay()


@pytest.fixture
def effects():
    return RecordingEffects()


@pytest.fixture
def game(sound, display, effects):
    """A seeded game wired to recording sinks, not yet started."""
    return Game(seed=1234, sound=sound, display=display, effects=effects)


