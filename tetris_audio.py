"""Chiptune tones and a lofi chord loop, synthesised with numpy.

No sound files: every tone is rendered into a sample buffer and handed
to pygame.sndarray. Rendered buffers are cached by their parameters.
"""
from __future__ import annotations
import logging
import random
from typing import Dict, List, Optional, Tuple

import numpy as np
import pygame

from tetris_config import CONFIG

log = logging.getLogger(__name__)

SAMPLE_RATE = 44100

# C minor-ish progression, 4 s per chord
CHORDS: List[Tuple[float, float, float]] = [
    (261.63, 311.13, 369.99),
    (246.94, 293.66, 349.23),
    (220.00, 261.63, 311.13),
    (293.66, 349.23, 415.30),
]
CHORD_MS = 4000
MUSIC_GAIN = 0.15
CHORD_WAVES = ("triangle", "sine", "sawtooth")


def oscillator(kind: str, freq: float, duration: float, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    t = np.linspace(0, duration, int(sample_rate * duration), False)
    phase = (freq * t) % 1.0
    if kind == "square":
        return np.sign(np.sin(2 * np.pi * freq * t))
    if kind == "triangle":
        return 2 * np.abs(2 * phase - 1) - 1
    if kind == "sawtooth":
        return 2 * phase - 1
    return np.sin(2 * np.pi * freq * t)


def envelope(n: int, volume: float, attack: float, release_from: float, floor: float,
             sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Linear attack to ``volume``, flat until ``release_from`` s, then exponential decay to ``floor``."""
    env = np.full(n, volume, dtype=np.float64)
    a = min(n, int(attack * sample_rate))
    if a:
        env[:a] = np.linspace(0, volume, a, endpoint=False)
    r = min(n, max(a, int(release_from * sample_rate)))
    if r < n and volume > 0:
        ratio = min(floor, volume) / volume
        env[r:] = volume * ratio ** np.linspace(0, 1, n - r)
    return env


def to_sound(samples: np.ndarray) -> pygame.mixer.Sound:
    pcm = (np.clip(samples, -1, 1) * 32767).astype(np.int16)
    init = pygame.mixer.get_init()
    channels = init[2] if init else 2
    if channels > 1:
        pcm = np.ascontiguousarray(np.column_stack([pcm] * channels))
    return pygame.sndarray.make_sound(pcm)


def render_tone(freq: float, duration: float, kind: str, volume: float) -> np.ndarray:
    wave = oscillator(kind, freq, duration)
    return wave * envelope(len(wave), volume, 0.01, 0.01, 0.01)


def render_chord(chord: Tuple[float, ...], duration: float = CHORD_MS / 1000) -> np.ndarray:
    out = np.zeros(int(SAMPLE_RATE * duration))
    for i, freq in enumerate(chord):
        wave = oscillator(CHORD_WAVES[i % len(CHORD_WAVES)], freq, duration)
        out += wave * envelope(len(wave), 0.03 + i * 0.01, 0.1, duration - 0.5, 0.001)
    return out * MUSIC_GAIN


class LofiLoop:
    """Cycles through CHORDS, with one octave-up arpeggio note at a random point per chord."""

    def __init__(self, audio: "ChipAudio", rng: Optional[random.Random] = None):
        self.audio = audio
        self.rng = rng or random.Random()
        self.playing = False
        self.index = 0
        self.timer = 0.0
        self.arp_at: Optional[float] = None
        self._current: List[pygame.mixer.Sound] = []

    def start(self):
        self.stop()
        self.playing = True
        self.index = 0
        self._play_chord()

    def stop(self):
        self.playing = False
        for s in self._current:
            s.stop()
        self._current = []

    def update(self, dt: float):
        if not self.playing:
            return
        self.timer += dt
        if self.arp_at is not None and self.timer >= self.arp_at:
            self.arp_at = None
            root = CHORDS[(self.index - 1) % len(CHORDS)][0]
            snd = self.audio.play_raw(render_tone(root * 2, 1.0, "sine", 0.02) * MUSIC_GAIN)
            if snd is not None:
                self._current.append(snd)
        if self.timer >= CHORD_MS:
            self._play_chord()

    def _play_chord(self):
        self.timer = 0.0
        self.arp_at = self.rng.uniform(1000, 3000)
        chord = CHORDS[self.index]
        self.index = (self.index + 1) % len(CHORDS)
        snd = self.audio.play_chord(chord)
        self._current = [snd] if snd is not None else []


class ChipAudio:
    """Sound sink for the game engine."""

    def __init__(self):
        self.enabled = False
        self._cache: Dict[tuple, pygame.mixer.Sound] = {}
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2, buffer=512)
            self.enabled = True
        except pygame.error as e:
            log.warning("audio disabled: %s", e)
        self.music = LofiLoop(self)
        # a game is running and wants the loop, even if MUSIC is switched off
        self.music_wanted = False

    def _cached(self, key: tuple, render) -> pygame.mixer.Sound:
        snd = self._cache.get(key)
        if snd is None:
            snd = self._cache[key] = to_sound(render())
        return snd

    def play_raw(self, samples: np.ndarray) -> Optional[pygame.mixer.Sound]:
        if not self.enabled:
            return None
        snd = to_sound(samples)
        snd.set_volume(CONFIG["MASTER_VOLUME"])
        snd.play()
        return snd

    def play_chord(self, chord: Tuple[float, ...]) -> Optional[pygame.mixer.Sound]:
        if not self.enabled:
            return None
        snd = self._cached(("chord",) + tuple(chord), lambda: render_chord(chord))
        snd.set_volume(CONFIG["MASTER_VOLUME"])
        snd.play()
        return snd

    # ---------- sound sink ----------
    def play_tone(self, frequency: float, duration: float, waveform: str, volume: float):
        if not (self.enabled and CONFIG["SOUND"]):
            return
        key = (frequency, duration, waveform, volume)
        snd = self._cached(key, lambda: render_tone(frequency, duration, waveform, volume))
        snd.set_volume(CONFIG["MASTER_VOLUME"])
        snd.play()

    def start_music(self):
        self.music_wanted = True
        if self.enabled and CONFIG["MUSIC"]:
            self.music.start()

    def stop_music(self):
        self.music_wanted = False
        self.music.stop()

    def update(self, dt: float):
        if self.music.playing and not CONFIG["MUSIC"]:
            self.music.stop()
        elif self.music_wanted and self.enabled and CONFIG["MUSIC"] and not self.music.playing:
            self.music.start()
        self.music.update(dt)
