"""
swarm_interaction.py — pointer, pulse, scramble and mode for one swarm

One InteractionState is owned by each Swarm and handed to every particle
update; nothing here is global. Scramble expiry is a timestamp read from an
injectable clock, so tests can drive it with a fake clock instead of sleeping.
"""
from __future__ import annotations

import enum
import time

from swarm_config import PULSE_DECAY, PULSE_FLOOR, PULSE_PEAK, SCRAMBLE_SECONDS, SCRAMBLE_SPEED

# Far enough outside any viewport that no particle is ever in range.
OFFSCREEN = (-1000.0, -1000.0)


class Mode(enum.Enum):
    WANDER = 'WANDER'
    FORMATION = 'FORMATION'


class InteractionState:
    def __init__(self, clock=time.monotonic, pulse_peak=PULSE_PEAK, pulse_decay=PULSE_DECAY,
                 scramble_speed=SCRAMBLE_SPEED, scramble_seconds=SCRAMBLE_SECONDS):
        self.clock = clock
        self.pointer = OFFSCREEN
        self.pulse = 0.0
        self.mode = Mode.WANDER
        self.scramble_expires_at = None
        self.scramble_active = False

        self.pulse_peak = pulse_peak
        self.pulse_decay = pulse_decay
        self.scramble_speed = scramble_speed
        self.scramble_seconds = scramble_seconds

    # ---------- pointer ----------
    def set_pointer(self, x, y):
        self.pointer = (float(x), float(y))

    def clear_pointer(self):
        self.pointer = OFFSCREEN

    # ---------- pulse ----------
    def trigger_pulse(self):
        self.pulse = float(self.pulse_peak)

    def decay_pulse(self):
        """Geometric decay; call exactly once per frame."""
        if self.pulse > 0:
            self.pulse *= self.pulse_decay
            if self.pulse < PULSE_FLOOR:
                self.pulse = 0.0
        return self.pulse

    # ---------- scramble ----------
    def trigger_scramble(self, particles, rng):
        spd = self.scramble_speed
        for p in particles:
            p.vx = (rng.random() - 0.5) * spd * 2
            p.vy = (rng.random() - 0.5) * spd * 2
        # replaces any pending expiry
        self.scramble_expires_at = self.clock() + self.scramble_seconds
        self.scramble_active = True

    def refresh_scramble(self):
        if self.scramble_expires_at is not None and self.clock() >= self.scramble_expires_at:
            self.scramble_expires_at = None
        self.scramble_active = self.scramble_expires_at is not None
        return self.scramble_active

    @property
    def scrambling(self):
        return self.refresh_scramble()

    def begin_frame(self):
        """Per-frame bookkeeping, run once before any particle updates."""
        self.refresh_scramble()
        self.decay_pulse()

    # ---------- mode ----------
    def enter_formation(self):
        """One-way switch; returns True only on the first call."""
        if self.mode is Mode.FORMATION:
            return False
        self.mode = Mode.FORMATION
        return True

    @property
    def in_formation(self):
        return self.mode is Mode.FORMATION


class Viewport:
    """Current drawing area. Negative sizes clamp to 0 (degenerate but valid)."""
    def __init__(self, width, height):
        self.width = 0.0
        self.height = 0.0
        self.resize(width, height)

    def resize(self, width, height):
        self.width = float(max(0, width))
        self.height = float(max(0, height))

    @property
    def center(self):
        return self.width / 2, self.height / 2

    @property
    def min_side(self):
        return min(self.width, self.height)

    @property
    def size(self):
        return self.width, self.height

    def __repr__(self):
        return f"Viewport({self.width:g}x{self.height:g})"
