"""
swarm_engine.py — the heart swarm simulation

Contains:
- draw_proximity_lines: faint links between nearby background particles
- Swarm: owns particles + interaction state, takes pointer/resize/formation
  events, and advances one frame per tick()

The host decides when frames happen (pygame Clock in the live window, a plain
loop offline); the swarm never sleeps or schedules anything itself.
"""
from __future__ import annotations

import random
import time

import numpy as np

from swarm_formation import compute_targets
from swarm_interaction import InteractionState, Mode, Viewport
from swarm_particle import Particle


def draw_proximity_lines(particles, start, stop, max_dist, surface, color, width):
    """
    Link every pair in particles[start:stop] closer than max_dist.
    Pairs are rejected on |dx| / |dy| before paying for the distance.
    Returns the number of lines drawn.
    """
    stop = min(stop, len(particles))
    max_d2 = max_dist * max_dist
    drawn = 0
    for i in range(start, stop):
        p1 = particles[i]
        for j in range(i + 1, stop):
            p2 = particles[j]
            dx = p1.x - p2.x
            if dx > max_dist or dx < -max_dist:
                continue
            dy = p1.y - p2.y
            if dy > max_dist or dy < -max_dist:
                continue
            if dx * dx + dy * dy < max_d2:
                surface.stroke_line(p1.x, p1.y, p2.x, p2.y, color, width)
                drawn += 1
    return drawn


class Swarm:
    def __init__(self, cfg, width, height, clock=time.monotonic, seed=None, verbose=True):
        cfg.validate()
        self.cfg = cfg
        self.verbose = verbose
        seed = cfg.seed if seed is None else seed
        self.rng = random.Random(seed)
        self.np_rng = np.random.default_rng(seed)

        self.viewport = Viewport(width, height)
        self.state = InteractionState(clock=clock, pulse_peak=cfg.pulse_peak,
                                      pulse_decay=cfg.pulse_decay,
                                      scramble_speed=cfg.scramble_speed,
                                      scramble_seconds=cfg.scramble_seconds)
        self.particles = [Particle(cfg, self.rng, self.viewport) for _ in range(cfg.particle_count)]

        self.frame = 0
        self.line_count = 0
        self.log(f"{len(self.particles)} particles, formation subset {cfg.heart_size} "
                 f"(preset={cfg.preset}, {self.viewport.width:g}x{self.viewport.height:g})")

    def log(self, msg):
        if self.verbose:
            print(f"[SWARM] {msg}")

    # ---------- events ----------
    def pointer_move(self, x, y):
        self.state.set_pointer(x, y)

    def pointer_down(self, x, y):
        self.state.set_pointer(x, y)
        self.state.trigger_pulse()
        self.state.trigger_scramble(self.particles, self.rng)

    def pointer_up(self):
        self.state.clear_pointer()

    def resize(self, width, height):
        self.viewport.resize(width, height)
        if self.state.mode is Mode.FORMATION:
            self.compute_targets()
            self.log(f"resize {self.viewport.width:g}x{self.viewport.height:g} -> targets recomputed")

    def activate_formation(self):
        if not self.state.enter_formation():
            return False
        n = self.compute_targets()
        self.log(f"mode -> FORMATION ({n} targets)")
        return True

    def compute_targets(self):
        cfg = self.cfg
        return compute_targets(self.particles, self.viewport, cfg.formation_count,
                               cfg.heart_divisor, cfg.target_jitter, rng=self.np_rng)

    # ---------- frame ----------
    @property
    def line_range(self):
        """Index range [start, stop) of background particles checked for lines."""
        start = min(self.cfg.heart_size, len(self.particles))
        stop = min(len(self.particles), start + self.cfg.line_checks)
        return start, stop

    def tick(self, surface):
        """Advance and draw one frame. Returns the number of lines drawn."""
        cfg = self.cfg
        surface.clear(self.viewport.width, self.viewport.height)
        self.state.begin_frame()

        state, viewport = self.state, self.viewport
        for p in self.particles:
            p.update(state, viewport)
            p.draw(surface)

        start, stop = self.line_range
        self.line_count = draw_proximity_lines(self.particles, start, stop, cfg.connection_dist,
                                               surface, cfg.line_color, cfg.line_width)
        self.frame += 1
        return self.line_count

    @property
    def mode(self):
        return self.state.mode
