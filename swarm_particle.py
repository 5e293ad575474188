"""
swarm_particle.py — one point of the swarm

Per frame a particle either seeks its heart target on a soft spring, or
wanders: bouncing off walls, kept out of the heart by the configured
exclusion strategy, and pushed around by the pointer either way.
"""
from __future__ import annotations

import math

from swarm_config import HardBarrier, OscillatingHue, RADIUS_MIN, RADIUS_SPREAD, SoftPush
from swarm_math import angle, hex_to_rgb, hsl255, repulsion


class Particle:
    def __init__(self, cfg, rng, viewport):
        self.cfg = cfg
        self.radius = rng.random() * RADIUS_SPREAD + RADIUS_MIN
        self.x = rng.random() * viewport.width
        self.y = rng.random() * viewport.height
        # very slow wander
        self.vx = (rng.random() - 0.5) * cfg.wander_speed
        self.vy = (rng.random() - 0.5) * cfg.wander_speed
        self.target = None

        scheme = cfg.color
        if isinstance(scheme, OscillatingHue):
            self.hue = scheme.low + rng.random() * (scheme.high - scheme.low)
            self.hue_speed = rng.uniform(scheme.speed_min, scheme.speed_max)
            self.hue_dir = 1 if rng.random() > 0.5 else -1
            self.fixed_color = None
        else:
            self.hue = None
            self.hue_speed = 0.0
            self.hue_dir = 0
            self.fixed_color = hex_to_rgb(rng.choice(scheme.colors))

    # ---------- colour ----------
    def step_color(self):
        scheme = self.cfg.color
        if not isinstance(scheme, OscillatingHue):
            return
        self.hue += self.hue_speed * self.hue_dir
        if self.hue > scheme.high or self.hue < scheme.low:
            self.hue_dir *= -1

    @property
    def color(self):
        if self.fixed_color is not None:
            return self.fixed_color
        scheme = self.cfg.color
        return hsl255(self.hue, scheme.saturation, scheme.lightness)

    # ---------- behaviour ----------
    def is_seeking(self, state):
        return state.in_formation and self.target is not None and not state.scramble_active

    def update(self, state, viewport):
        cfg = self.cfg
        self.step_color()

        reach = cfg.mouse_radius + state.pulse
        px, py = state.pointer
        fx, fy = repulsion(self.x, self.y, px, py, reach, cfg.repulsion_power)

        if self.is_seeking(state):
            tx, ty = self.target
            self.vx += (tx - self.x) * cfg.spring_stiffness
            self.vy += (ty - self.y) * cfg.spring_stiffness
            self.vx *= cfg.friction
            self.vy *= cfg.friction
            self.vx -= fx
            self.vy -= fy
        else:
            if state.in_formation and self.target is None and not state.scramble_active:
                self.keep_out_of_heart(viewport)
            self.vx -= fx
            self.vy -= fy
            self.bounce(viewport)

        self.x += self.vx
        self.y += self.vy

    def keep_out_of_heart(self, viewport):
        rule = self.cfg.exclusion
        cx, cy = viewport.center
        limit = viewport.min_side * rule.radius_factor
        dx = self.x - cx
        dy = self.y - cy
        d = math.hypot(dx, dy)
        if d >= limit:
            return
        a = angle(dx, dy)
        nx, ny = math.cos(a), math.sin(a)

        if isinstance(rule, HardBarrier):
            # project onto the rim, reflect only if heading inwards
            self.x = cx + nx * limit
            self.y = cy + ny * limit
            dot = self.vx * nx + self.vy * ny
            if dot < 0:
                self.vx -= 2 * dot * nx
                self.vy -= 2 * dot * ny
        elif isinstance(rule, SoftPush):
            depth = limit - d
            self.vx += nx * depth * rule.push_scale
            self.vy += ny * depth * rule.push_scale

    def bounce(self, viewport):
        w, h = viewport.width, viewport.height
        # flip only when at/over a wall and still heading out
        if (self.x <= 0 and self.vx < 0) or (self.x >= w and self.vx > 0):
            self.vx *= -1
        if (self.y <= 0 and self.vy < 0) or (self.y >= h and self.vy > 0):
            self.vy *= -1
        self.x = 0.0 if self.x < 0 else w if self.x > w else self.x
        self.y = 0.0 if self.y < 0 else h if self.y > h else self.y

    # ---------- draw ----------
    def draw(self, surface):
        surface.fill_circle(self.x, self.y, self.radius, self.color)

    def __repr__(self):
        tgt = 'none' if self.target is None else f"({self.target[0]:.1f}, {self.target[1]:.1f})"
        return f"Particle(x={self.x:.1f}, y={self.y:.1f}, vx={self.vx:.2f}, vy={self.vy:.2f}, target={tgt})"
