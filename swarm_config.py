"""
swarm_config.py — tunables, colour/exclusion strategies and named presets

Two looks ship as presets:
  bloom    2000 particles, 1200 in the heart, hue oscillating through purples,
           hard barrier around the heart
  classic  900 particles, 600 in the heart, fixed lavender palette,
           soft push away from the heart

Anything can be overridden per run: build_preset('bloom', particle_count=500).
"""
from __future__ import annotations

import argparse
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Union

# ===== Physics =====
MOUSE_RADIUS = 100          # base pointer repulsion radius (px)
REPULSION_POWER = 1.5
SPRING_STIFFNESS = 0.015    # very soft spring towards heart targets
FRICTION = 0.92
SCRAMBLE_SPEED = 6
WANDER_SPEED = 0.5

# ===== Pulse / scramble =====
PULSE_PEAK = 180
PULSE_DECAY = 0.92
PULSE_FLOOR = 1             # pulse snaps to 0 once below this
SCRAMBLE_SECONDS = 1.2

# ===== Formation =====
TARGET_JITTER = 20          # total spread, i.e. +/-10 px per axis

# ===== Lines =====
CONNECTION_DIST = 100
LINE_CHECKS = 300           # background particles considered for lines
LINE_COLOR = (186, 85, 211, 38)   # rgba(186, 85, 211, 0.15)
LINE_WIDTH = 0.5

# ===== Particles =====
RADIUS_MIN = 1.0
RADIUS_SPREAD = 2.0
BACKGROUND = (0, 0, 0)

LAVENDER_PALETTE = (
    '#8A2BE2',  # BlueViolet
    '#9400D3',  # DarkViolet
    '#9932CC',  # DarkOrchid
    '#BA55D3',  # MediumOrchid
    '#DA70D6',  # Orchid
    '#D8BFD8',  # Thistle
    '#E6E6FA',  # Lavender
)


# ===== Strategies =====
@dataclass(frozen=True)
class FixedPalette:
    colors: Tuple[str, ...] = LAVENDER_PALETTE


@dataclass(frozen=True)
class OscillatingHue:
    low: float = 260.0
    high: float = 320.0
    speed_min: float = 0.1
    speed_max: float = 0.2
    saturation: float = 0.70
    lightness: float = 0.60


@dataclass(frozen=True)
class HardBarrier:
    radius_factor: float = 0.38


@dataclass(frozen=True)
class SoftPush:
    radius_factor: float = 0.35
    push_scale: float = 0.05


ColorStrategy = Union[FixedPalette, OscillatingHue]
ExclusionStrategy = Union[HardBarrier, SoftPush]


@dataclass
class SwarmConfig:
    particle_count: int = 2000
    formation_count: int = 1200
    line_checks: int = LINE_CHECKS
    heart_divisor: float = 45.0
    color: ColorStrategy = field(default_factory=OscillatingHue)
    exclusion: ExclusionStrategy = field(default_factory=HardBarrier)

    mouse_radius: float = MOUSE_RADIUS
    repulsion_power: float = REPULSION_POWER
    spring_stiffness: float = SPRING_STIFFNESS
    friction: float = FRICTION
    scramble_speed: float = SCRAMBLE_SPEED
    wander_speed: float = WANDER_SPEED
    pulse_peak: float = PULSE_PEAK
    pulse_decay: float = PULSE_DECAY
    scramble_seconds: float = SCRAMBLE_SECONDS
    target_jitter: float = TARGET_JITTER
    connection_dist: float = CONNECTION_DIST
    line_color: tuple = LINE_COLOR
    line_width: float = LINE_WIDTH

    seed: Optional[int] = None
    preset: str = 'custom'

    def validate(self):
        """Raise ValueError on settings the simulation cannot run with."""
        if self.particle_count < 0:
            raise ValueError(f"particle_count must be >= 0, got {self.particle_count}")
        if self.formation_count < 0:
            raise ValueError(f"formation_count must be >= 0, got {self.formation_count}")
        if self.line_checks < 0:
            raise ValueError(f"line_checks must be >= 0, got {self.line_checks}")
        if self.heart_divisor <= 0:
            raise ValueError(f"heart_divisor must be > 0, got {self.heart_divisor}")
        if self.mouse_radius <= 0:
            raise ValueError(f"mouse_radius must be > 0, got {self.mouse_radius}")
        if self.connection_dist <= 0:
            raise ValueError(f"connection_dist must be > 0, got {self.connection_dist}")
        if not 0.0 <= self.pulse_decay < 1.0:
            raise ValueError(f"pulse_decay must be in [0, 1), got {self.pulse_decay}")
        if isinstance(self.color, OscillatingHue) and self.color.low > self.color.high:
            raise ValueError(f"hue range is inverted: {self.color.low} > {self.color.high}")
        if isinstance(self.color, FixedPalette) and not self.color.colors:
            raise ValueError("FixedPalette needs at least one colour")
        return self

    @property
    def heart_size(self):
        """Number of particles that actually receive a target (K clamped to N)."""
        return min(self.formation_count, self.particle_count)


# ===== Presets =====
def preset_bloom(**kw):
    return SwarmConfig(particle_count=2000, formation_count=1200, heart_divisor=45.0,
                       color=OscillatingHue(), exclusion=HardBarrier(0.38),
                       preset='bloom', **kw)


def preset_classic(**kw):
    return SwarmConfig(particle_count=900, formation_count=600, heart_divisor=35.0,
                       color=FixedPalette(), exclusion=SoftPush(0.35, 0.05),
                       preset='classic', **kw)


PRESETS = {
    'bloom': preset_bloom,
    'classic': preset_classic,
}


def build_preset(name, **overrides):
    """
    Build a validated config from a named preset. Overrides whose value is None
    are ignored so argparse namespaces can be passed straight through.
    """
    if name not in PRESETS:
        raise KeyError(f"unknown preset {name!r} (choose from: {', '.join(sorted(PRESETS))})")
    cfg = PRESETS[name]()
    changes = {k: v for k, v in overrides.items() if v is not None}
    if changes:
        cfg = replace(cfg, **changes)
    return cfg.validate()


# ===== CLI helpers (shared by heart_swarm.py and render_heart_frames.py) =====
def parse_size(text):
    try:
        w, h = text.lower().split('x')
        w, h = int(w), int(h)
    except ValueError:
        raise argparse.ArgumentTypeError(f"size must look like 1280x720, got {text!r}")
    if w <= 0 or h <= 0:
        raise argparse.ArgumentTypeError(f"size must be positive, got {text!r}")
    return w, h


def add_swarm_arguments(ap):
    ap.add_argument('--preset', default='bloom', choices=sorted(PRESETS), help='Look to start from')
    ap.add_argument('--particles', type=int, dest='particle_count', help='Total particle count (N)')
    ap.add_argument('--formation', type=int, dest='formation_count', help='Particles that form the heart (K)')
    ap.add_argument('--line-checks', type=int, dest='line_checks', help='Background particles checked for lines')
    ap.add_argument('--seed', type=int, help='Random seed for repeatable runs')
    ap.add_argument('--fps', type=int, default=60, help='Frame rate')
    ap.add_argument('--size', type=parse_size, default=(1280, 720), help='Window/frame size, WxH')
    return ap


def config_from_args(args):
    return build_preset(args.preset, particle_count=args.particle_count,
                        formation_count=args.formation_count, line_checks=args.line_checks,
                        seed=args.seed)
