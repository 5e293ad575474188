"""
swarm_formation.py — heart targets for the first K particles

Classic heart curve:
    x(t) = 16 sin^3 t
    y(t) = 13 cos t - 5 cos 2t - 2 cos 3t - cos 4t
scaled by min(width, height) / divisor, centred, y flipped for screen space,
then jittered so the outline looks organic.
"""
from __future__ import annotations

import math

import numpy as np


def heart_curve(t):
    """Raw curve in curve units; accepts a scalar or an ndarray of angles."""
    t = np.asarray(t, dtype=float)
    hx = 16 * np.sin(t) ** 3
    hy = 13 * np.cos(t) - 5 * np.cos(2 * t) - 2 * np.cos(3 * t) - np.cos(4 * t)
    return hx, hy


def heart_scale(width, height, divisor):
    if divisor <= 0:
        raise ValueError(f"heart divisor must be > 0, got {divisor}")
    return max(0.0, min(width, height)) / divisor


def heart_skeleton(count, width, height, divisor):
    """Un-jittered screen points for indices 0..count-1, shape (count, 2)."""
    if count <= 0:
        return np.zeros((0, 2))
    t = np.arange(count) / count * (2 * math.pi)
    hx, hy = heart_curve(t)
    scale = heart_scale(width, height, divisor)
    cx, cy = width / 2, height / 2
    return np.column_stack((cx + hx * scale, cy - hy * scale))


def compute_targets(particles, viewport, formation_count, divisor, jitter, rng=None):
    """
    Clear every target, then give particles [0, min(K, N)) a point on the heart.
    Returns the number of targets assigned.
    """
    rng = rng if rng is not None else np.random.default_rng()
    for p in particles:
        p.target = None

    k = min(formation_count, len(particles))
    if k <= 0:
        return 0
    # the curve is parametrised over the full K even when fewer particles exist
    pts = heart_skeleton(formation_count, viewport.width, viewport.height, divisor)[:k]
    pts = pts + (rng.random((k, 2)) - 0.5) * jitter
    for p, (tx, ty) in zip(particles, pts.tolist()):
        p.target = (tx, ty)
    return k
