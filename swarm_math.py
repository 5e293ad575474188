"""
swarm_math.py — small pure helpers shared by the heart swarm modules

Contains:
- Vector/force: distance, angle, radial_falloff, repulsion
- Utils: clamp
- Colour: hsl255 (css-style hsl -> rgb ints), hex_to_rgb
"""
import math
import colorsys


# ---------- vector / force ----------
def distance(x1, y1, x2, y2):
    return math.hypot(x2 - x1, y2 - y1)


def angle(dx, dy):
    """Direction of (dx, dy) in radians. atan2(0, 0) is 0, so the origin is safe."""
    return math.atan2(dy, dx)


def radial_falloff(dist, radius):
    """Linear falloff: 1 at the centre, 0 at (and beyond) radius."""
    if radius <= 0 or dist >= radius:
        return 0.0
    return (radius - dist) / radius


def repulsion(px, py, sx, sy, radius, power):
    """
    Scatter vector for a point at (px, py) near a source at (sx, sy).

    Returns (fx, fy) pointing from the source towards the point, scaled by
    radial_falloff * power; (0, 0) outside radius. Particles subtract it from
    their velocity.
    """
    dx = px - sx
    dy = py - sy
    d = distance(sx, sy, px, py)
    k = radial_falloff(d, radius)
    if k <= 0.0:
        return 0.0, 0.0
    a = angle(dx, dy)
    mag = k * power
    return math.cos(a) * mag, math.sin(a) * mag


# ---------- utils ----------
def clamp(x, lo, hi):
    return lo if x < lo else hi if x > hi else x


# ---------- colour ----------
def hsl255(h_deg, s, l):
    """hsl(h, s, l) with h in degrees and s/l in 0..1 -> (r, g, b) ints."""
    r, g, b = colorsys.hls_to_rgb((h_deg / 360.0) % 1.0, clamp(l, 0.0, 1.0), clamp(s, 0.0, 1.0))
    return (int(r * 255), int(g * 255), int(b * 255))


def hex_to_rgb(value):
    v = value.lstrip('#')
    if len(v) == 3:
        v = ''.join(c * 2 for c in v)
    if len(v) != 6:
        raise ValueError(f"not a hex colour: {value!r}")
    return (int(v[0:2], 16), int(v[2:4], 16), int(v[4:6], 16))
