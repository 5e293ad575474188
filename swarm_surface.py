"""
swarm_surface.py — things the swarm can draw on

Any object with clear / fill_circle / stroke_line works. Two are provided:
- PygameSurface: draws onto a pygame.Surface (window or off-screen); lines go
  to an SRCALPHA layer so translucent colours blend like rgba() strokes
- RecordingSurface: keeps a list of draw calls, for headless runs and tests
"""
import pygame

from swarm_config import BACKGROUND


def as_color(value):
    """Tuples pass through; strings ('#aabbcc', 'orchid') go via pygame.Color."""
    if isinstance(value, str):
        return pygame.Color(value)
    return value


class PygameSurface:
    def __init__(self, target, background=BACKGROUND):
        self.target = target
        self.background = background
        self.lines = pygame.Surface(target.get_size(), pygame.SRCALPHA)

    def retarget(self, target):
        """Point at a new window surface after set_mode (resize / fullscreen)."""
        self.target = target
        if self.lines.get_size() != target.get_size():
            self.lines = pygame.Surface(target.get_size(), pygame.SRCALPHA)

    def clear(self, width, height):
        self.target.fill(self.background)
        if self.lines.get_size() != self.target.get_size():
            self.lines = pygame.Surface(self.target.get_size(), pygame.SRCALPHA)
        self.lines.fill((0, 0, 0, 0))

    def fill_circle(self, x, y, radius, color):
        pygame.draw.circle(self.target, as_color(color), (x, y), radius)

    def stroke_line(self, x1, y1, x2, y2, color, width):
        c = as_color(color)
        if width < 1:
            pygame.draw.aaline(self.lines, c, (x1, y1), (x2, y2))
        else:
            pygame.draw.line(self.lines, c, (x1, y1), (x2, y2), int(width))

    def present(self):
        """Composite the line layer over the particles."""
        self.target.blit(self.lines, (0, 0))


class RecordingSurface:
    def __init__(self):
        self.calls = []

    def clear(self, width, height):
        self.calls.append(('clear', (width, height)))

    def fill_circle(self, x, y, radius, color):
        self.calls.append(('circle', (x, y, radius, color)))

    def stroke_line(self, x1, y1, x2, y2, color, width):
        self.calls.append(('line', (x1, y1, x2, y2, color, width)))

    def of_kind(self, kind):
        return [args for k, args in self.calls if k == kind]

    @property
    def lines(self):
        return self.of_kind('line')

    @property
    def circles(self):
        return self.of_kind('circle')

    def reset(self):
        self.calls.clear()
