"""
RecursiveHandRenderer - Draws the self-similar fractal clock figure
The hour hand is drawn once, then every minute/second pair spawns a smaller
rotated copy of itself at both endpoints
"""

import math

from .angles import Angles
from .settings import RenderConfig
from .surface import DrawingSurface, Point


def hand_endpoint(origin: Point, angle: float, length: float) -> Point:
    """Point reached by a hand of the given length and angle from origin"""
    return Point(origin.x + math.cos(angle) * length, origin.y + math.sin(angle) * length)


def segment_count(depth: int) -> int:
    """Number of line segments a render at the given depth issues"""
    return 1 + 2 * (2 ** (depth + 1) - 1)


class RecursiveHandRenderer:
    """Renders one fractal clock frame onto a drawing surface"""

    def __init__(self, surface: DrawingSurface):
        self.surface = surface

    def render(self, angles: Angles, config: RenderConfig) -> None:
        """Clear the surface and draw the full figure for one frame"""
        surface = self.surface
        surface.clear(config.background_color)
        surface.set_opacity(1.0)
        surface.set_stroke_color(config.line_color)
        surface.set_line_width(config.line_width * surface.pixel_ratio)

        centre = surface.center()
        length = min(surface.width, surface.height) / 4

        surface.draw_line(centre, hand_endpoint(centre, angles.hour, length / 2))

        self._draw_level(angles, config, config.depth, length, centre, 1.0, 0.0)

    def _draw_level(self, angles: Angles, config: RenderConfig, remaining_depth: int,
                    length: float, origin: Point, alpha: float, angle_offset: float) -> None:
        """Draw a second/minute pair at origin and recurse from both endpoints"""
        surface = self.surface
        surface.set_opacity(alpha)

        second_end = hand_endpoint(origin, angles.second + angle_offset, length)
        surface.draw_line(origin, second_end)

        minute_end = hand_endpoint(origin, angles.minute + angle_offset, length)
        surface.draw_line(origin, minute_end)

        if remaining_depth <= 0:
            return

        # Children use the parent's hour hand as their zero direction, flipped outward
        child_length = length * config.scale
        child_alpha = alpha * config.opacity
        self._draw_level(
            angles, config, remaining_depth - 1, child_length, second_end, child_alpha,
            angles.second - angles.hour - math.pi + angle_offset
        )
        self._draw_level(
            angles, config, remaining_depth - 1, child_length, minute_end, child_alpha,
            angles.minute - angles.hour - math.pi + angle_offset
        )


def render(angles: Angles, config: RenderConfig, surface: DrawingSurface) -> None:
    """Render one frame of the fractal clock onto surface"""
    RecursiveHandRenderer(surface).render(angles, config)
