"""
Clock Settings

Mutable, externally-owned settings for the fractal clock and the frozen
RenderConfig snapshot the renderer reads once per frame. All clamping of
user input happens here, never in the renderer.
"""

import logging
import random
from dataclasses import dataclass, field, fields
from typing import Optional, Tuple

from config import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_LINE_COLOR,
    DEFAULT_DEPTH,
    DEFAULT_LINE_WIDTH,
    DEFAULT_SCALE,
    DEFAULT_OPACITY,
    DEFAULT_SHOW_FPS,
    MAX_DEPTH,
    KEY_DEPTH_MAX,
    MIN_LINE_WIDTH,
)


@dataclass(frozen=True)
class RenderConfig:
    """Per-frame snapshot of everything the renderer needs"""
    depth: int = DEFAULT_DEPTH
    scale: float = DEFAULT_SCALE
    opacity: float = DEFAULT_OPACITY
    line_width: float = DEFAULT_LINE_WIDTH
    line_color: Tuple[int, int, int] = DEFAULT_LINE_COLOR
    background_color: Tuple[int, int, int] = DEFAULT_BACKGROUND_COLOR


def _clamp(value, low, high):
    return max(low, min(high, value))


def _clamp_color(color) -> Tuple[int, int, int]:
    return tuple(int(_clamp(round(c), 0, 255)) for c in color)


@dataclass
class ClockSettings:
    """
    Settings owned by the input-handling side of the clock.

    Scale and opacity are per-level decay factors in [0, 1]. Depth is the
    number of recursive levels beyond the root.
    """

    depth: int = DEFAULT_DEPTH
    scale: float = DEFAULT_SCALE
    opacity: float = DEFAULT_OPACITY
    line_width: float = DEFAULT_LINE_WIDTH
    line_color: Tuple[int, int, int] = DEFAULT_LINE_COLOR
    background_color: Tuple[int, int, int] = DEFAULT_BACKGROUND_COLOR
    show_fps: bool = DEFAULT_SHOW_FPS
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    def snapshot(self) -> RenderConfig:
        """Immutable copy for the next frame"""
        return RenderConfig(
            depth=self.depth,
            scale=self.scale,
            opacity=self.opacity,
            line_width=self.line_width,
            line_color=tuple(self.line_color),
            background_color=tuple(self.background_color),
        )

    # Mutations, every one clamps to the valid range

    def set_depth(self, depth: int, max_depth: int = MAX_DEPTH) -> None:
        self.depth = int(_clamp(int(depth), 0, max_depth))

    def set_depth_from_digit(self, digit: int) -> None:
        self.set_depth(digit, max_depth=KEY_DEPTH_MAX)

    def adjust_scale(self, delta: float) -> None:
        self.scale = _clamp(self.scale + delta, 0.0, 1.0)

    def adjust_opacity(self, delta: float) -> None:
        self.opacity = _clamp(self.opacity + delta, 0.0, 1.0)

    def randomize_line_color(self) -> Tuple[int, int, int]:
        self.line_color = (self.rng.randint(0, 255), self.rng.randint(0, 255), self.rng.randint(0, 255))
        logging.debug(f"Line color changed to {self.line_color}")
        return self.line_color

    def toggle_fps(self) -> bool:
        self.show_fps = not self.show_fps
        return self.show_fps

    def update(self, depth: Optional[int] = None, scale: Optional[float] = None,
               opacity: Optional[float] = None, line_width: Optional[float] = None,
               line_color=None, background_color=None, show_fps: Optional[bool] = None) -> None:
        """Apply a partial update, clamping every provided value"""
        if depth is not None:
            self.set_depth(depth)
        if scale is not None:
            self.scale = _clamp(float(scale), 0.0, 1.0)
        if opacity is not None:
            self.opacity = _clamp(float(opacity), 0.0, 1.0)
        if line_width is not None:
            self.line_width = max(float(line_width), MIN_LINE_WIDTH)
        if line_color is not None:
            self.line_color = _clamp_color(line_color)
        if background_color is not None:
            self.background_color = _clamp_color(background_color)
        if show_fps is not None:
            self.show_fps = bool(show_fps)

    def to_dict(self) -> dict:
        """Convert settings to dictionary for serialization"""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self) if f.name != 'rng'
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ClockSettings':
        """Create settings from dictionary, ignoring unknown keys and clamping values"""
        settings = cls()
        valid_fields = {f.name for f in fields(cls) if f.name != 'rng'}
        settings.update(**{k: v for k, v in data.items() if k in valid_fields})
        return settings

    def copy(self) -> 'ClockSettings':
        return ClockSettings(**self.to_dict())

    def validate(self) -> list:
        """Validate settings and return list of issues"""
        issues = []

        if not 0 <= self.depth <= MAX_DEPTH:
            issues.append(f"depth must be between 0 and {MAX_DEPTH}, got {self.depth}")

        for name in ('scale', 'opacity'):
            value = getattr(self, name)
            if not 0 <= value <= 1:
                issues.append(f"{name} must be between 0 and 1, got {value}")

        if self.line_width <= 0:
            issues.append(f"line_width must be positive, got {self.line_width}")

        for name in ('line_color', 'background_color'):
            color = getattr(self, name)
            if not (isinstance(color, tuple) and len(color) == 3 and
                    all(0 <= c <= 255 for c in color)):
                issues.append(f"{name} must be RGB tuple (0-255), got {color}")

        return issues
