"""
Fractal Clock for the canvas display
Recursive, self-similar clock hands rendered in real time
"""

from .angles import Angles, compute_angles
from .settings import ClockSettings, RenderConfig
from .surface import DrawingSurface, ImageSurface, RecordingSurface, Point
from .renderer import RecursiveHandRenderer, render
from .clock import FractalClock

__all__ = [
    'Angles', 'compute_angles', 'ClockSettings', 'RenderConfig', 'DrawingSurface',
    'ImageSurface', 'RecordingSurface', 'Point', 'RecursiveHandRenderer', 'render',
    'FractalClock',
]
