"""
Drawing Surfaces

Immediate-mode drawing targets for the fractal clock renderer.
"""

from abc import ABC, abstractmethod
from typing import List, NamedTuple, Tuple, Union
from PIL import Image, ImageDraw

RGB = Tuple[int, int, int]


class Point(NamedTuple):
    """A coordinate in surface pixel space"""
    x: float
    y: float


class DrawingSurface(ABC):
    """
    Base class for anything the renderer can draw on.

    Width and height are device pixels. pixel_ratio is the number of device
    pixels per logical pixel, used to scale line widths.
    """

    def __init__(self, width: int, height: int, pixel_ratio: float = 1.0):
        self.width = width
        self.height = height
        self.pixel_ratio = pixel_ratio

        self.stroke_color: RGB = (255, 255, 255)
        self.line_width = 1.0
        self.opacity = 1.0

    def center(self) -> Point:
        return Point(self.width / 2, self.height / 2)

    def set_stroke_color(self, color: RGB) -> None:
        self.stroke_color = tuple(color)

    def set_line_width(self, width: float) -> None:
        self.line_width = width

    def set_opacity(self, alpha: float) -> None:
        self.opacity = alpha

    @abstractmethod
    def clear(self, color: RGB) -> None:
        """Fill the whole surface with a solid color"""
        pass

    @abstractmethod
    def draw_line(self, start: Point, end: Point) -> None:
        """Stroke a line with the current color, width and opacity"""
        pass


class ImageSurface(DrawingSurface):
    """
    Pillow-backed surface.

    Lines are blended into an RGB image through an RGBA draw context, so the
    current opacity behaves like a canvas globalAlpha stroke.
    """

    def __init__(self, width: int, height: int, pixel_ratio: float = 1.0):
        super().__init__(width, height, pixel_ratio)
        self.image = Image.new('RGB', (width, height), (0, 0, 0))
        self._draw = ImageDraw.Draw(self.image, 'RGBA')

    @classmethod
    def from_logical_size(cls, width: int, height: int, pixel_ratio: float = 1.0) -> 'ImageSurface':
        """Create a surface whose device size is the logical size times pixel_ratio"""
        return cls(int(width * pixel_ratio), int(height * pixel_ratio), pixel_ratio)

    @property
    def logical_size(self) -> Tuple[int, int]:
        return (int(self.width / self.pixel_ratio), int(self.height / self.pixel_ratio))

    def clear(self, color: RGB) -> None:
        self.image.paste(tuple(color), (0, 0, self.width, self.height))

    def draw_line(self, start: Point, end: Point) -> None:
        alpha = int(round(max(0.0, min(1.0, self.opacity)) * 255))
        if alpha == 0:
            return

        width = max(1, int(round(self.line_width)))
        self._draw.line(
            [(start[0], start[1]), (end[0], end[1])],
            fill=(*self.stroke_color, alpha),
            width=width
        )

    def to_image(self) -> Image.Image:
        """Return the rendered frame at logical size, downsampling supersampled surfaces"""
        if self.pixel_ratio == 1.0:
            return self.image.copy()
        return self.image.resize(self.logical_size, Image.Resampling.LANCZOS)


class Clear(NamedTuple):
    color: RGB


class Segment(NamedTuple):
    start: Point
    end: Point
    alpha: float
    color: RGB
    width: float


class RecordingSurface(DrawingSurface):
    """Surface that keeps every draw call instead of rasterizing it"""

    def __init__(self, width: int, height: int, pixel_ratio: float = 1.0):
        super().__init__(width, height, pixel_ratio)
        self.calls: List[Union[Clear, Segment]] = []

    def clear(self, color: RGB) -> None:
        self.calls.append(Clear(tuple(color)))

    def draw_line(self, start: Point, end: Point) -> None:
        self.calls.append(Segment(
            Point(*start), Point(*end), self.opacity, self.stroke_color, self.line_width
        ))

    @property
    def segments(self) -> List[Segment]:
        return [call for call in self.calls if isinstance(call, Segment)]

    def reset(self) -> None:
        self.calls.clear()
