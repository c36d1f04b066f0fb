"""
FractalClock - Ties time, settings and the recursive renderer together
Owns pause state, the FPS overlay and key handling for one clock instance
"""

import logging
import time
from datetime import datetime
from typing import Callable, Optional

from PIL import Image, ImageDraw, ImageFont

from config import FPS_FONT_PATH, FPS_FONT_SIZE, SCALE_STEP, OPACITY_STEP
from .angles import Angles, compute_angles
from .renderer import RecursiveHandRenderer
from .settings import ClockSettings
from .surface import ImageSurface


class FpsCounter:
    """Frames per second from the interval between consecutive ticks"""

    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        self._clock = clock
        self.last_timestamp: Optional[float] = None
        self.fps = 0

    def tick(self) -> int:
        timestamp = self._clock()
        if self.last_timestamp is not None and timestamp > self.last_timestamp:
            self.fps = round(1 / (timestamp - self.last_timestamp))
        self.last_timestamp = timestamp
        return self.fps

    def reset(self) -> None:
        self.last_timestamp = None
        self.fps = 0


class FractalClock:
    """A single fractal clock rendered to PIL images"""

    def __init__(self, width: int, height: int, settings: Optional[ClockSettings] = None,
                 time_source: Callable[[], datetime] = datetime.now,
                 pixel_ratio: float = 1.0, fps_counter: Optional[FpsCounter] = None):
        self.width = width
        self.height = height
        self.pixel_ratio = pixel_ratio
        self.settings = settings or ClockSettings()
        self.time_source = time_source
        self.fps_counter = fps_counter or FpsCounter()

        self.is_paused = False
        self.angles: Optional[Angles] = None
        self.frame_count = 0

        issues = self.settings.validate()
        if issues:
            logging.warning(f"Clock settings issues: {issues}")

        try:
            self.font = ImageFont.truetype(FPS_FONT_PATH, int(FPS_FONT_SIZE * pixel_ratio))
        except OSError:
            self.font = ImageFont.load_default()

    def update_angles(self) -> Angles:
        """Recompute hand angles for the current instant"""
        self.angles = compute_angles(self.time_source())
        return self.angles

    def render(self) -> Image.Image:
        """Render one frame at the current time"""
        angles = self.update_angles()
        config = self.settings.snapshot()

        surface = ImageSurface.from_logical_size(self.width, self.height, self.pixel_ratio)
        RecursiveHandRenderer(surface).render(angles, config)

        fps = self.fps_counter.tick()
        if self.settings.show_fps:
            self._draw_fps_overlay(surface.image, fps)

        self.frame_count += 1
        return surface.to_image()

    def _draw_fps_overlay(self, img: Image.Image, fps: int) -> None:
        """Draw the FPS counter box in the top-right corner"""
        draw = ImageDraw.Draw(img, 'RGBA')
        text = f"{fps}FPS"

        margin = int(5 * self.pixel_ratio)
        padding = int(4 * self.pixel_ratio)
        bbox = draw.textbbox((0, 0), text, font=self.font)
        text_width = bbox[2] - bbox[0]
        text_height = bbox[3] - bbox[1]

        right = img.width - margin
        left = right - text_width - 2 * padding
        top = margin
        bottom = top + text_height + 2 * padding

        draw.rectangle([left, top, right, bottom], fill=(0, 0, 0, 77), outline=(255, 255, 255, 77))
        draw.text((left + padding - bbox[0], top + padding - bbox[1]), text,
                  fill=(255, 255, 255, 255), font=self.font)

    def resize(self, width: int, height: int) -> None:
        self.width = max(0, int(width))
        self.height = max(0, int(height))
        logging.info(f"Clock resized to {self.width}x{self.height}")

    def toggle_pause(self) -> bool:
        self.is_paused = not self.is_paused
        if self.is_paused:
            logging.info("Clock paused")
        else:
            # Avoid reporting the paused gap as one slow frame
            self.fps_counter.reset()
            logging.info("Clock resumed")
        return self.is_paused

    def handle_key(self, key: str) -> bool:
        """Apply a keyboard binding. Returns True if the key is bound."""
        settings = self.settings

        if key == "ArrowLeft":
            settings.adjust_scale(-SCALE_STEP)
        elif key == "ArrowRight":
            settings.adjust_scale(SCALE_STEP)
        elif key == "ArrowUp":
            settings.adjust_opacity(OPACITY_STEP)
        elif key == "ArrowDown":
            settings.adjust_opacity(-OPACITY_STEP)
        elif key.lower() == "c":
            settings.randomize_line_color()
        elif key.lower() == "f":
            settings.toggle_fps()
        elif len(key) == 1 and key in "0123456789":
            settings.set_depth_from_digit(int(key))
        elif key in (" ", "Space", "Spacebar"):
            self.toggle_pause()
        else:
            return False

        logging.debug(f"Handled key {key!r}")
        return True

    def get_status(self) -> dict:
        """Get current status information"""
        return {
            "width": self.width,
            "height": self.height,
            "pixel_ratio": self.pixel_ratio,
            "is_paused": self.is_paused,
            "fps": self.fps_counter.fps,
            "frame_count": self.frame_count,
        }
