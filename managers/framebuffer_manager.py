"""
Framebuffer Manager

Direct framebuffer output for rendered clock frames.
"""
import logging
import mmap
from typing import Tuple

import numpy as np
from PIL import Image

from config import FRAMEBUFFER_DEVICE


def rgb_to_fb_data(img_array: np.ndarray, bpp: int) -> np.ndarray:
    """Convert an RGB888 array to framebuffer pixel values (RGB565 or 32-bit XRGB)"""
    if bpp == 16:
        r = (img_array[:, :, 0] >> 3).astype(np.uint16)
        g = (img_array[:, :, 1] >> 2).astype(np.uint16)
        b = (img_array[:, :, 2] >> 3).astype(np.uint16)
        return (r << 11) | (g << 5) | b

    r = img_array[:, :, 0].astype(np.uint32)
    g = img_array[:, :, 1].astype(np.uint32)
    b = img_array[:, :, 2].astype(np.uint32)
    return np.uint32(0xFF << 24) | (r << 16) | (g << 8) | b


class FramebufferManager:
    """Memory-mapped framebuffer writer for clock frames"""

    def __init__(self, fb_device: str = FRAMEBUFFER_DEVICE, sysfs_dir: str = "/sys/class/graphics/fb0"):
        self.fb_device = fb_device
        self.sysfs_dir = sysfs_dir

        # Actual framebuffer parameters, updated by _get_fb_info
        self.fb_width = 640
        self.fb_height = 480
        self.fb_bpp = 16
        self.fb_bytes_per_pixel = self.fb_bpp // 8
        self.fb_size = self.fb_width * self.fb_height * self.fb_bytes_per_pixel

        self.fb_file = None
        self.fb_mmap = None
        self.fb_array = None
        self.is_available = False

    def initialize(self) -> bool:
        """Open and map the framebuffer. Returns False if it is not usable."""
        try:
            self._get_fb_info()

            self.fb_file = open(self.fb_device, 'r+b')
            self.fb_mmap = mmap.mmap(self.fb_file.fileno(), self.fb_size)

            dtype = np.uint16 if self.fb_bpp == 16 else np.uint32
            self.fb_array = np.frombuffer(self.fb_mmap, dtype=dtype).reshape((self.fb_height, self.fb_width))

            self.is_available = True
            logging.info(f"Framebuffer initialized: {self.fb_width}x{self.fb_height}, {self.fb_bpp}bpp")

        except Exception as e:
            logging.warning(f"Framebuffer not available: {e}")
            self.cleanup()
            self.is_available = False

        return self.is_available

    def _get_fb_info(self) -> None:
        """Read framebuffer geometry from sysfs"""
        try:
            with open(f"{self.sysfs_dir}/virtual_size", 'r') as f:
                self.fb_width, self.fb_height = map(int, f.read().strip().split(','))

            with open(f"{self.sysfs_dir}/bits_per_pixel", 'r') as f:
                self.fb_bpp = int(f.read().strip())

        except Exception as e:
            logging.warning(f"Could not read framebuffer info, using defaults: {e}")

        self.fb_bytes_per_pixel = self.fb_bpp // 8
        self.fb_size = self.fb_width * self.fb_height * self.fb_bytes_per_pixel

    @staticmethod
    def fit_to_size(img: Image.Image, target_width: int, target_height: int,
                    border: Tuple[int, int, int] = (0, 0, 0)) -> Image.Image:
        """Resize preserving aspect ratio, letterboxing where the ratios differ"""
        orig_width, orig_height = img.size
        if (orig_width, orig_height) == (target_width, target_height):
            return img
        if orig_width == 0 or orig_height == 0:
            return Image.new('RGB', (target_width, target_height), border)

        scale = min(target_width / orig_width, target_height / orig_height)
        new_width = max(1, int(orig_width * scale))
        new_height = max(1, int(orig_height * scale))
        scaled_img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)

        if (new_width, new_height) == (target_width, target_height):
            return scaled_img

        canvas = Image.new('RGB', (target_width, target_height), border)
        canvas.paste(scaled_img, ((target_width - new_width) // 2, (target_height - new_height) // 2))
        return canvas

    def display_frame(self, img: Image.Image, border: Tuple[int, int, int] = (0, 0, 0)) -> bool:
        """Write a rendered frame to the framebuffer"""
        if not self.is_available:
            return False

        try:
            if img.mode != 'RGB':
                img = img.convert('RGB')

            fitted = self.fit_to_size(img, self.fb_width, self.fb_height, border)
            np.copyto(self.fb_array, rgb_to_fb_data(np.asarray(fitted), self.fb_bpp))
            return True

        except Exception as e:
            logging.error(f"Failed to display frame on framebuffer: {e}")
            return False

    def clear_screen(self, color: Tuple[int, int, int] = (0, 0, 0)) -> bool:
        """Clear framebuffer to solid color"""
        if not self.is_available:
            return False

        try:
            pixel = np.array([[color]], dtype=np.uint8)
            self.fb_array.fill(rgb_to_fb_data(pixel, self.fb_bpp)[0, 0])
            self.fb_mmap.flush()
            return True

        except Exception as e:
            logging.error(f"Failed to clear framebuffer: {e}")
            return False

    def cleanup(self) -> None:
        """Release framebuffer resources"""
        try:
            # The numpy view must go before the mmap can close
            self.fb_array = None

            if self.fb_mmap is not None:
                try:
                    self.fb_mmap.flush()
                except Exception as flush_error:
                    logging.warning(f"Failed to flush framebuffer: {flush_error}")
                self.fb_mmap.close()
                self.fb_mmap = None

            if self.fb_file is not None:
                self.fb_file.close()
                self.fb_file = None

            logging.debug("Framebuffer resources cleaned up")

        except Exception as e:
            logging.error(f"Error cleaning up framebuffer: {e}")

        self.is_available = False

    def get_status(self) -> dict:
        return {
            "available": self.is_available,
            "device": self.fb_device,
            "width": self.fb_width,
            "height": self.fb_height,
            "bpp": self.fb_bpp,
        }
