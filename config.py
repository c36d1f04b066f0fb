"""
Fractal Clock Canvas Configuration

Central configuration file for all constants and settings.
"""
import os

# Clock defaults
DEFAULT_BACKGROUND_COLOR = (32, 32, 32)
DEFAULT_LINE_COLOR = (107, 228, 212)
DEFAULT_DEPTH = 10
DEFAULT_LINE_WIDTH = 2.0
DEFAULT_SCALE = 0.9
DEFAULT_OPACITY = 0.6
DEFAULT_SHOW_FPS = False

# Settings limits
MAX_DEPTH = 32
KEY_DEPTH_MAX = 9  # digit keys only reach 0-9
MIN_LINE_WIDTH = 0.1
SCALE_STEP = 0.05
OPACITY_STEP = 0.05

# Frame loop
FRAMES_PER_SECOND = int(os.getenv("FRACTAL_CLOCK_FPS", "24"))

# Canvas size in logical pixels, pixel ratio maps to device pixels
CANVAS_WIDTH = int(os.getenv("FRACTAL_CLOCK_WIDTH", "1280"))
CANVAS_HEIGHT = int(os.getenv("FRACTAL_CLOCK_HEIGHT", "720"))
PIXEL_RATIO = float(os.getenv("FRACTAL_CLOCK_PIXEL_RATIO", "1.0"))

# Framebuffer output
FRAMEBUFFER_DEVICE = os.getenv("FRACTAL_CLOCK_FB_DEVICE", "/dev/fb0")
FRAMEBUFFER_ENABLED = os.getenv("FRACTAL_CLOCK_FRAMEBUFFER", "0") == "1"

# FPS overlay
FPS_FONT_PATH = "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf"
FPS_FONT_SIZE = 12

# PNG encoding, 1 is fastest
PNG_COMPRESS_LEVEL = 1

# Server Configuration
DEFAULT_PORT = 8000
PRODUCTION_PORT = 80
