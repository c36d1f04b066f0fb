"""
Fractal Clock Manager

Drives the fractal clock from an asyncio frame loop, keeps the latest frame
as PNG for the web viewer and mirrors it to the framebuffer when present.
"""
import asyncio
import io
import logging
import time
from typing import Optional

from PIL import Image

from config import FRAMES_PER_SECOND, PNG_COMPRESS_LEVEL
from fractal_clock.clock import FractalClock
from managers.framebuffer_manager import FramebufferManager
from managers.websocket_manager import WebSocketManager


def encode_png(img: Image.Image) -> bytes:
    """Encode a frame as PNG with fast compression"""
    buffer = io.BytesIO()
    img.save(buffer, format='PNG', compress_level=PNG_COMPRESS_LEVEL)
    return buffer.getvalue()


class FractalClockManager:
    """Owns the frame loop for one FractalClock"""

    def __init__(self, clock: FractalClock, framebuffer_manager: Optional[FramebufferManager] = None,
                 websocket_manager: Optional[WebSocketManager] = None,
                 frames_per_second: int = FRAMES_PER_SECOND):
        self.clock = clock
        self.framebuffer = framebuffer_manager
        self.websocket_manager = websocket_manager
        self.frame_interval = 1.0 / max(1, frames_per_second)

        self.is_running = False
        self.frame_task: Optional[asyncio.Task] = None
        self.latest_frame: Optional[bytes] = None
        self.latest_frame_time: Optional[float] = None
        self.render_errors = 0

    def render_frame(self) -> bytes:
        """Render, encode and publish one frame. Runs to completion on the calling thread."""
        img = self.clock.render()
        self.latest_frame = encode_png(img)
        self.latest_frame_time = time.time()

        if self.framebuffer and self.framebuffer.is_available:
            self.framebuffer.display_frame(img, self.clock.settings.background_color)

        return self.latest_frame

    async def _frame_loop(self) -> None:
        """Render a frame every interval while the clock is not paused"""
        logging.info(f"Fractal clock frame loop started ({1 / self.frame_interval:.0f} fps target)")
        loop = asyncio.get_running_loop()
        next_time = loop.time()

        while True:
            try:
                if not self.clock.is_paused:
                    self.render_frame()

                next_time += self.frame_interval
                delay = next_time - loop.time()
                if delay <= 0:
                    # Fell behind, start counting from now instead of bursting
                    next_time = loop.time()
                    delay = 0
                await asyncio.sleep(delay)

            except asyncio.CancelledError:
                logging.info("Fractal clock frame loop stopped")
                raise
            except Exception as e:
                self.render_errors += 1
                logging.error(f"Error rendering fractal clock frame: {e}")
                await asyncio.sleep(self.frame_interval)

    async def start(self) -> bool:
        """Start the frame loop"""
        if self.is_running:
            return True

        self.frame_task = asyncio.create_task(self._frame_loop())
        self.is_running = True
        return True

    async def stop(self) -> None:
        """Stop the frame loop and wait for it to exit"""
        if self.frame_task:
            self.frame_task.cancel()
            try:
                await self.frame_task
            except asyncio.CancelledError:
                pass
            self.frame_task = None

        self.is_running = False
        logging.info("Fractal clock manager stopped")

    async def notify_settings_changed(self) -> None:
        """Broadcast current settings to connected viewers"""
        if self.websocket_manager:
            await self.websocket_manager.broadcast_clock_state(self.clock)

    async def handle_key(self, key: str) -> bool:
        handled = self.clock.handle_key(key)
        if handled:
            await self.notify_settings_changed()
        return handled

    async def update_settings(self, **changes) -> dict:
        self.clock.settings.update(**changes)
        logging.info(f"Clock settings updated: {changes}")
        await self.notify_settings_changed()
        return self.clock.settings.to_dict()

    async def randomize_color(self) -> tuple:
        color = self.clock.settings.randomize_line_color()
        await self.notify_settings_changed()
        return color

    async def toggle_pause(self) -> bool:
        paused = self.clock.toggle_pause()
        await self.notify_settings_changed()
        return paused

    def get_status(self) -> dict:
        """Get current status information"""
        status = {
            "is_running": self.is_running,
            "has_frame": self.latest_frame is not None,
            "latest_frame_time": self.latest_frame_time,
            "render_errors": self.render_errors,
            "clock": self.clock.get_status(),
        }
        if self.framebuffer:
            status["framebuffer"] = self.framebuffer.get_status()
        if self.websocket_manager:
            status["websocket_clients"] = self.websocket_manager.get_connection_count()
        return status
