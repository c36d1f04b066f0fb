"""
Fractal Clock Canvas Main Application

This is the entry point for the Fractal Clock Canvas application.
It wires together the clock, its frame loop, outputs and API routes.
"""
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from fractal_clock.clock import FractalClock
from fractal_clock.settings import ClockSettings

# Managers
from managers.clock_manager import FractalClockManager
from managers.framebuffer_manager import FramebufferManager
from managers.websocket_manager import WebSocketManager

# API routes
from routes import setup_clock_routes, setup_system_routes

# Config
from config import (
    CANVAS_WIDTH,
    CANVAS_HEIGHT,
    PIXEL_RATIO,
    FRAMEBUFFER_ENABLED,
    FRAMES_PER_SECOND,
    DEFAULT_PORT,
    PRODUCTION_PORT,
)

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

INDEX_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "index.html")


def create_app(clock: Optional[FractalClock] = None, use_framebuffer: bool = FRAMEBUFFER_ENABLED,
               frames_per_second: int = FRAMES_PER_SECOND) -> FastAPI:
    """
    Build the FastAPI application around a single clock.

    The clock, frame loop and routes are created here and started by the
    lifespan handler, so tests can build isolated apps.
    """
    clock = clock or FractalClock(CANVAS_WIDTH, CANVAS_HEIGHT, ClockSettings(), pixel_ratio=PIXEL_RATIO)
    websocket_manager = WebSocketManager()
    framebuffer_manager = FramebufferManager() if use_framebuffer else None
    clock_manager = FractalClockManager(clock, framebuffer_manager, websocket_manager, frames_per_second)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan management for FastAPI application.
        Handles startup and shutdown tasks.
        """
        # STARTUP
        logging.info("Starting Fractal Clock Canvas application...")

        try:
            if framebuffer_manager:
                logging.info("Initializing framebuffer...")
                framebuffer_manager.initialize()

            logging.info(f"Starting frame loop ({clock.width}x{clock.height} @ {frames_per_second} fps)...")
            await clock_manager.start()

            logging.info("Fractal Clock Canvas application started successfully!")

        except Exception as e:
            logging.error(f"Failed to start Fractal Clock Canvas: {e}")
            import traceback
            logging.error(f"Traceback: {traceback.format_exc()}")
            raise

        yield  # Application is running

        # SHUTDOWN
        logging.info("Shutting down Fractal Clock Canvas application...")

        try:
            await clock_manager.stop()

            if framebuffer_manager:
                framebuffer_manager.cleanup()

            logging.info("Fractal Clock Canvas application shut down successfully!")

        except Exception as e:
            logging.error(f"Error during shutdown: {e}")

    app = FastAPI(
        title="Fractal Clock Canvas",
        description="Recursive fractal clock rendered in real time",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.clock_manager = clock_manager

    app.include_router(setup_clock_routes(clock_manager, websocket_manager))
    app.include_router(setup_system_routes(clock_manager))

    @app.get("/", response_class=HTMLResponse)
    async def web_interface():
        """Serve the viewer page"""
        try:
            with open(INDEX_PATH, "r") as f:
                return f.read()
        except FileNotFoundError:
            return """
            <h1>Error: index.html not found</h1>
            <p>The latest frame is available at <a href="/clock/frame.png">/clock/frame.png</a></p>
            <p>You can access the API documentation at <a href="/docs">/docs</a></p>
            """

    return app


# Default app for `uvicorn main:app`
app = create_app()


if __name__ == "__main__":
    import argparse
    import uvicorn

    # Parse command line arguments
    parser = argparse.ArgumentParser(description='Fractal Clock Canvas - real-time fractal clock server')
    parser.add_argument('--production', action='store_true',
                        help='Run in production mode (port 80)')
    parser.add_argument('--port', type=int, default=None,
                        help='Custom port (overrides --production)')
    parser.add_argument('--framebuffer', action='store_true',
                        help='Mirror frames to the Linux framebuffer')
    args = parser.parse_args()

    # Determine port
    if args.port:
        port = args.port
    elif args.production:
        port = PRODUCTION_PORT
    else:
        port = DEFAULT_PORT

    uvicorn.run(
        create_app(use_framebuffer=args.framebuffer or FRAMEBUFFER_ENABLED),
        host="0.0.0.0",
        port=port,
        log_level="info",
    )
