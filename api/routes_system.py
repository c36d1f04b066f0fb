"""
System Routes

Handles health checks and status reporting.
"""
from datetime import datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter

if TYPE_CHECKING:
    from managers.clock_manager import FractalClockManager

VERSION = "1.0.0"


def setup_system_routes(clock_manager: 'FractalClockManager') -> APIRouter:
    """
    Setup system routes with dependency injection

    Args:
        clock_manager: FractalClockManager for frame loop status

    Returns:
        Configured APIRouter
    """
    router = APIRouter()

    @router.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy" if clock_manager.is_running else "stopped",
            "timestamp": datetime.now().isoformat(),
            "version": VERSION,
        }

    @router.get("/status")
    async def get_status():
        """Frame loop, framebuffer and viewer status"""
        status = clock_manager.get_status()
        status["timestamp"] = datetime.now().isoformat()
        return status

    return router
