"""
Shared route helper utilities.

Reduces boilerplate in the clock routes for frame lookup and manager operations.
"""
import logging
from typing import Any, Coroutine

from fastapi import HTTPException


def require_latest_frame(clock_manager) -> bytes:
    """
    Return the most recent rendered frame.

    Args:
        clock_manager: FractalClockManager instance

    Returns:
        PNG bytes of the latest frame

    Raises:
        HTTPException: If no frame has been rendered yet
    """
    if clock_manager.latest_frame is None:
        raise HTTPException(status_code=503, detail="No frame rendered yet")
    return clock_manager.latest_frame


async def manager_operation(
    coro: Coroutine,
    error_context: str = "operation",
) -> Any:
    """
    Execute a manager operation with standard error handling.

    Args:
        coro: Awaitable coroutine to execute
        error_context: Context string for error logging

    Returns:
        The coroutine's result

    Raises:
        HTTPException: On error
    """
    try:
        return await coro
    except HTTPException:
        raise
    except Exception as e:
        logging.error(f"Failed to {error_context}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
