"""
Clock Routes

Frame delivery and settings control for the fractal clock.
"""
import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.responses import Response

from models.request_models import ClockSettingsRequest, KeyPressRequest, ResizeRequest
from utils.route_helpers import require_latest_frame, manager_operation
from managers.websocket_manager import clock_state

if TYPE_CHECKING:
    from managers.clock_manager import FractalClockManager
    from managers.websocket_manager import WebSocketManager


def setup_clock_routes(clock_manager: 'FractalClockManager',
                       websocket_manager: 'WebSocketManager' = None) -> APIRouter:
    """
    Setup clock routes with dependency injection

    Args:
        clock_manager: FractalClockManager driving the clock
        websocket_manager: Optional WebSocketManager for the /ws endpoint

    Returns:
        Configured APIRouter
    """
    router = APIRouter()

    @router.get("/clock/frame.png")
    async def get_frame():
        """Latest rendered frame"""
        frame = require_latest_frame(clock_manager)
        return Response(content=frame, media_type="image/png",
                        headers={"Cache-Control": "no-store"})

    @router.get("/clock/angles")
    async def get_angles():
        """Hand angles for the current instant"""
        return clock_manager.clock.update_angles().to_dict()

    @router.get("/clock/settings")
    async def get_settings():
        """Current clock settings and pause state"""
        return clock_state(clock_manager.clock)

    @router.put("/clock/settings")
    async def update_settings(request: ClockSettingsRequest):
        """Partially update settings, out-of-range values are clamped"""
        changes = request.model_dump(exclude_none=True)
        await manager_operation(clock_manager.update_settings(**changes), "update clock settings")
        return clock_state(clock_manager.clock)

    @router.post("/clock/key")
    async def press_key(request: KeyPressRequest):
        """Apply a keyboard binding"""
        handled = await manager_operation(clock_manager.handle_key(request.key), "handle key")
        if not handled:
            raise HTTPException(status_code=400, detail=f"Unbound key: {request.key!r}")
        return clock_state(clock_manager.clock)

    @router.post("/clock/color/random")
    async def randomize_color():
        """Pick a random line color"""
        color = await manager_operation(clock_manager.randomize_color(), "randomize color")
        return {"line_color": list(color)}

    @router.post("/clock/pause")
    async def toggle_pause():
        """Toggle the frame loop pause"""
        paused = await manager_operation(clock_manager.toggle_pause(), "toggle pause")
        return {"is_paused": paused}

    @router.post("/clock/resize")
    async def resize(request: ResizeRequest):
        """Change the canvas size in logical pixels"""
        clock_manager.clock.resize(request.width, request.height)
        return {"width": clock_manager.clock.width, "height": clock_manager.clock.height}

    if websocket_manager is not None:
        @router.websocket("/ws")
        async def clock_events(websocket: WebSocket):
            """Push settings events to the viewer"""
            await websocket_manager.connect(
                websocket, {"event": "settings", "data": clock_state(clock_manager.clock)}
            )
            try:
                while True:
                    # Viewers may send keys over the socket instead of POSTing them
                    key = await websocket.receive_text()
                    if not await clock_manager.handle_key(key):
                        logging.debug(f"Ignoring unbound key from WebSocket: {key!r}")
            except WebSocketDisconnect:
                await websocket_manager.disconnect(websocket)

    return router
