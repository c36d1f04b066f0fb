"""
WebSocket Manager

Keeps viewer connections and pushes clock events (settings changes, pause
state) to every connected browser tab.
"""
import logging
import json
from typing import Set, Dict, Any, TYPE_CHECKING
from fastapi import WebSocket

if TYPE_CHECKING:
    from fractal_clock.clock import FractalClock


def clock_state(clock: 'FractalClock') -> Dict[str, Any]:
    """JSON-ready view of the clock settings plus pause state"""
    state = clock.settings.to_dict()
    state["line_color"] = list(state["line_color"])
    state["background_color"] = list(state["background_color"])
    state["is_paused"] = clock.is_paused
    return state


class WebSocketManager:
    """Manages WebSocket connections and event broadcasting"""

    def __init__(self):
        self.active_connections: Set[WebSocket] = set()

    async def connect(self, websocket: WebSocket, initial_data: dict = None):
        """Accept and register a new WebSocket connection

        Args:
            websocket: The WebSocket connection to register
            initial_data: Optional event dict sent right after the connection is accepted
        """
        await websocket.accept()
        self.active_connections.add(websocket)
        logging.info(f"WebSocket connected. Total connections: {len(self.active_connections)}")

        if initial_data:
            try:
                await websocket.send_text(json.dumps(initial_data))
            except Exception as e:
                logging.warning(f"Failed to send initial state: {e}")

    async def disconnect(self, websocket: WebSocket):
        """Unregister a WebSocket connection"""
        self.active_connections.discard(websocket)
        logging.info(f"WebSocket disconnected. Total connections: {len(self.active_connections)}")

    async def broadcast(self, event_type: str, data: Dict[str, Any]):
        """Broadcast an event to all connected WebSocket clients"""
        if not self.active_connections:
            return

        message = json.dumps({
            "event": event_type,
            "data": data
        })

        dead_connections = set()
        for websocket in list(self.active_connections):
            try:
                await websocket.send_text(message)
            except Exception as e:
                logging.warning(f"Failed to send to WebSocket client: {e}")
                dead_connections.add(websocket)

        for websocket in dead_connections:
            self.active_connections.discard(websocket)

        if dead_connections:
            logging.info(f"Removed {len(dead_connections)} dead WebSocket connections")

        logging.debug(f"Broadcasted {event_type} to {len(self.active_connections)} clients")

    async def broadcast_clock_state(self, clock: 'FractalClock'):
        """Push the clock's current settings and pause state"""
        await self.broadcast("settings", clock_state(clock))

    def get_connection_count(self) -> int:
        """Get the number of active WebSocket connections"""
        return len(self.active_connections)
