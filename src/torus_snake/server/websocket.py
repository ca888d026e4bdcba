"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from torus_snake.input import parse_direction
from torus_snake.server.models import SessionStatus, TouchPoint
from torus_snake.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Send touches or directions, receive game state each tick."""
    session = _get_manager(websocket).get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return
    if session.status == SessionStatus.STOPPED:
        await websocket.close(code=4009, reason="Session stopped.")
        return

    await websocket.accept()
    session.sockets.append(websocket)
    logger.info("Client connected to session %s.", session_id)

    try:
        # Send the current state so the client can draw before the next tick.
        await websocket.send_text(
            json.dumps(session.model.get_state(), separators=(",", ":")),
        )
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            if "touch" in msg:
                try:
                    point = TouchPoint.model_validate(msg["touch"])
                except ValidationError:
                    continue
                await session.loop.touch(point.x, point.y)
                continue

            direction_str = msg.get("direction")
            if not isinstance(direction_str, str):
                continue
            direction = parse_direction(direction_str)
            if direction is None:
                continue
            await session.loop.set_direction(direction)
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session_id)
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
