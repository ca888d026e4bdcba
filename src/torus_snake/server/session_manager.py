"""In-memory session registry and lifecycle management."""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from collections import deque
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from torus_snake.config import GameConfig
from torus_snake.engine import GridModel
from torus_snake.loop import GameLoop
from torus_snake.server.models import SessionStatus, SessionSummary

logger = logging.getLogger(__name__)

_MAX_STOPPED_SESSIONS = 100


@dataclass
class Session:
    """All state for a single game session."""

    session_id: str
    config: GameConfig
    loop: GameLoop
    status: SessionStatus = SessionStatus.IDLE
    sockets: list[WebSocket] = field(default_factory=list)
    _sends: set[asyncio.Task] = field(default_factory=set, repr=False)

    @property
    def model(self) -> GridModel:
        return self.loop.model

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            status=self.status,
            grid_width=self.model.grid.width,
            grid_height=self.model.grid.height,
            tick_rate_ms=self.loop.tick_rate_ms,
        )


class SessionManager:
    """Central registry managing all game sessions."""

    def __init__(self, max_stopped_sessions: int = _MAX_STOPPED_SESSIONS) -> None:
        if max_stopped_sessions < 0:
            raise ValueError("max_stopped_sessions must be >= 0.")
        self._sessions: dict[str, Session] = {}
        self._max_stopped_sessions = max_stopped_sessions
        self._stopped: deque[str] = deque()

    def create_session(self, config: GameConfig) -> Session:
        """Build a model and loop for *config* and register the session.

        Raises :class:`~torus_snake.config.InitializationError` if the
        config cannot produce a playable grid.
        """
        model = GridModel.from_config(config)
        loop = GameLoop(
            model,
            tick_rate_ms=config.tick_rate_ms,
            surface=(config.surface_width, config.surface_height),
        )
        session_id = uuid.uuid4().hex[:12]
        session = Session(session_id=session_id, config=config, loop=loop)
        loop.add_renderer(lambda state: self._schedule_broadcast(session, state))
        self._sessions[session_id] = session
        logger.info(
            "Session %s created (grid %dx%d).",
            session_id, model.grid.width, model.grid.height,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        """Return summaries of sessions that have not been stopped."""
        return [
            s.summary() for s in self._sessions.values()
            if s.status != SessionStatus.STOPPED
        ]

    def start_session(self, session_id: str) -> None:
        """Start the tick loop of an idle session."""
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        if session.status != SessionStatus.IDLE:
            raise ValueError("Session is not idle.")
        session.loop.start()
        session.status = SessionStatus.RUNNING
        logger.info("Session %s started.", session_id)

    async def stop_session(self, session_id: str) -> None:
        """Stop a running session; no further ticks occur afterwards."""
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        if session.status != SessionStatus.RUNNING:
            raise ValueError("Session is not running.")
        await self._stop(session)

    async def _stop(self, session: Session) -> None:
        await session.loop.stop()
        session.status = SessionStatus.STOPPED
        if session._sends:
            await asyncio.gather(*session._sends, return_exceptions=True)
        await self._close_connections(session)
        logger.info(
            "Session %s stopped at tick %d with score %d.",
            session.session_id, session.model.tick, session.model.score,
        )

        # Retain only the most recently stopped sessions.
        self._stopped.append(session.session_id)
        while len(self._stopped) > self._max_stopped_sessions:
            self._sessions.pop(self._stopped.popleft(), None)

    def _schedule_broadcast(self, session: Session, state: dict) -> None:
        """Renderer hook: push the new state to every connected socket."""
        if not session.sockets:
            return
        task = asyncio.get_running_loop().create_task(
            self._broadcast(session, state),
        )
        session._sends.add(task)
        task.add_done_callback(session._sends.discard)

    async def _broadcast(self, session: Session, state: dict) -> None:
        """Send game state to all connected sockets."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def _close_connections(self, session: Session) -> None:
        """Close any live sockets of a stopped session."""
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session stopped.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )
        session.sockets.clear()

    async def cleanup(self) -> None:
        """Stop every running tick loop."""
        running = [
            s for s in self._sessions.values()
            if s.status == SessionStatus.RUNNING
        ]
        for session in running:
            await self._stop(session)
        logger.info("SessionManager cleanup complete.")
