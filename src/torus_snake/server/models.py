"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class SessionStatus(str, enum.Enum):
    """Lifecycle states for a game session."""

    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    surface_width: float = Field(default=480.0, gt=0)
    surface_height: float = Field(default=800.0, gt=0)
    node_size: float = Field(default=16.0, gt=0)
    tick_rate_ms: int = Field(default=500, ge=50, le=5000)
    direction: str = "left"
    seed: int | None = None


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: SessionStatus
    grid_width: int
    grid_height: int
    tick_rate_ms: int


class TouchPoint(BaseModel):
    """A pointer location in surface coordinates."""

    x: float
    y: float
