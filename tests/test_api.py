"""REST API endpoint tests."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from torus_snake.config import GameConfig
from torus_snake.server.app import create_app
from torus_snake.server.session_manager import SessionManager

BASE = "http://test"


@pytest.fixture()
def manager():
    return SessionManager()


@pytest.fixture()
def app(manager):
    application = create_app()
    application.state.session_manager = manager
    return application


@pytest.fixture()
async def client(app, manager):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c
    await manager.cleanup()


async def _create(client, **body) -> str:
    resp = await client.post("/sessions", json=body)
    assert resp.status_code == 201
    return resp.json()["session_id"]


class TestCreateSession:
    @pytest.mark.asyncio
    async def test_create_default(self, client):
        resp = await client.post("/sessions", json={})
        assert resp.status_code == 201
        data = resp.json()
        assert data["status"] == "idle"
        assert data["grid_width"] == 30
        assert data["grid_height"] == 50
        assert data["tick_rate_ms"] == 500
        assert "session_id" in data

    @pytest.mark.asyncio
    async def test_create_custom_surface(self, client):
        resp = await client.post("/sessions", json={
            "surface_width": 160,
            "surface_height": 320,
            "node_size": 16,
            "tick_rate_ms": 100,
        })
        assert resp.status_code == 201
        data = resp.json()
        assert data["grid_width"] == 10
        assert data["grid_height"] == 20
        assert data["tick_rate_ms"] == 100

    @pytest.mark.asyncio
    async def test_create_rejects_schema_violation(self, client):
        resp = await client.post("/sessions", json={"tick_rate_ms": 10})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_create_rejects_unplayable_surface(self, client):
        resp = await client.post("/sessions", json={
            "surface_width": 8, "node_size": 16,
        })
        assert resp.status_code == 422
        assert "node" in resp.json()["detail"]

    @pytest.mark.asyncio
    async def test_create_rejects_unknown_direction(self, client):
        resp = await client.post("/sessions", json={"direction": "north"})
        assert resp.status_code == 422


class TestListAndGet:
    @pytest.mark.asyncio
    async def test_list(self, client):
        await _create(client)
        await _create(client)
        resp = await client.get("/sessions")
        assert resp.status_code == 200
        assert len(resp.json()) == 2

    @pytest.mark.asyncio
    async def test_get_includes_state(self, client):
        session_id = await _create(client, seed=7)
        resp = await client.get(f"/sessions/{session_id}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["session_id"] == session_id
        assert data["connections"] == 0
        assert data["state"]["tick"] == 0
        assert len(data["state"]["snake"]["body"]) == 1

    @pytest.mark.asyncio
    async def test_get_missing(self, client):
        resp = await client.get("/sessions/nope")
        assert resp.status_code == 404


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_start_and_stop(self, client):
        session_id = await _create(client, tick_rate_ms=50)
        resp = await client.post(f"/sessions/{session_id}/start")
        assert resp.status_code == 200
        assert resp.json()["status"] == "running"

        resp = await client.post(f"/sessions/{session_id}/start")
        assert resp.status_code == 409

        resp = await client.post(f"/sessions/{session_id}/stop")
        assert resp.status_code == 200
        assert resp.json()["status"] == "stopped"

        listed = (await client.get("/sessions")).json()
        assert session_id not in [s["session_id"] for s in listed]

    @pytest.mark.asyncio
    async def test_stop_idle_conflict(self, client):
        session_id = await _create(client)
        resp = await client.post(f"/sessions/{session_id}/stop")
        assert resp.status_code == 409

    @pytest.mark.asyncio
    async def test_start_missing(self, client):
        resp = await client.post("/sessions/nope/start")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_stop_missing(self, client):
        resp = await client.post("/sessions/nope/stop")
        assert resp.status_code == 404


class TestSessionManager:
    @pytest.mark.asyncio
    async def test_prunes_stopped_sessions(self):
        manager = SessionManager(max_stopped_sessions=1)
        ids = [manager.create_session(GameConfig()).session_id for _ in range(3)]
        for session_id in ids:
            manager.start_session(session_id)
            await manager.stop_session(session_id)
        assert manager.get_session(ids[0]) is None
        assert manager.get_session(ids[1]) is None
        assert manager.get_session(ids[2]) is not None

    @pytest.mark.asyncio
    async def test_zero_retention_drops_on_stop(self):
        manager = SessionManager(max_stopped_sessions=0)
        session_id = manager.create_session(GameConfig()).session_id
        manager.start_session(session_id)
        await manager.stop_session(session_id)
        assert manager.get_session(session_id) is None

    @pytest.mark.asyncio
    async def test_cleanup_applies_retention(self):
        manager = SessionManager(max_stopped_sessions=1)
        ids = [manager.create_session(GameConfig()).session_id for _ in range(2)]
        for session_id in ids:
            manager.start_session(session_id)
        await manager.cleanup()
        assert [manager.get_session(i) is None for i in ids] == [True, False]

    def test_invalid_retention(self):
        with pytest.raises(ValueError, match=">= 0"):
            SessionManager(max_stopped_sessions=-1)
