"""Tests for the HTTP API.

The network is injected into ``app.state`` so no Azure credentials or
ClickHouse are needed. Lifespan startup is not triggered.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from api.main import app
from config.settings import Settings
from entities.network import MeetQueryNetwork, build_participants
from entities.shared.errors import TurnBudgetExceeded
from entities.shared.history import InMemoryHistoryStore
from fastapi.testclient import TestClient
from models import AgentName, RunStatus
from tests.conftest import JAKOB_ROWS, FakeResultStore, route_call, scripted_agent

_SUMMARY = AgentName.MEET_SUMMARY.value


@pytest.fixture
def client(test_settings: Settings) -> Iterator[TestClient]:
    """Yield a TestClient with clean app state."""
    app.state.settings = test_settings
    app.state.history = InMemoryHistoryStore()
    app.state.network = None
    yield TestClient(app)
    for name in ("settings", "history", "network"):
        if hasattr(app.state, name):
            delattr(app.state, name)


def _install_network(supervisor, summary=None, **kwargs) -> MeetQueryNetwork:
    network = MeetQueryNetwork(
        participants=build_participants(supervisor, scripted_agent(), summary or scripted_agent()),
        store=FakeResultStore(rows=JAKOB_ROWS),
        history=app.state.history,
        **kwargs,
    )
    app.state.network = network
    return network


class TestHealth:
    """Health endpoint."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "network_ready": False}


class TestCreateRun:
    """``POST /api/runs``."""

    def test_completed_run(self, client: TestClient) -> None:
        _install_network(
            scripted_agent(route_call(_SUMMARY, is_powerlifting_query=False)),
            scripted_agent("I only know powerlifting."),
        )

        response = client.post("/api/runs", json={"input": "Hi there", "threadId": "t-1"})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "completed"
        assert body["answer"] == "I only know powerlifting."
        assert body["threadId"] == "t-1"
        assert body["resultCount"] == 0
        assert [turn["agent"] for turn in body["turns"]] == ["Supervisor", _SUMMARY]

    def test_history_endpoint_after_run(self, client: TestClient) -> None:
        _install_network(scripted_agent(route_call(_SUMMARY)), scripted_agent("answer"))

        client.post("/api/runs", json={"input": "Who is strongest?", "threadId": "t-9"})
        response = client.get("/api/threads/t-9")

        assert response.status_code == 200
        body = response.json()
        assert body["threadId"] == "t-9"
        assert body["entries"][0]["content"] == "Who is strongest?"
        assert len(body["entries"]) == 3

    def test_unknown_thread(self, client: TestClient) -> None:
        assert client.get("/api/threads/missing").status_code == 404

    def test_contract_violation_is_sanitized(self, client: TestClient) -> None:
        _install_network(scripted_agent("no routing call here"))

        response = client.post("/api/runs", json={"input": "q", "threadId": "t-1"})

        assert response.status_code == 500
        body = response.json()
        assert body["status"] == RunStatus.FAILED.value
        assert body["error"] == "An internal error occurred. Please try again."
        assert len(body["correlation_id"]) == 12
        assert "Supervisor" not in body["error"]

    def test_turn_budget_is_sanitized(self, client: TestClient) -> None:
        network = MagicMock()
        network.run = AsyncMock(side_effect=TurnBudgetExceeded(12))
        app.state.network = network

        response = client.post("/api/runs", json={"input": "q", "threadId": "t-1"})

        assert response.status_code == 500
        assert "turn budget" not in response.text

    def test_unexpected_failure_is_sanitized(self, client: TestClient) -> None:
        network = MagicMock()
        network.run = AsyncMock(side_effect=RuntimeError("secret connection string"))
        app.state.network = network

        response = client.post("/api/runs", json={"input": "q", "threadId": "t-1"})

        assert response.status_code == 500
        assert "secret" not in response.text
        assert response.json()["correlation_id"]

    def test_timeout(self, client: TestClient, test_settings: Settings) -> None:
        async def _slow(_request):
            await asyncio.sleep(5)

        network = MagicMock()
        network.run = AsyncMock(side_effect=_slow)
        app.state.network = network
        app.state.settings = test_settings.model_copy(update={"run_timeout_seconds": 0.01})

        response = client.post("/api/runs", json={"input": "q", "threadId": "t-1"})

        assert response.status_code == 504
        assert response.json()["status"] == RunStatus.FAILED.value

    def test_rejects_empty_input(self, client: TestClient) -> None:
        _install_network(scripted_agent())

        response = client.post("/api/runs", json={"input": "", "threadId": "t-1"})

        assert response.status_code == 422

    def test_network_not_initialized(self, client: TestClient) -> None:
        response = client.post("/api/runs", json={"input": "q", "threadId": "t-1"})

        assert response.status_code == 503
