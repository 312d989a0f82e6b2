"""Shared test fixtures for the meet query network."""

import json
import sys
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

# Ensure src/backend/ is on the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src" / "backend"))

from config.settings import Settings
from entities.shared.errors import StoreExecutionError
from entities.shared.history import InMemoryHistoryStore
from entities.shared.protocols import NoOpReporter
from entities.shared.run_state import RunState, RunStateHandle, ToolContext

# ---------------------------------------------------------------------------
# Protocol fakes
# ---------------------------------------------------------------------------

JAKOB_ROWS: list[dict[str, Any]] = [
    {
        "Name": "Jakob Heller",
        "Date": "2024-03-10",
        "MeetName": "Spring Open",
        "Best3SquatKg": 250.0,
        "Best3BenchKg": 170.0,
        "Best3DeadliftKg": 300.0,
        "TotalKg": 720.0,
    },
    {
        "Name": "Jakob Heller",
        "Date": "2023-11-04",
        "MeetName": "Autumn Classic",
        "Best3SquatKg": 240.0,
        "Best3BenchKg": 165.0,
        "Best3DeadliftKg": 290.0,
        "TotalKg": 695.0,
    },
]


class FakeResultStore:
    """In-memory fake satisfying the ``ResultStore`` protocol.

    Returns canned rows or raises ``StoreExecutionError``, and records
    every ``query`` call for assertions.
    """

    def __init__(
        self,
        rows: list[dict[str, Any]] | None = None,
        error: str | None = None,
    ) -> None:
        self.rows: list[dict[str, Any]] = rows or []
        self.error: str | None = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def query(self, query_text: str, parameters: dict[str, Any]) -> list[dict[str, Any]]:
        """Return a copy of the canned rows, or fail like an unreachable store."""
        self.calls.append((query_text, dict(parameters)))
        if self.error:
            raise StoreExecutionError(self.error)
        return [dict(row) for row in self.rows]


class FailingHistoryStore(InMemoryHistoryStore):
    """History store whose appends always fail."""

    async def append_results(self, thread_id, new_results, user_message=None) -> None:
        raise RuntimeError("history backend down")


class SpyReporter:
    """Spy satisfying the ``ProgressReporter`` protocol.

    Captures every ``step_start`` / ``step_end`` call for assertions.
    """

    def __init__(self) -> None:
        self.events: list[dict[str, str | None]] = []

    def step_start(self, step: str, run_id: str | None = None) -> None:
        """Record a step-start event."""
        self.events.append({"step": step, "status": "started", "run_id": run_id})

    def step_end(self, step: str, run_id: str | None = None) -> None:
        """Record a step-end event."""
        self.events.append({"step": step, "status": "completed", "run_id": run_id})


# ---------------------------------------------------------------------------
# Agent helpers
# ---------------------------------------------------------------------------


def scripted_agent(*texts: str) -> MagicMock:
    """Build a mock ChatAgent whose successive ``run`` calls return *texts*."""
    agent = MagicMock()
    responses = []
    for text in texts:
        response = MagicMock()
        response.text = text
        responses.append(response)
    agent.run = AsyncMock(side_effect=responses)
    return agent


def route_call(
    agent: str,
    *,
    is_powerlifting_query: bool | None = True,
    reasoning: str = "test routing",
) -> str:
    """JSON text of a ``route_to_agent`` call."""
    arguments: dict[str, Any] = {"agent": agent, "reasoning": reasoning}
    if is_powerlifting_query is not None:
        arguments["isPowerliftingQuery"] = is_powerlifting_query
    return json.dumps({"tool": "route_to_agent", "arguments": arguments})


def meet_query_call(
    filters: list[dict[str, Any]] | None = None,
    **options: Any,
) -> str:
    """JSON text of a ``get_meet_results`` call."""
    arguments: dict[str, Any] = {"filters": filters or [], **options}
    return json.dumps({"tool": "get_meet_results", "arguments": arguments})


def make_context(
    original_input: str = "How did Jakob Heller do?",
    store: Any = None,
    **kwargs: Any,
) -> ToolContext:
    """Build a ``ToolContext`` over a fresh run state."""
    handle = RunStateHandle(RunState(original_input=original_input, thread_id="thread-1"))
    return ToolContext(state=handle, store=store, **kwargs)


# ---------------------------------------------------------------------------
# Pytest fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings() -> Settings:
    """Return a ``Settings`` instance populated with safe test defaults."""
    return Settings(
        azure_ai_project_endpoint="https://test.services.ai.azure.com/api/projects/test",
        azure_ai_model_deployment_name="test-model",
        clickhouse_host="clickhouse.test",
        clickhouse_password="secret",
        meet_results_table="powerlifting-records",
    )


@pytest.fixture
def fake_store() -> FakeResultStore:
    """Return a ``FakeResultStore`` holding two meet results."""
    return FakeResultStore(rows=JAKOB_ROWS)


@pytest.fixture
def history() -> InMemoryHistoryStore:
    """Return an empty ``InMemoryHistoryStore``."""
    return InMemoryHistoryStore()


@pytest.fixture
def spy_reporter() -> SpyReporter:
    """Return a fresh ``SpyReporter`` instance."""
    return SpyReporter()


@pytest.fixture
def noop_reporter() -> NoOpReporter:
    """Return a ``NoOpReporter`` from the protocols module."""
    return NoOpReporter()
