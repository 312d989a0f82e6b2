"""Protocol interfaces for I/O boundaries.

These protocols enable dependency injection for testability.
Production implementations wrap ClickHouse and agent clients; test
fakes return canned data with zero network or filesystem access.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from entities.shared.run_state import RunStateSnapshot
    from models import TurnRecord


@runtime_checkable
class ResultStore(Protocol):
    """Executes compiled queries with named-parameter binding.

    Returns the result rows in store order. Raises
    ``StoreExecutionError`` when the store rejects or fails the query.
    """

    async def query(
        self,
        query_text: str,
        parameters: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """Execute a compiled query.

        Args:
            query_text: Query with typed named placeholders.
            parameters: Placeholder name → bound value.

        Returns:
            Row dicts keyed by column name.
        """
        ...


@runtime_checkable
class HistoryStore(Protocol):
    """Conversation history keyed by thread ID."""

    async def create_thread(self, state: RunStateSnapshot) -> str:
        """Create (or adopt) the thread for a run.

        Args:
            state: Initial snapshot of the run.

        Returns:
            The thread ID to use for the run.
        """
        ...

    async def get(self, thread_id: str) -> list[dict[str, Any]]:
        """Return stored entries for a thread, oldest first.

        Args:
            thread_id: Conversation thread ID.

        Returns:
            Stored history entries (empty if the thread is unknown).
        """
        ...

    async def append_results(
        self,
        thread_id: str,
        new_results: Sequence[TurnRecord],
        user_message: str | None = None,
    ) -> None:
        """Append turn results to a thread.

        Args:
            thread_id: Conversation thread ID.
            new_results: Turns to append, in turn order.
            user_message: The user's message that started the run, if new.
        """
        ...


@runtime_checkable
class ProgressReporter(Protocol):
    """Reports step-level progress for streaming UI updates.

    ``run_id`` scopes a step to one run, so a reporter shared by
    concurrent runs can pair each end with its own start.
    """

    def step_start(self, step: str, run_id: str | None = None) -> None:
        """Signal that a named step has started.

        Args:
            step: Human-readable step label.
            run_id: Identifier of the run the step belongs to.
        """
        ...

    def step_end(self, step: str, run_id: str | None = None) -> None:
        """Signal that a named step has completed.

        Args:
            step: Human-readable step label (must match a prior start).
            run_id: Identifier of the run the step belongs to.
        """
        ...


# ---------------------------------------------------------------------------
# Concrete implementations
# ---------------------------------------------------------------------------


class NoOpReporter:
    """ProgressReporter that silently discards all events.

    Useful in tests and contexts where no streaming UI exists.
    """

    def step_start(self, step: str, run_id: str | None = None) -> None:
        """No-op."""

    def step_end(self, step: str, run_id: str | None = None) -> None:
        """No-op."""


class LoggingReporter:
    """ProgressReporter that logs step boundaries and durations.

    Start times are keyed by run and step, so one instance can serve
    overlapping runs.

    Args:
        log: Logger to write to. Defaults to this module's logger.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger
        self._start_times: dict[tuple[str | None, str], float] = {}

    def step_start(self, step: str, run_id: str | None = None) -> None:
        """Record start time and log the step.

        Args:
            step: Human-readable step label.
            run_id: Identifier of the run the step belongs to.
        """
        self._start_times[(run_id, step)] = time.monotonic()
        self._log.info("[%s] Step started: %s", run_id or "-", step)

    def step_end(self, step: str, run_id: str | None = None) -> None:
        """Log the step with its duration.

        Args:
            step: Human-readable step label (must match a prior start).
            run_id: Identifier of the run the step belongs to.
        """
        start_time = self._start_times.pop((run_id, step), None)
        duration_ms = int((time.monotonic() - start_time) * 1000) if start_time is not None else None
        self._log.info("[%s] Step completed: %s (duration_ms=%s)", run_id or "-", step, duration_ms)
