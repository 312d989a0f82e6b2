"""Run state shared across the turns of one network run.

The network owns the single ``RunState`` of a run. Agents see it only
as a frozen ``RunStateSnapshot`` (for prompt rendering); tools change it
only by applying explicit ``StateUpdate`` values through a
``RunStateHandle``.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from entities.shared.protocols import ResultStore

logger = logging.getLogger(__name__)

_UNSET: Any = object()


@dataclass
class RunState:
    """Mutable record for one orchestration run."""

    original_input: str
    user_id: str | None = None
    thread_id: str | None = None
    message_id: str | None = None
    meet_results: list[dict[str, Any]] = field(default_factory=list)
    is_in_domain: bool | None = None
    routing_reasoning: str | None = None
    completed: bool = False


@dataclass(frozen=True)
class RunStateSnapshot:
    """Read-only copy of ``RunState`` taken between turns."""

    original_input: str
    user_id: str | None
    thread_id: str | None
    message_id: str | None
    meet_results: tuple[MappingProxyType, ...]
    is_in_domain: bool | None
    routing_reasoning: str | None
    completed: bool

    def results_as_list(self) -> list[dict[str, Any]]:
        """Return the results as plain dicts, e.g. for JSON rendering."""
        return [dict(row) for row in self.meet_results]


@dataclass(frozen=True)
class StateUpdate:
    """An explicit set of field changes to apply to a ``RunState``.

    Fields left unset are not touched. ``meet_results`` replaces the
    previous results wholesale.
    """

    meet_results: list[dict[str, Any]] = _UNSET
    is_in_domain: bool | None = _UNSET
    routing_reasoning: str | None = _UNSET
    completed: bool = _UNSET

    def changes(self) -> dict[str, Any]:
        """Return only the fields this update sets."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not _UNSET}


class RunStateHandle:
    """Mutation handle for the run state, passed to tools.

    Holds the live state without exposing it. Every ``apply`` is
    synchronous, so a cancelled tool call never leaves a partial write.

    Args:
        state: The run's live state.
    """

    def __init__(self, state: RunState) -> None:
        self._state = state
        self._mutation_count = 0

    @property
    def mutation_count(self) -> int:
        """Number of updates applied so far."""
        return self._mutation_count

    def snapshot(self) -> RunStateSnapshot:
        """Return a read-only copy of the current state."""
        state = self._state
        return RunStateSnapshot(
            original_input=state.original_input,
            user_id=state.user_id,
            thread_id=state.thread_id,
            message_id=state.message_id,
            meet_results=tuple(MappingProxyType(copy.deepcopy(row)) for row in state.meet_results),
            is_in_domain=state.is_in_domain,
            routing_reasoning=state.routing_reasoning,
            completed=state.completed,
        )

    def apply(self, update: StateUpdate) -> None:
        """Apply an update to the live state.

        Args:
            update: Field changes to apply.
        """
        changes = update.changes()
        if not changes:
            return
        if "meet_results" in changes:
            changes["meet_results"] = [dict(row) for row in changes["meet_results"]]
        for name, value in changes.items():
            setattr(self._state, name, value)
        self._mutation_count += 1
        logger.debug("Applied state update: %s", sorted(changes))


@dataclass(frozen=True)
class ToolContext:
    """Invocation context injected into tool handlers.

    Attributes:
        state: Mutation handle for the run state.
        store: Store collaborator for tools that query data.
        table: Table the meet query tool reads from.
        strict_columns: Fail compilation on unknown filter columns.
    """

    state: RunStateHandle
    store: ResultStore | None = None
    table: str = "powerlifting-records"
    strict_columns: bool = True
