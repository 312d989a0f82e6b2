"""Error taxonomy for query compilation, tool execution, and orchestration.

Compilation and tool-level errors are recovered close to where they occur
and folded into the conversational output. Only ``NetworkError``
subclasses escape a network run.
"""

from __future__ import annotations


class MeetQueryError(Exception):
    """Base class for every error raised by this package."""


class UnknownColumnError(MeetQueryError, ValueError):
    """A column name outside the declared schema was referenced."""

    def __init__(self, column: str) -> None:
        super().__init__(f"Unknown column: {column!r}")
        self.column = column


class StoreExecutionError(MeetQueryError):
    """The data store failed to execute a compiled query."""


class NetworkError(MeetQueryError):
    """Structural failure of a network run. Fatal for the run."""


class RoutingContractViolation(NetworkError):
    """The supervisor turn produced no valid next participant."""


class TurnBudgetExceeded(NetworkError):
    """The run hit its turn ceiling without reaching completion."""

    def __init__(self, max_turns: int) -> None:
        super().__init__(f"Run exceeded the turn budget of {max_turns} turns")
        self.max_turns = max_turns
