"""Routing state machine for the meet query network.

``Router.next`` is a pure function of the run state snapshot, evaluated
whenever no participant is scheduled: a completed run is done, anything
else goes to the supervisor. ``Router.on_route`` turns a supervisor turn
into the participant that runs next, or fails the run.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from entities.shared.errors import RoutingContractViolation
from models import AgentName

if TYPE_CHECKING:
    from entities.shared.run_state import RunStateSnapshot
    from models import TurnRecord

logger = logging.getLogger(__name__)

# Accepted spellings of each downstream participant. Legacy aliases are
# the variable names older prompts used for the same agents.
ROUTE_TARGETS = MappingProxyType({
    AgentName.MEET_ANALYST.value: AgentName.MEET_ANALYST,
    "meetQueryAgent": AgentName.MEET_ANALYST,
    AgentName.MEET_SUMMARY.value: AgentName.MEET_SUMMARY,
    "answerAgent": AgentName.MEET_SUMMARY,
})

_CASEFOLDED_TARGETS = MappingProxyType({key.casefold(): value for key, value in ROUTE_TARGETS.items()})


def resolve_route_target(name: object) -> AgentName | None:
    """Map a routing value emitted by the supervisor to a participant.

    Args:
        name: Value of the ``agent`` argument (anything the model produced).

    Returns:
        The downstream participant, or ``None`` if the value is not recognized.
    """
    if isinstance(name, AgentName):
        return name if name is not AgentName.SUPERVISOR else None
    if not isinstance(name, str):
        return None
    return _CASEFOLDED_TARGETS.get(name.strip().casefold())


class Router:
    """Decides which participant runs next."""

    def next(self, snapshot: RunStateSnapshot) -> AgentName | None:  # noqa: PLR6301
        """Select the next participant from the run state.

        Args:
            snapshot: Read-only run state.

        Returns:
            ``AgentName.SUPERVISOR``, or ``None`` when the run is done.
        """
        if snapshot.completed:
            return None
        return AgentName.SUPERVISOR

    def on_route(self, turn: TurnRecord) -> AgentName:  # noqa: PLR6301
        """Resolve the participant selected by a supervisor turn.

        Args:
            turn: The supervisor's completed turn.

        Returns:
            The participant to run next.

        Raises:
            RoutingContractViolation: If the turn carries no recognizable selection.
        """
        target = resolve_route_target(turn.tool_output) if turn.tool_name else None
        if target is None:
            logger.error(
                "Supervisor turn %d produced no valid route (tool=%s, output=%r)",
                turn.index,
                turn.tool_name,
                turn.tool_output,
            )
            raise RoutingContractViolation(
                f"Supervisor turn {turn.index} did not select a valid next agent"
            )
        logger.info("Supervisor routed to %s", target.value)
        return target
