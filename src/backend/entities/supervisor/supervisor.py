"""Supervisor turn logic.

Renders the routing prompt from a run state snapshot, invokes the
supervisor agent, and executes its mandatory ``route_to_agent`` call.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from entities.meet_query.tool import query_errors
from entities.router import resolve_route_target
from entities.shared.run_state import StateUpdate
from entities.shared.tool_calls import invoke_agent, parse_tool_call
from models import AgentName, RouteSelection, TurnRecord
from pydantic import ValidationError

if TYPE_CHECKING:
    from entities.shared.run_state import RunStateSnapshot, ToolContext

logger = logging.getLogger(__name__)

ROUTE_TOOL_NAME = "route_to_agent"


def build_supervisor_prompt(
    snapshot: RunStateSnapshot,
    transcript: Sequence[TurnRecord] = (),
) -> str:
    """Build the per-turn routing prompt.

    Args:
        snapshot: Read-only run state.
        transcript: Turns completed so far in this run.

    Returns:
        A formatted prompt string for the supervisor.
    """
    errors = query_errors(transcript)
    error_section = ""
    if errors:
        error_section = "\n## Query Errors\n" + "\n".join(f"- {e}" for e in errors) + "\n"

    return (
        "## User Question\n"
        f"{snapshot.original_input}\n"
        "\n"
        "## Meet Results Retrieved So Far\n"
        f"{json.dumps(snapshot.results_as_list(), default=str)}\n"
        f"{error_section}"
        "\n"
        "## Tool Schema\n"
        f"{ROUTE_TOOL_NAME}: {json.dumps(RouteSelection.model_json_schema(by_alias=True))}\n"
        "\n"
        f"Call {ROUTE_TOOL_NAME} now.\n"
    )


def route_to_agent(
    arguments: RouteSelection | dict[str, Any],
    context: ToolContext,
) -> AgentName | dict[str, str]:
    """Record the supervisor's routing decision.

    Out-of-domain requests always go to the summary agent. Choosing the
    summary agent sets the completion flag in the same update.

    Args:
        arguments: Tool arguments, validated here if given as a dict.
        context: Invocation context carrying the state handle.

    Returns:
        The selected participant, or ``{"error": message}`` for an
        unusable selection (no state change in that case).
    """
    try:
        selection = (
            arguments
            if isinstance(arguments, RouteSelection)
            else RouteSelection.model_validate(arguments)
        )
    except ValidationError as exc:
        logger.warning("Invalid %s arguments: %s", ROUTE_TOOL_NAME, exc.errors(include_url=False))
        return {"error": "invalid routing arguments"}

    target = resolve_route_target(selection.agent)
    if selection.is_powerlifting_query is False:
        target = AgentName.MEET_SUMMARY
    if target is None:
        logger.warning("Supervisor selected unknown agent %r", selection.agent)
        return {"error": f"unknown agent: {selection.agent}"}

    is_in_domain = selection.is_powerlifting_query
    if is_in_domain is None and target is AgentName.MEET_ANALYST:
        is_in_domain = True

    changes: dict[str, Any] = {
        "routing_reasoning": selection.reasoning,
        "completed": target is AgentName.MEET_SUMMARY,
    }
    if is_in_domain is not None:
        changes["is_in_domain"] = is_in_domain
    context.state.apply(StateUpdate(**changes))
    return target


async def run_supervisor_turn(
    agent: Any,  # noqa: ANN401
    context: ToolContext,
    transcript: Sequence[TurnRecord],
    index: int,
) -> TurnRecord:
    """Run one supervisor turn.

    Args:
        agent: Supervisor ChatAgent.
        context: Tool invocation context for this run.
        transcript: Turns completed so far.
        index: Position of this turn in the run.

    Returns:
        The turn record; ``tool_output`` holds the selected ``AgentName``
        when routing succeeded.
    """
    prompt = build_supervisor_prompt(context.state.snapshot(), transcript)
    text = await invoke_agent(agent, prompt)

    call = parse_tool_call(text, allowed_tools={ROUTE_TOOL_NAME})
    if call is None:
        logger.warning("Supervisor turn %d made no %s call", index, ROUTE_TOOL_NAME)
        return TurnRecord(index=index, agent=AgentName.SUPERVISOR, text=text)

    output = route_to_agent(call.arguments, context)
    return TurnRecord(
        index=index,
        agent=AgentName.SUPERVISOR,
        text=text,
        tool_name=call.name,
        tool_arguments=call.arguments,
        tool_output=output,
    )
