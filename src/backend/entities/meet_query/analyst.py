"""Meet performance analyst turn logic.

Builds the query prompt, invokes the analyst agent, and executes the
``get_meet_results`` call it emits.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from entities.shared.columns import column_names
from entities.shared.tool_calls import invoke_agent, parse_tool_call
from models import AgentName, MeetResultsQuery, TurnRecord

from .tool import TOOL_DESCRIPTION, TOOL_NAME, get_meet_results

if TYPE_CHECKING:
    from entities.shared.run_state import RunStateSnapshot, ToolContext

logger = logging.getLogger(__name__)


def build_analyst_prompt(snapshot: RunStateSnapshot) -> str:
    """Build the per-turn prompt for the analyst.

    Args:
        snapshot: Read-only run state.

    Returns:
        A formatted prompt string for the analyst.
    """
    return (
        "## User Question\n"
        f"{snapshot.original_input}\n"
        "\n"
        "## Available Columns\n"
        f"{', '.join(column_names())}\n"
        "\n"
        "## Tool\n"
        f"{TOOL_NAME}: {TOOL_DESCRIPTION}\n"
        f"Arguments schema: {json.dumps(MeetResultsQuery.model_json_schema(by_alias=True))}\n"
        "\n"
        f"Respond with the {TOOL_NAME} call as a JSON object.\n"
    )


async def run_analyst_turn(
    agent: Any,  # noqa: ANN401
    context: ToolContext,
    transcript: Sequence[TurnRecord],
    index: int,
) -> TurnRecord:
    """Run one analyst turn.

    Args:
        agent: Analyst ChatAgent.
        context: Tool invocation context for this run.
        transcript: Turns completed so far (unused by the analyst prompt).
        index: Position of this turn in the run.

    Returns:
        The turn record; ``tool_output`` holds the rows or an error payload.
    """
    del transcript
    text = await invoke_agent(agent, build_analyst_prompt(context.state.snapshot()))

    call = parse_tool_call(text, allowed_tools={TOOL_NAME})
    if call is None:
        logger.warning("Analyst turn %d made no %s call", index, TOOL_NAME)
        return TurnRecord(index=index, agent=AgentName.MEET_ANALYST, text=text)

    output = await get_meet_results(call.arguments, context)
    return TurnRecord(
        index=index,
        agent=AgentName.MEET_ANALYST,
        text=text,
        tool_name=call.name,
        tool_arguments=call.arguments,
        tool_output=output,
    )
