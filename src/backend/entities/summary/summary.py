"""Meet summary turn logic."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from entities.meet_query.tool import query_errors
from entities.shared.tool_calls import invoke_agent
from models import AgentName, TurnRecord

if TYPE_CHECKING:
    from entities.shared.run_state import RunStateSnapshot, ToolContext

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = (
    "Sorry, I wasn't able to put together an answer this time. Please try asking again."
)


def build_summary_prompt(
    snapshot: RunStateSnapshot,
    transcript: Sequence[TurnRecord] = (),
) -> str:
    """Build the answer prompt from the run state.

    Args:
        snapshot: Read-only run state.
        transcript: Turns completed so far in this run.

    Returns:
        A formatted prompt string for the summary agent.
    """
    in_domain = snapshot.is_in_domain is not False
    lines = [
        "## Original User Question",
        snapshot.original_input,
        "",
        f"Query type: {'Powerlifting-related' if in_domain else 'Non-powerlifting'}",
    ]
    if snapshot.routing_reasoning:
        lines.append(f"Routing reasoning: {snapshot.routing_reasoning}")

    if in_domain:
        lines += [
            "",
            "This is a powerlifting-related question. Here is the data retrieved:",
            "",
            "## Meet Results",
            json.dumps(snapshot.results_as_list(), default=str),
        ]
        errors = query_errors(transcript)
        if errors:
            lines += ["", "## Query Errors", *(f"- {e}" for e in errors)]
        lines += [
            "",
            "Answer from this data. If it is empty or insufficient, explain what is needed.",
        ]
    else:
        lines += [
            "",
            "This is not a powerlifting-related question. Respond helpfully and note "
            "that you specialize in powerlifting data analysis.",
        ]
    return "\n".join(lines) + "\n"


async def run_summary_turn(
    agent: Any,  # noqa: ANN401
    context: ToolContext,
    transcript: Sequence[TurnRecord],
    index: int,
) -> TurnRecord:
    """Run the summary turn that produces the final answer.

    Args:
        agent: Summary ChatAgent.
        context: Tool invocation context for this run.
        transcript: Turns completed so far.
        index: Position of this turn in the run.

    Returns:
        The turn record; ``text`` is the answer.
    """
    prompt = build_summary_prompt(context.state.snapshot(), transcript)
    text = (await invoke_agent(agent, prompt)).strip()
    if not text:
        logger.warning("Summary turn %d returned no text, using fallback answer", index)
        text = FALLBACK_ANSWER
    return TurnRecord(index=index, agent=AgentName.MEET_SUMMARY, text=text)
