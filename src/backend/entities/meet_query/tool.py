"""
``get_meet_results`` tool for the meet performance analyst.

Compiles the analyst's filter specification, runs it against the store,
and writes the rows into the run state. Failures never raise: they come
back as ``{"error": ...}`` so the summary agent can explain them.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from entities.query_compiler import compile_meet_query
from entities.shared.errors import MeetQueryError, StoreExecutionError
from entities.shared.run_state import StateUpdate
from models import MeetResultsQuery, TurnRecord
from pydantic import ValidationError

if TYPE_CHECKING:
    from entities.shared.run_state import ToolContext

logger = logging.getLogger(__name__)

TOOL_NAME = "get_meet_results"

TOOL_DESCRIPTION = (
    "Returns available meet data based on a set of filters, sorting, and limits. "
    "Use this to find how lifters performed, compare them, or find lifters that "
    "meet certain criteria."
)


def _error(message: str) -> dict[str, str]:
    return {"error": f"Query failed: {message}"}


def query_errors(transcript: Sequence[TurnRecord]) -> list[str]:
    """Collect the error messages of failed ``get_meet_results`` calls.

    Args:
        transcript: Turns completed so far in the run.

    Returns:
        Error messages in turn order.
    """
    return [
        turn.tool_error
        for turn in transcript
        if turn.tool_name == TOOL_NAME and turn.tool_error is not None
    ]


async def get_meet_results(
    arguments: MeetResultsQuery | dict[str, Any],
    context: ToolContext,
) -> list[dict[str, Any]] | dict[str, str]:
    """Query meet results and store them in the run state.

    Exactly one state update is applied on success; none on failure.

    Args:
        arguments: Tool arguments, validated here if given as a dict.
        context: Invocation context carrying the state handle and store.

    Returns:
        The result rows, or ``{"error": message}`` on failure.
    """
    try:
        query = (
            arguments
            if isinstance(arguments, MeetResultsQuery)
            else MeetResultsQuery.model_validate(arguments)
        )
    except ValidationError as exc:
        logger.warning("Invalid %s arguments: %s", TOOL_NAME, exc.errors(include_url=False))
        return _error(f"invalid arguments: {exc.error_count()} validation error(s)")

    try:
        compiled = compile_meet_query(
            query,
            table=context.table,
            strict_columns=context.strict_columns,
        )
    except (MeetQueryError, ValueError) as exc:
        logger.warning("Could not compile %s call: %s", TOOL_NAME, exc)
        return _error(str(exc))

    if context.store is None:
        return _error("no data store configured")

    logger.info(
        "Running %s: %d filter(s), order_by=%s, limit=%d",
        TOOL_NAME,
        len(query.filters),
        query.order_by,
        compiled.limit,
    )

    try:
        rows = await context.store.query(compiled.query_text, compiled.parameters)
    except StoreExecutionError as exc:
        logger.error("Store rejected %s query: %s", TOOL_NAME, exc)
        return _error(str(exc))
    except Exception as exc:
        logger.exception("Unexpected store failure in %s", TOOL_NAME)
        return _error(str(exc))

    context.state.apply(StateUpdate(meet_results=rows))
    return rows
