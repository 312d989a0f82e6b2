"""Parsing of model responses into text and structured tool calls.

Agents are asked to answer with a JSON object of the form
``{"tool": "<name>", "arguments": {...}}`` when they call a tool. Models
wrap JSON in code fences or prose often enough that parsing is tolerant.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Collection
from typing import Any

from models import ToolCall

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)
_DECODER = json.JSONDecoder()


def response_text(response: Any) -> str:  # noqa: ANN401
    """Extract the text of an agent run response.

    Prefers ``response.text``; falls back to the first text content of
    ``response.messages``.

    Args:
        response: Object returned by ``ChatAgent.run``.

    Returns:
        The response text, or an empty string.
    """
    text = getattr(response, "text", None)
    if isinstance(text, str) and text:
        return text

    for msg in getattr(response, "messages", None) or []:
        for content in getattr(msg, "contents", None) or []:
            text_value = getattr(content, "text", None)
            if isinstance(text_value, str) and text_value:
                return text_value
    return ""


def _candidate_objects(text: str) -> list[Any]:
    """Return JSON values found in *text*, most specific first."""
    stripped = text.strip()
    candidates: list[Any] = []

    # Direct JSON parse
    try:
        candidates.append(json.loads(stripped))
    except json.JSONDecodeError:
        pass

    # Markdown code fences
    for block in _FENCE_RE.findall(stripped):
        try:
            candidates.append(json.loads(block.strip()))
        except json.JSONDecodeError:
            continue

    # Objects embedded in surrounding prose
    start = stripped.find("{")
    while start >= 0:
        try:
            obj, end = _DECODER.raw_decode(stripped, start)
        except json.JSONDecodeError:
            start = stripped.find("{", start + 1)
            continue
        candidates.append(obj)
        start = stripped.find("{", end)

    return candidates


def _as_tool_call(obj: Any) -> ToolCall | None:  # noqa: ANN401
    if not isinstance(obj, dict):
        return None
    name = obj.get("tool") or obj.get("tool_name") or obj.get("name")
    if not isinstance(name, str) or not name:
        return None
    arguments = obj.get("arguments", obj.get("parameters", {}))
    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments)
        except json.JSONDecodeError:
            return None
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        return None
    return ToolCall(name=name, arguments=arguments)


def parse_tool_call(text: str, allowed_tools: Collection[str]) -> ToolCall | None:
    """Find a tool call in a model response.

    Tool calls naming a tool outside *allowed_tools* are ignored.

    Args:
        text: Raw model response text.
        allowed_tools: Tool names declared for the calling agent.

    Returns:
        The first valid tool call, or ``None``.
    """
    if not text:
        return None
    for candidate in _candidate_objects(text):
        call = _as_tool_call(candidate)
        if call is None:
            continue
        if call.name not in allowed_tools:
            logger.warning("Ignoring call to undeclared tool %r", call.name)
            continue
        return call
    return None


async def invoke_agent(agent: Any, prompt: str) -> str:  # noqa: ANN401
    """Run an agent on a rendered prompt and return its text.

    Each call starts without a thread, so agents carry nothing between
    turns beyond what the prompt contains.

    Args:
        agent: A ``ChatAgent`` (or anything with an async ``run``).
        prompt: The rendered per-turn prompt.

    Returns:
        The response text (possibly empty).
    """
    response = await agent.run(prompt)
    return response_text(response)
