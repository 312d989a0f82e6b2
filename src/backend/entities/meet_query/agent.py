"""
Meet Performance Analyst Agent - turns questions into meet queries.

The agent's only output is a ``get_meet_results`` tool call.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agent_framework import ChatAgent
    from agent_framework_azure_ai import AzureAIClient


def load_prompt() -> str:
    """Load the prompt from prompt.md in this folder."""
    return (Path(__file__).parent / "prompt.md").read_text(encoding="utf-8")


def create_meet_analyst_agent(
    client: AzureAIClient,
    instructions: str,
) -> ChatAgent:
    """Create the meet performance analyst ChatAgent.

    Args:
        client: Azure AI client for LLM access.
        instructions: Agent system prompt text.

    Returns:
        Configured ChatAgent for query construction.
    """
    from agent_framework import ChatAgent  # noqa: PLC0415

    return ChatAgent(
        name="meet-analyst-agent",
        description=(
            "Answers questions about powerlifting meet results by constructing detailed queries."
        ),
        instructions=instructions,
        chat_client=client,
    )
