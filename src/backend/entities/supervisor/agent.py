"""
Supervisor Agent - decides which participant runs next.

The supervisor classifies the request and calls ``route_to_agent`` on
every turn.
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


def create_supervisor_agent(
    client: AzureAIClient,
    instructions: str,
) -> ChatAgent:
    """Create the supervisor ChatAgent.

    Args:
        client: Azure AI client for LLM access.
        instructions: Agent system prompt text.

    Returns:
        Configured ChatAgent for routing decisions.
    """
    from agent_framework import ChatAgent  # noqa: PLC0415

    return ChatAgent(
        name="supervisor-agent",
        description="I am a supervisor agent.",
        instructions=instructions,
        chat_client=client,
    )
