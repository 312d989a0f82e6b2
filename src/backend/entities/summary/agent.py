"""
Meet Summary Agent - writes the final answer to the user.

No tools; the agent narrates the meet results (or their absence).
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


def create_summary_agent(
    client: AzureAIClient,
    instructions: str,
) -> ChatAgent:
    """Create the meet summary ChatAgent.

    Args:
        client: Azure AI client for LLM access.
        instructions: Agent system prompt text.

    Returns:
        Configured ChatAgent for answer generation.
    """
    from agent_framework import ChatAgent  # noqa: PLC0415

    return ChatAgent(
        name="meet-summary-agent",
        description="I am a meet summary agent.",
        instructions=instructions,
        chat_client=client,
    )
