"""
Routing models produced by agent turns.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class ToolCall:
    """A structured tool call emitted by a model."""

    name: str
    """Name of the tool the model asked for."""

    arguments: dict[str, Any] = field(default_factory=dict)
    """Raw, unvalidated arguments."""


class RouteSelection(BaseModel):
    """Arguments of the supervisor's ``route_to_agent`` tool."""

    model_config = ConfigDict(populate_by_name=True)

    agent: str = Field(description="The name of the agent to route to.")
    is_powerlifting_query: bool | None = Field(
        default=None,
        alias="isPowerliftingQuery",
        description="Whether this is a powerlifting-related query",
    )
    reasoning: str | None = Field(
        default=None, description="Brief reasoning for the routing decision"
    )


class AgentName(str, Enum):
    """Participants of the meet query network. Names are the routing addresses."""

    SUPERVISOR = "Supervisor"
    MEET_ANALYST = "Meet performance analyst"
    MEET_SUMMARY = "Meet Summary Agent"
