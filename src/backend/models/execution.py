"""
Execution models for network runs.

``AgentRunRequest`` is the trigger payload; ``TurnRecord`` and
``NetworkResult`` describe what a run did.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .routing import AgentName


class AgentRunRequest(BaseModel):
    """Inbound trigger that starts one network run."""

    model_config = ConfigDict(populate_by_name=True)

    input: str = Field(min_length=1, description="The user's natural-language question")
    thread_id: str = Field(alias="threadId", description="Conversation thread ID")
    user_id: str | None = Field(default=None, alias="userId", description="Requester ID")
    message_id: str | None = Field(default=None, alias="messageId", description="Message ID")


class RunStatus(str, Enum):
    """Terminal status of a network run."""

    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class TurnRecord:
    """Outcome of a single agent turn."""

    index: int
    """Zero-based position of the turn within the run."""

    agent: AgentName
    """Participant that ran."""

    text: str = ""
    """Plain-text output of the model, if any."""

    tool_name: str | None = None
    """Tool invoked during the turn, if any."""

    tool_arguments: dict[str, Any] = field(default_factory=dict)
    """Arguments the tool was invoked with."""

    tool_output: Any = None
    """Value returned by the tool (rows, selected agent, or an error payload)."""

    @property
    def tool_error(self) -> str | None:
        """Error message returned by the tool, if it failed."""
        if isinstance(self.tool_output, dict) and "error" in self.tool_output:
            return str(self.tool_output["error"])
        return None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation."""
        return {
            "index": self.index,
            "agent": self.agent.value,
            "text": self.text,
            "tool_name": self.tool_name,
            "tool_arguments": self.tool_arguments,
            "tool_output": self.tool_output,
        }


@dataclass(frozen=True)
class NetworkResult:
    """Final outcome of a network run."""

    answer: str
    status: RunStatus = RunStatus.COMPLETED
    turns: tuple[TurnRecord, ...] = ()
    meet_results: tuple[dict[str, Any], ...] = ()
    is_in_domain: bool | None = None
    thread_id: str | None = None
