"""
Request and response models for the HTTP API.
"""

from typing import Any

from models import NetworkResult
from pydantic import BaseModel, ConfigDict, Field


class RunResponse(BaseModel):
    """Outcome of one network run as returned to the caller."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    answer: str
    thread_id: str | None = Field(default=None, alias="threadId")
    turns: list[dict[str, Any]] = Field(default_factory=list)
    result_count: int = Field(default=0, alias="resultCount")

    @classmethod
    def from_result(cls, result: NetworkResult) -> "RunResponse":
        return cls(
            status=result.status.value,
            answer=result.answer,
            thread_id=result.thread_id,
            turns=[turn.to_dict() for turn in result.turns],
            result_count=len(result.meet_results),
        )


class ThreadHistoryResponse(BaseModel):
    """Stored entries of a conversation thread, oldest first."""

    model_config = ConfigDict(populate_by_name=True)

    thread_id: str = Field(alias="threadId")
    entries: list[dict[str, Any]] = Field(default_factory=list)
