"""Shared utilities for agents."""

from .history import InMemoryHistoryStore
from .run_state import RunState, RunStateHandle, RunStateSnapshot, StateUpdate, ToolContext
from .store_client import ClickHouseClient

__all__ = [
    "ClickHouseClient",
    "InMemoryHistoryStore",
    "RunState",
    "RunStateHandle",
    "RunStateSnapshot",
    "StateUpdate",
    "ToolContext",
]
