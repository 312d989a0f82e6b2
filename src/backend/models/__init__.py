"""
Shared models for entities.

These models are used across the agents, the network, and the API.
All models are re-exported here.
"""

from .execution import AgentRunRequest, NetworkResult, RunStatus, TurnRecord
from .filters import FilterClause, FilterOperator, MeetResultsQuery, SortDirection
from .routing import AgentName, RouteSelection, ToolCall

__all__ = [
    # Filters (get_meet_results tool grammar)
    "FilterClause",
    "FilterOperator",
    "MeetResultsQuery",
    "SortDirection",
    # Routing (participants and tool calls)
    "AgentName",
    "RouteSelection",
    "ToolCall",
    # Execution (runs and turns)
    "AgentRunRequest",
    "NetworkResult",
    "RunStatus",
    "TurnRecord",
]
