"""
Entities package.

Each subdirectory represents one part of the meet query network:
- supervisor/: Routing decisions and the route_to_agent tool
- meet_query/: Meet performance analyst and the get_meet_results tool
- summary/: Final answer generation
- router/: Next-participant selection
- query_compiler/: Filter specification to parameterized query text
- network/: The run loop and its dependency container
- shared/: Run state, column registry, store and history collaborators

Shared models are available at the package level.
"""

from models import AgentName, AgentRunRequest, NetworkResult

__all__ = ["AgentName", "AgentRunRequest", "NetworkResult"]
