"""Supervisor package: routing decisions for the meet query network."""

from .supervisor import ROUTE_TOOL_NAME, build_supervisor_prompt, route_to_agent, run_supervisor_turn

__all__ = ["ROUTE_TOOL_NAME", "build_supervisor_prompt", "route_to_agent", "run_supervisor_turn"]
