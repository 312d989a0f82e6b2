"""Router package for next-participant selection."""

from .router import ROUTE_TARGETS, Router, resolve_route_target

__all__ = ["ROUTE_TARGETS", "Router", "resolve_route_target"]
