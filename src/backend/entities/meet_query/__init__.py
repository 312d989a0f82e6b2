"""Meet performance analyst package: the query tool and its agent turn."""

from .analyst import build_analyst_prompt, run_analyst_turn
from .tool import TOOL_NAME, get_meet_results, query_errors

__all__ = [
    "TOOL_NAME",
    "build_analyst_prompt",
    "get_meet_results",
    "query_errors",
    "run_analyst_turn",
]
