"""Meet summary package: final answer generation."""

from .summary import FALLBACK_ANSWER, build_summary_prompt, run_summary_turn

__all__ = ["FALLBACK_ANSWER", "build_summary_prompt", "run_summary_turn"]
