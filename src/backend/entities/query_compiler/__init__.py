"""Query compiler package for filter-to-query compilation."""

from .compiler import (
    DEFAULT_LIMIT,
    DEFAULT_TABLE,
    MAX_LIMIT,
    CompiledQuery,
    compile_meet_query,
    compile_query,
)

__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_TABLE",
    "MAX_LIMIT",
    "CompiledQuery",
    "compile_meet_query",
    "compile_query",
]
