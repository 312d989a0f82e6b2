"""Pure-function compiler from filter specifications to parameterized queries.

This module is intentionally free of external dependencies (ClickHouse,
agent_framework, etc.) so that it can be unit-tested without mocking.

Only column names (checked against the schema registry), operators, sort
directions and the integer limit are written into the query text. Every
filter value is bound through a typed named placeholder
(``{param0:String}``) and travels in ``CompiledQuery.parameters``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from entities.shared.columns import DEFAULT_ORDER_COLUMNS, column_names, is_known_column
from entities.shared.errors import UnknownColumnError
from models import FilterClause, MeetResultsQuery, SortDirection

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "powerlifting-records"

# Rows returned when the caller gives no limit, and the hard ceiling.
DEFAULT_LIMIT = 20
MAX_LIMIT = 100

_TABLE_NAME_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.\-]*$")

_INT_TYPE = "Int64"
_FLOAT_TYPE = "Float64"
_STRING_TYPE = "String"


@dataclass(frozen=True, slots=True)
class CompiledQuery:
    """Result of compiling a filter specification.

    Attributes:
        query_text: Query with typed named placeholders.
        parameters: Placeholder name → bound value.
        parameter_types: Placeholder name → declared store type.
        limit: Effective row limit written into the query.
    """

    query_text: str
    parameters: dict[str, Any] = field(default_factory=dict)
    parameter_types: dict[str, str] = field(default_factory=dict)
    limit: int = DEFAULT_LIMIT

    def parameter_kind(self, name: str) -> str:
        """Return ``"numeric"`` or ``"string"`` for a bound parameter."""
        return "string" if self.parameter_types[name] == _STRING_TYPE else "numeric"


def _declared_type(value: Any) -> str:
    if isinstance(value, int):
        return _INT_TYPE
    if isinstance(value, float):
        return _FLOAT_TYPE
    return _STRING_TYPE


def _quote_table(table: str) -> str:
    if not _TABLE_NAME_RE.match(table):
        raise ValueError(f"Invalid table name: {table!r}")
    return f"`{table}`"


def _effective_limit(limit: int | None) -> int:
    """Apply the default and the ceiling to a requested limit."""
    if limit is None or limit <= 0:
        return DEFAULT_LIMIT
    if limit > MAX_LIMIT:
        logger.warning("Requested limit %d exceeds ceiling, clamping to %d", limit, MAX_LIMIT)
        return MAX_LIMIT
    return int(limit)


def _order_clause(order_by: str | None, sort_direction: SortDirection | None) -> str:
    if order_by is None:
        primary, secondary = DEFAULT_ORDER_COLUMNS
        return f"ORDER BY {primary}, {secondary} DESC"
    if not is_known_column(order_by):
        raise UnknownColumnError(order_by)
    direction = sort_direction or SortDirection.DESC
    return f"ORDER BY {order_by} {direction.value}"


def compile_query(
    filters: Sequence[FilterClause] = (),
    order_by: str | None = None,
    sort_direction: SortDirection | None = None,
    limit: int | None = None,
    *,
    table: str = DEFAULT_TABLE,
    strict_columns: bool = True,
) -> CompiledQuery:
    """Compile filters, ordering and limit into a parameterized SELECT.

    Clauses are AND-joined in input order. Null-check operators compile
    without a parameter; value operators missing a value are dropped;
    pattern operators bind ``%value%``.

    Args:
        filters: Filter clauses to apply.
        order_by: Column to sort by. Defaults to name then date descending.
        sort_direction: Direction for ``order_by``. Defaults to ``DESC``.
        limit: Maximum rows. Defaults to 20, clamped to 100.
        table: Table to select from.
        strict_columns: Raise on unknown filter columns instead of dropping them.

    Returns:
        A ``CompiledQuery`` with query text and bound parameters.

    Raises:
        UnknownColumnError: If a filter column (in strict mode) or the
            order column is not in the schema.
    """
    parameters: dict[str, Any] = {}
    parameter_types: dict[str, str] = {}
    where_parts: list[str] = []
    param_index = 0

    for clause in filters:
        column = clause.column
        operator = clause.operator

        if not is_known_column(column):
            if strict_columns:
                raise UnknownColumnError(column)
            logger.warning("Dropping filter on unknown column %r", column)
            continue

        if not operator.requires_value:
            where_parts.append(f"{column} {operator.value}")
            continue

        if clause.value is None:
            logger.debug("Dropping %s filter on %s: no value supplied", operator.value, column)
            continue

        name = f"param{param_index}"
        param_index += 1

        if operator.is_pattern:
            parameters[name] = f"%{clause.value}%"
            parameter_types[name] = _STRING_TYPE
        else:
            parameters[name] = clause.value
            parameter_types[name] = _declared_type(clause.value)

        where_parts.append(f"{column} {operator.value} {{{name}:{parameter_types[name]}}}")

    effective_limit = _effective_limit(limit)
    select_list = ",\n    ".join(column_names())

    lines = [
        "SELECT",
        f"    {select_list}",
        f"FROM {_quote_table(table)}",
    ]
    if where_parts:
        lines.append(f"WHERE {' AND '.join(where_parts)}")
    lines.append(_order_clause(order_by, sort_direction))
    lines.append(f"LIMIT {effective_limit}")

    return CompiledQuery(
        query_text="\n".join(lines),
        parameters=parameters,
        parameter_types=parameter_types,
        limit=effective_limit,
    )


def compile_meet_query(
    query: MeetResultsQuery,
    *,
    table: str = DEFAULT_TABLE,
    strict_columns: bool = True,
) -> CompiledQuery:
    """Compile validated ``get_meet_results`` tool arguments.

    Args:
        query: Validated tool arguments.
        table: Table to select from.
        strict_columns: Raise on unknown filter columns instead of dropping them.

    Returns:
        The compiled query.
    """
    return compile_query(
        query.filters,
        query.order_by,
        query.sort_direction,
        query.limit,
        table=table,
        strict_columns=strict_columns,
    )
