"""
Filter specification models for the ``get_meet_results`` tool.

These models describe the closed grammar the meet performance analyst
may use: AND-joined clauses over known columns, one ordering column,
and a row limit.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FilterOperator(str, Enum):
    """Operators accepted in a filter clause."""

    EQ = "="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    ILIKE = "ILIKE"
    NOT_ILIKE = "NOT ILIKE"
    IS_NULL = "IS NULL"
    IS_NOT_NULL = "IS NOT NULL"

    @property
    def requires_value(self) -> bool:
        """Whether the operator binds a value."""
        return self not in {FilterOperator.IS_NULL, FilterOperator.IS_NOT_NULL}

    @property
    def is_pattern(self) -> bool:
        """Whether the operator performs substring pattern matching."""
        return self in {FilterOperator.ILIKE, FilterOperator.NOT_ILIKE}


class SortDirection(str, Enum):
    """Sort direction for the ORDER BY clause."""

    ASC = "ASC"
    DESC = "DESC"


class FilterClause(BaseModel):
    """A single ``{column, operator, value?}`` filter."""

    column: str = Field(description="Column to filter on")
    operator: FilterOperator = Field(description="The operator to use for the filter.")
    value: str | int | float | None = Field(
        default=None,
        description="The value to filter by. Not required for IS NULL or IS NOT NULL.",
    )

    @field_validator("operator", mode="before")
    @classmethod
    def _normalize_operator(cls, value: Any) -> Any:
        if isinstance(value, str):
            return " ".join(value.upper().split())
        return value

    @field_validator("value", mode="before")
    @classmethod
    def _reject_booleans(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("Filter values must be strings or numbers")
        return value


class MeetResultsQuery(BaseModel):
    """Arguments of the ``get_meet_results`` tool.

    Accepts both the camelCase names used in the tool schema and
    snake_case field names.
    """

    model_config = ConfigDict(populate_by_name=True)

    filters: list[FilterClause] = Field(
        default_factory=list, description="An array of filters to apply to the query."
    )
    order_by: str | None = Field(
        default=None, alias="orderBy", description="The column to sort the results by."
    )
    sort_direction: SortDirection | None = Field(
        default=None, alias="sortDirection", description="The direction to sort the results."
    )
    limit: int | None = Field(
        default=None, description="The maximum number of results to return (at most 100)."
    )

    @field_validator("filters", mode="before")
    @classmethod
    def _none_means_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("sort_direction", mode="before")
    @classmethod
    def _upper_direction(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value
