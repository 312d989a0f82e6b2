"""Column schema registry for the meet results table.

The set of columns is closed: nothing outside ``COLUMNS`` may appear in a
compiled query. Pure module, safe to share across concurrent runs.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType

from entities.shared.errors import UnknownColumnError


class ColumnType(str, Enum):
    """Primitive value type of a column."""

    STRING = "string"
    NUMERIC = "numeric"


_S = ColumnType.STRING
_N = ColumnType.NUMERIC

# Order matches the table layout and the SELECT list of compiled queries.
COLUMNS: tuple[tuple[str, ColumnType], ...] = (
    ("Name", _S),
    ("Sex", _S),
    ("Event", _S),
    ("Equipment", _S),
    ("Age", _N),
    ("AgeClass", _S),
    ("BirthYearClass", _S),
    ("Division", _S),
    ("BodyweightKg", _N),
    ("WeightClassKg", _S),  # "90" or "90+"
    ("Squat1Kg", _N),
    ("Squat2Kg", _N),
    ("Squat3Kg", _N),
    ("Squat4Kg", _N),
    ("Best3SquatKg", _N),
    ("Bench1Kg", _N),
    ("Bench2Kg", _N),
    ("Bench3Kg", _N),
    ("Bench4Kg", _N),
    ("Best3BenchKg", _N),
    ("Deadlift1Kg", _N),
    ("Deadlift2Kg", _N),
    ("Deadlift3Kg", _N),
    ("Deadlift4Kg", _N),
    ("Best3DeadliftKg", _N),
    ("TotalKg", _N),
    ("Place", _S),  # numeric placing or G / DQ / DD
    ("Dots", _N),
    ("Wilks", _N),
    ("Glossbrenner", _N),
    ("Goodlift", _N),
    ("Tested", _S),
    ("Country", _S),
    ("State", _S),
    ("Federation", _S),
    ("ParentFederation", _S),
    ("Date", _S),  # YYYY-MM-DD
    ("MeetCountry", _S),
    ("MeetState", _S),
    ("MeetTown", _S),
    ("MeetName", _S),
    ("Sanctioned", _S),
)

_COLUMN_TYPES = MappingProxyType(dict(COLUMNS))

# Default ordering when the caller gives none: name, then most recent first.
DEFAULT_ORDER_COLUMNS: tuple[str, str] = ("Name", "Date")


def column_names() -> tuple[str, ...]:
    """Return every valid column name in table order."""
    return tuple(name for name, _ in COLUMNS)


def is_known_column(name: str) -> bool:
    """Check whether *name* is part of the schema (case-sensitive)."""
    return name in _COLUMN_TYPES


def require_column(name: str) -> str:
    """Return *name* unchanged if it is a known column.

    Raises:
        UnknownColumnError: If the column is not in the schema.
    """
    if name not in _COLUMN_TYPES:
        raise UnknownColumnError(name)
    return name


def column_type(name: str) -> ColumnType:
    """Return the primitive type of a column.

    Raises:
        UnknownColumnError: If the column is not in the schema.
    """
    return _COLUMN_TYPES[require_column(name)]
