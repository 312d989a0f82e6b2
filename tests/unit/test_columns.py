"""Tests for the column schema registry."""

import pytest
from entities.shared.columns import (
    COLUMNS,
    DEFAULT_ORDER_COLUMNS,
    ColumnType,
    column_names,
    column_type,
    is_known_column,
    require_column,
)
from entities.shared.errors import UnknownColumnError


class TestColumnNames:
    """Verify the closed, ordered column set."""

    def test_has_all_columns_in_table_order(self) -> None:
        names = column_names()
        assert len(names) == 42
        assert names[0] == "Name"
        assert names[-1] == "Sanctioned"
        assert names.index("TotalKg") < names.index("Dots")

    def test_names_are_unique(self) -> None:
        names = column_names()
        assert len(set(names)) == len(names)

    def test_default_order_columns_are_known(self) -> None:
        assert all(is_known_column(name) for name in DEFAULT_ORDER_COLUMNS)


class TestLookup:
    """Membership and type lookups."""

    @pytest.mark.parametrize("name", ["Name", "TotalKg", "MeetName", "Date"])
    def test_known_columns(self, name: str) -> None:
        assert is_known_column(name)
        assert require_column(name) == name

    @pytest.mark.parametrize("name", ["name", "Total", "DROP TABLE", "", "Name; --"])
    def test_unknown_columns(self, name: str) -> None:
        assert not is_known_column(name)
        with pytest.raises(UnknownColumnError) as exc_info:
            require_column(name)
        assert exc_info.value.column == name

    def test_column_types(self) -> None:
        assert column_type("TotalKg") is ColumnType.NUMERIC
        assert column_type("Name") is ColumnType.STRING
        assert column_type("WeightClassKg") is ColumnType.STRING

    def test_every_column_has_a_type(self) -> None:
        assert {kind for _, kind in COLUMNS} == {ColumnType.STRING, ColumnType.NUMERIC}
