"""Unit tests for the Table value and navigation tables."""

from unittest.mock import Mock

import pytest

from clickhouse_connector.navigation import ItemKind, NavigationItem, NavigationTable
from clickhouse_connector.table import Table


def test_table_creation():
    """Test creating a Table object."""
    table = Table(("a", "b"), [(1, "x"), [2, "y"]])

    assert table.columns == ("a", "b")
    assert table.rows == [(1, "x"), (2, "y")]
    assert len(table) == 2
    assert table.column("b") == ["x", "y"]
    assert list(table) == [(1, "x"), (2, "y")]


def test_table_rejects_ragged_rows():
    """Test that every row must match the columns."""
    with pytest.raises(ValueError):
        Table(("a", "b"), [(1,)])


def test_unknown_column():
    """Test looking up a column that does not exist."""
    with pytest.raises(KeyError):
        Table(("a",), []).column("b")


def test_transform_columns():
    """Test that transforms return a new table."""
    table = Table(("a", "b"), [(1, "x")])

    result = table.transform_columns({"a": lambda v: v * 10})

    assert result.rows == [(10, "x")]
    assert table.rows == [(1, "x")]


def test_combine_matches_columns_by_name():
    """Test appending a table with a different column order."""
    left = Table(("a", "b"), [(1, 2)])
    right = Table(("b", "c"), [(3, 4)])

    result = left.combine(right)

    assert result.columns == ("a", "b", "c")
    assert result.rows == [(1, 2, None), (None, 3, 4)]


def test_navigation_item_loads_once():
    """Test that navigation data is loaded lazily and cached."""
    calls = []

    def loader():
        calls.append(1)
        return Table(("x",), [(1,)])

    item = NavigationItem("events", ItemKind.TABLE, loader)

    assert calls == []
    assert item.data is item.data
    assert calls == [1]
    assert item.is_leaf


def test_navigation_item_without_columns():
    """Test columns() on a database entry."""
    item = NavigationItem("default", ItemKind.DATABASE, NavigationTable)
    with pytest.raises(TypeError):
        item.columns()


def test_navigation_table_lookup():
    """Test name lookup and listing."""
    nav = NavigationTable([
        NavigationItem("default", ItemKind.DATABASE, NavigationTable),
        NavigationItem("system", ItemKind.DATABASE, NavigationTable),
    ])

    assert "default" in nav
    assert "missing" not in nav
    assert nav.get("missing") is None
    assert nav["system"].name == "system"
    assert nav.to_table().rows == [("default", "Database"), ("system", "Database")]


def test_navigation_table_loads_on_first_access():
    """Test that a loader runs once, on the first lookup."""
    loader = Mock(return_value=[NavigationItem("default", ItemKind.DATABASE, NavigationTable)])
    nav = NavigationTable(loader=loader)

    assert not nav.is_loaded
    loader.assert_not_called()

    assert nav.get("default").name == "default"
    assert nav.names() == ["default"]
    assert len(nav) == 1
    loader.assert_called_once_with()


def test_navigation_table_retries_failed_load():
    """Test that a failed load leaves the table unloaded."""
    loader = Mock(side_effect=[RuntimeError("down"), []])
    nav = NavigationTable(loader=loader)

    with pytest.raises(RuntimeError):
        nav.get("default")
    assert not nav.is_loaded

    assert "default" not in nav
    assert nav.is_loaded
