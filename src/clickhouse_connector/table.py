"""Minimal tabular value passed between the driver host and the correctors."""

from typing import Any, Callable, Dict, Iterator, List, Sequence, Tuple


class Table:
    """
    An ordered set of named columns and a list of row tuples.

    Used for SQLGetTypeInfo and SQLColumns result sets as well as for
    ad-hoc query results. Transformations return new tables; a Table is
    never modified after construction by code in this package.
    """

    def __init__(self, columns: Sequence[str], rows: Sequence[Sequence[Any]] = ()):
        self.columns: Tuple[str, ...] = tuple(columns)
        self.rows: List[Tuple[Any, ...]] = []
        for row in rows:
            row = tuple(row)
            if len(row) != len(self.columns):
                raise ValueError(
                    f"Row has {len(row)} values but table has {len(self.columns)} columns"
                )
            self.rows.append(row)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Tuple[Any, ...]]:
        return iter(self.rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        return self.columns == other.columns and self.rows == other.rows

    def __repr__(self) -> str:
        return f"Table(columns={list(self.columns)!r}, rows={len(self.rows)})"

    def index_of(self, name: str) -> int:
        """Return the position of column ``name``; raises KeyError if absent."""
        try:
            return self.columns.index(name)
        except ValueError:
            raise KeyError(name) from None

    def column(self, name: str) -> List[Any]:
        """Return all values of one column, in row order."""
        index = self.index_of(name)
        return [row[index] for row in self.rows]

    def transform_columns(self, transforms: Dict[str, Callable[[Any], Any]]) -> "Table":
        """
        Apply a function to every value of the named columns.

        Args:
            transforms: Mapping of column name to a one-argument function

        Returns:
            New Table with the same columns and row count
        """
        positions = {self.index_of(name): func for name, func in transforms.items()}
        rows = [
            tuple(positions[i](value) if i in positions else value for i, value in enumerate(row))
            for row in self.rows
        ]
        return Table(self.columns, rows)

    def combine(self, other: "Table") -> "Table":
        """
        Append the rows of ``other`` after the rows of this table.

        Columns are matched by name. Columns present on only one side are
        filled with None, and columns only in ``other`` are added at the end.
        """
        columns = list(self.columns) + [c for c in other.columns if c not in self.columns]
        rows = [_project(self, row, columns) for row in self.rows]
        rows.extend(_project(other, row, columns) for row in other.rows)
        return Table(columns, rows)


def _project(table: Table, row: Tuple[Any, ...], columns: List[str]) -> Tuple[Any, ...]:
    values = dict(zip(table.columns, row))
    return tuple(values.get(name) for name in columns)
