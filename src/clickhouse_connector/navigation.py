"""Hierarchical navigation catalog: database -> schema -> table."""

from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

from .table import Table


class ItemKind(Enum):
    """Kind of a navigation entry."""
    DATABASE = "Database"
    SCHEMA = "Schema"
    TABLE = "Table"
    VIEW = "View"


class NavigationItem:
    """
    One entry of a navigation table.

    ``data`` is loaded on first access: a nested NavigationTable for
    databases and schemas, a Table of rows for tables and views.
    """

    def __init__(
        self,
        name: str,
        kind: ItemKind,
        loader: Callable[[], Any],
        columns_loader: Optional[Callable[[], Table]] = None,
    ):
        self.name = name
        self.kind = kind
        self._loader = loader
        self._columns_loader = columns_loader
        self._data: Any = None
        self._loaded = False

    def __repr__(self) -> str:
        return f"NavigationItem(name={self.name!r}, kind={self.kind.value})"

    @property
    def is_leaf(self) -> bool:
        return self.kind in (ItemKind.TABLE, ItemKind.VIEW)

    @property
    def data(self) -> Any:
        if not self._loaded:
            self._data = self._loader()
            self._loaded = True
        return self._data

    def columns(self) -> Table:
        """Column metadata of a table or view entry."""
        if self._columns_loader is None:
            raise TypeError(f"{self.kind.value} entry {self.name!r} has no columns")
        return self._columns_loader()


class NavigationTable:
    """
    Ordered, name-addressable list of NavigationItems.

    When built with ``loader`` instead of ``items``, the entries are fetched
    on first access. A failed load is retried on the next access.
    """

    def __init__(
        self,
        items: Sequence[NavigationItem] = (),
        loader: Optional[Callable[[], Sequence[NavigationItem]]] = None,
    ):
        self._loader = loader
        self._items: List[NavigationItem] = []
        self._by_name: Dict[str, NavigationItem] = {}
        if loader is None:
            self._set_items(items)

    def _set_items(self, items: Sequence[NavigationItem]) -> None:
        self._items = list(items)
        self._by_name = {item.name: item for item in self._items}

    def _entries(self) -> List[NavigationItem]:
        if self._loader is not None:
            self._set_items(self._loader())
            self._loader = None
        return self._items

    @property
    def is_loaded(self) -> bool:
        return self._loader is None

    def __len__(self) -> int:
        return len(self._entries())

    def __iter__(self) -> Iterator[NavigationItem]:
        return iter(self._entries())

    def __contains__(self, name: object) -> bool:
        self._entries()
        return name in self._by_name

    def __getitem__(self, name: str) -> NavigationItem:
        self._entries()
        return self._by_name[name]

    def __repr__(self) -> str:
        if not self.is_loaded:
            return "NavigationTable(<not loaded>)"
        return f"NavigationTable({self.names()!r})"

    def get(self, name: str) -> Optional[NavigationItem]:
        self._entries()
        return self._by_name.get(name)

    def names(self) -> List[str]:
        return [item.name for item in self._entries()]

    def to_table(self) -> Table:
        """Name/Kind listing of the entries, without loading their data."""
        return Table(("Name", "Kind"), [(item.name, item.kind.value) for item in self._entries()])
