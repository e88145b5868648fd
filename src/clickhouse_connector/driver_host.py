"""Driver host interface and its pyodbc implementation."""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import (
    Any, Callable, Dict, Iterator, List, Mapping, NoReturn, Optional, Protocol, Sequence, Tuple,
)

import pyodbc

from .connection import ConnectionDescriptor, CredentialFragment, format_connection_string
from .errors import DriverError
from .navigation import ItemKind, NavigationItem, NavigationTable
from .odbc_constants import SQL_IDENTIFIER_QUOTE_CHAR, SQL_INFO_NAMES
from .table import Table

LOG = logging.getLogger(__name__)

TypeInfoHook = Callable[[Table], Table]
ColumnsHook = Callable[[Optional[str], Optional[str], Optional[str], Optional[str], Table], Table]
ErrorHandler = Callable[[DriverError], NoReturn]

# SQL_ALL_TYPES
_ALL_TYPES = getattr(pyodbc, "SQL_ALL_TYPES", 0)

_VIEW_TABLE_TYPES = ("VIEW", "SYSTEM VIEW")


@dataclass(frozen=True)
class DataSourceOptions:
    """Options bundle passed along with the descriptor when opening a data source."""
    credential_connection_string: Mapping[str, str]
    client_connection_pooling: bool = True
    hierarchical_navigation: bool = True
    create_navigation_properties: bool = False
    soft_numbers: bool = True
    hide_native_query: bool = False
    sql_capabilities: Mapping[str, Any] = field(default_factory=dict)
    sql_get_info: Mapping[int, Any] = field(default_factory=dict)
    sql_get_functions: Mapping[str, Any] = field(default_factory=dict)
    implicit_type_conversions: Sequence[Tuple[str, str, str]] = ()
    sql_get_type_info: Optional[TypeInfoHook] = None
    sql_columns: Optional[ColumnsHook] = None
    on_error: Optional[ErrorHandler] = None
    connect_timeout: int = 10

    def __repr__(self) -> str:
        return (
            f"DataSourceOptions(client_connection_pooling={self.client_connection_pooling}, "
            f"hierarchical_navigation={self.hierarchical_navigation}, "
            f"connect_timeout={self.connect_timeout})"
        )


class DriverHost(Protocol):
    """Component that physically connects to and queries the database."""

    def open_data_source(
        self, descriptor: ConnectionDescriptor, options: DataSourceOptions
    ) -> NavigationTable:
        """Verify the connection and return the (lazily loaded) navigation catalog."""

    def run_query(
        self, descriptor: ConnectionDescriptor, query: str, credential_fragment: CredentialFragment
    ) -> Table:
        """Execute ``query`` and return its result set."""


def _result_table(cursor: Any, rows: Any, upper: bool = False) -> Table:
    names = [d[0] for d in (cursor.description or ())]
    if upper:
        names = [name.upper() for name in names]
    return Table(names, [tuple(row) for row in rows])


class OdbcCatalog(NavigationTable):
    """Navigation catalog of an opened ODBC data source; SQLTables runs on first access."""

    def __init__(self, source: "OdbcDataSource"):
        super().__init__(loader=source.navigation_items)
        self.source = source

    def type_info(self) -> Table:
        return self.source.type_info()

    def get_info(self, info_type: int) -> Any:
        return self.source.get_info(info_type)


class OdbcDataSource:
    """
    Lazily navigable view of one ClickHouse data source through pyodbc.

    Every load opens its own connection and closes it afterwards; reuse is
    left to the driver manager's pooling.
    """

    def __init__(self, connection_string: str, options: DataSourceOptions):
        self.connection_string = connection_string
        self.options = options
        # Set once the connection has been verified; later load failures
        # go through options.on_error.
        self.opened = False

    @contextmanager
    def _connection(self) -> Iterator[pyodbc.Connection]:
        try:
            conn = pyodbc.connect(self.connection_string, timeout=self.options.connect_timeout)
        except pyodbc.Error as e:
            self._fail(e)

        try:
            yield conn
        except pyodbc.Error as e:
            self._fail(e)
        finally:
            conn.close()

    def _fail(self, error: Exception) -> NoReturn:
        driver_error = DriverError.from_pyodbc(error)
        if self.opened and self.options.on_error is not None:
            self.options.on_error(driver_error)
        raise driver_error from error

    def verify(self) -> None:
        """Open and close a connection so failures surface at open time."""
        with self._connection():
            pass

    def navigation(self) -> OdbcCatalog:
        return OdbcCatalog(self)

    def navigation_items(self) -> List[NavigationItem]:
        """
        Build the top-level catalog entries from SQLTables.

        Entries are grouped by catalog, then by schema. Catalogs whose tables
        carry no schema list the tables directly.
        """
        with self._connection() as conn:
            cursor = conn.cursor()
            tables = [
                (row.table_cat, row.table_schem, row.table_name, row.table_type)
                for row in cursor.tables()
            ]
            cursor.close()

        grouped: Dict[str, Dict[str, List[Tuple[str, str]]]] = {}
        for catalog, schema, name, table_type in tables:
            schemas = grouped.setdefault(catalog or "", {})
            schemas.setdefault(schema or "", []).append((name, table_type or "TABLE"))

        if not self.options.hierarchical_navigation:
            return [
                self._table_item(catalog, schema, name, table_type, qualified=True)
                for catalog, schemas in grouped.items()
                for schema, entries in schemas.items()
                for name, table_type in entries
            ]

        items = [
            NavigationItem(
                catalog,
                ItemKind.DATABASE,
                lambda catalog=catalog, schemas=schemas: self._database_table(catalog, schemas),
            )
            for catalog, schemas in grouped.items()
        ]
        LOG.debug("Catalog contains %d databases", len(items))
        return items

    def _database_table(
        self, catalog: str, schemas: Dict[str, List[Tuple[str, str]]]
    ) -> NavigationTable:
        if list(schemas) == [""]:
            return NavigationTable([
                self._table_item(catalog, "", name, table_type) for name, table_type in schemas[""]
            ])

        return NavigationTable([
            NavigationItem(
                schema,
                ItemKind.SCHEMA,
                lambda schema=schema, entries=entries: NavigationTable([
                    self._table_item(catalog, schema, name, table_type)
                    for name, table_type in entries
                ]),
            )
            for schema, entries in schemas.items()
        ])

    def _table_item(
        self, catalog: str, schema: str, name: str, table_type: str, qualified: bool = False
    ) -> NavigationItem:
        kind = ItemKind.VIEW if table_type.upper() in _VIEW_TABLE_TYPES else ItemKind.TABLE
        display = ".".join(part for part in (catalog, schema, name) if part) if qualified else name
        return NavigationItem(
            display,
            kind,
            lambda: self.rows(catalog, schema, name),
            columns_loader=lambda: self.columns(catalog, schema, name),
        )

    def columns(self, catalog: str, schema: str, table: str) -> Table:
        """SQLColumns for one table, passed through the column-info hook."""
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.columns(table=table, catalog=catalog or None, schema=schema or None)
            result = _result_table(cursor, cursor.fetchall(), upper=True)
            cursor.close()

        if self.options.sql_columns is not None:
            result = self.options.sql_columns(catalog, schema, table, None, result)
        return result

    def type_info(self) -> Table:
        """SQLGetTypeInfo for all types, passed through the type-info hook."""
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.getTypeInfo(_ALL_TYPES)
            result = _result_table(cursor, cursor.fetchall(), upper=True)
            cursor.close()

        if self.options.sql_get_type_info is not None:
            result = self.options.sql_get_type_info(result)
        return result

    def get_info(self, info_type: int) -> Any:
        """SQLGetInfo, with the configured overrides taking precedence."""
        if info_type in self.options.sql_get_info:
            return self.options.sql_get_info[info_type]

        with self._connection() as conn:
            value = conn.getinfo(info_type)
        LOG.debug("SQLGetInfo(%s) = %r", SQL_INFO_NAMES.get(info_type, info_type), value)
        return value

    def rows(self, catalog: str, schema: str, table: str, limit: Optional[int] = None) -> Table:
        """Read the contents of one table."""
        with self._connection() as conn:
            quote = conn.getinfo(SQL_IDENTIFIER_QUOTE_CHAR) or '"'
            if quote == " ":
                quote = ""
            target = ".".join(
                f"{quote}{part.replace(quote, quote * 2) if quote else part}{quote}"
                for part in (catalog, schema, table) if part
            )
            cursor = conn.cursor()
            cursor.execute(f"SELECT * FROM {target}")
            fetched = cursor.fetchall() if limit is None else cursor.fetchmany(limit)
            result = _result_table(cursor, fetched)
            cursor.close()
        return result


class PyodbcDriverHost:
    """DriverHost backed by pyodbc and the driver manager."""

    def __init__(self, connect_timeout: int = 10):
        self.connect_timeout = connect_timeout

    def open_data_source(
        self, descriptor: ConnectionDescriptor, options: DataSourceOptions
    ) -> OdbcCatalog:
        # Only takes effect before the first connection of the process.
        pyodbc.pooling = options.client_connection_pooling

        connection_string = format_connection_string(descriptor, options.credential_connection_string)
        source = OdbcDataSource(connection_string, options)
        source.verify()
        source.opened = True
        return source.navigation()

    def run_query(
        self, descriptor: ConnectionDescriptor, query: str, credential_fragment: CredentialFragment
    ) -> Table:
        connection_string = format_connection_string(descriptor, credential_fragment)
        try:
            conn = pyodbc.connect(connection_string, timeout=self.connect_timeout)
        except pyodbc.Error as e:
            raise DriverError.from_pyodbc(e) from e

        try:
            cursor = conn.cursor()
            cursor.execute(query)
            if cursor.description is None:
                result = Table(())
            else:
                result = _result_table(cursor, cursor.fetchall())
            cursor.close()
        except pyodbc.Error as e:
            raise DriverError.from_pyodbc(e) from e
        finally:
            conn.close()

        LOG.debug("Query returned %d rows", len(result))
        return result
