"""Entry point: open a ClickHouse catalog or run an ad-hoc query."""

import json
import logging
from enum import Enum
from functools import partial
from typing import Optional, Tuple, Union

from .capabilities import (
    IMPLICIT_TYPE_CONVERSIONS,
    SQL_CAPABILITIES,
    SQL_GET_FUNCTIONS_OVERRIDES,
    SQL_GET_INFO_OVERRIDES,
)
from .column_info import correct_column_info
from .config import ConnectorSettings, get_settings
from .connection import CredentialFragment, build_connection_descriptor
from .credentials import AuthenticationKind, Credential
from .driver_host import DataSourceOptions, DriverHost, PyodbcDriverHost
from .errors import DatabaseNotFoundError, DriverError, raise_classified
from .navigation import NavigationTable
from .table import Table
from .type_info import correct_type_info

LOG = logging.getLogger(__name__)
TRACE_LOG = logging.getLogger("clickhouse_connector.trace")

DATA_SOURCE_FUNCTION = "Clickhouse.Database"
SUPPORTED_AUTHENTICATION_KINDS = (AuthenticationKind.USERNAME_PASSWORD.value,)
SUPPORTS_ENCRYPTION = True


class DispatchState(Enum):
    """States of one clickhouse_database call."""
    OPENING = "OPENING"
    FULL_CATALOG = "FULL_CATALOG"
    SCOPED_DATABASE = "SCOPED_DATABASE"
    AD_HOC_QUERY = "AD_HOC_QUERY"
    DONE = "DONE"
    FAILED = "FAILED"


def select_dispatch_state(database: Optional[str], query: Optional[str]) -> DispatchState:
    """A supplied query always wins over a supplied database."""
    if query is not None:
        return DispatchState.AD_HOC_QUERY
    if database is not None:
        return DispatchState.SCOPED_DATABASE
    return DispatchState.FULL_CATALOG


def data_source_options(
    credential_fragment: CredentialFragment, settings: ConnectorSettings
) -> DataSourceOptions:
    """Options bundle for opening the data source, with both metadata hooks registered."""
    trace = TRACE_LOG if settings.enable_trace_output else None
    return DataSourceOptions(
        credential_connection_string=credential_fragment,
        client_connection_pooling=settings.client_connection_pooling,
        hierarchical_navigation=True,
        create_navigation_properties=False,
        soft_numbers=True,
        hide_native_query=False,
        sql_capabilities=SQL_CAPABILITIES,
        sql_get_info=SQL_GET_INFO_OVERRIDES,
        sql_get_functions=SQL_GET_FUNCTIONS_OVERRIDES,
        implicit_type_conversions=IMPLICIT_TYPE_CONVERSIONS,
        sql_get_type_info=correct_type_info,
        sql_columns=partial(correct_column_info, trace=trace),
        on_error=raise_classified,
        connect_timeout=settings.connect_timeout,
    )


def clickhouse_database(
    server: str,
    database: Optional[str] = None,
    query: Optional[str] = None,
    *,
    credential: Credential,
    driver_host: Optional[DriverHost] = None,
    settings: Optional[ConnectorSettings] = None,
) -> Union[NavigationTable, Table]:
    """
    Open a ClickHouse data source and return what the arguments ask for.

    - no database and no query: the full navigation catalog
    - a database and no query: that database's navigation table
    - a query: the query's result, whether or not a database was given

    Args:
        server: ClickHouse URL, e.g. "http://localhost:8123"
        database: Optional database name
        query: Optional SQL text, sent to the driver unmodified
        credential: Credential selected by the caller
        driver_host: Driver host to use (defaults to PyodbcDriverHost)
        settings: Connector settings (defaults to environment settings)

    Returns:
        NavigationTable for catalog requests, Table for queries

    Raises:
        UnsupportedAuthenticationError: Credential kind is not username/password
        CredentialError: Driver failure recognized as a credential problem
        DriverError: Any other driver failure, unchanged
        DatabaseNotFoundError: ``database`` is not in the catalog
    """
    settings = settings or get_settings()
    driver_host = driver_host or PyodbcDriverHost(connect_timeout=settings.connect_timeout)

    state = DispatchState.OPENING
    descriptor, fragment = build_connection_descriptor(
        server, database, query, credential, driver_name=settings.driver_name
    )
    options = data_source_options(fragment, settings)

    result: Union[NavigationTable, Table]
    try:
        catalog = driver_host.open_data_source(descriptor, options)

        state = select_dispatch_state(database, query)
        LOG.debug("Dispatching %s for %s", state.value, server)

        if state is DispatchState.AD_HOC_QUERY:
            result = driver_host.run_query(descriptor, query, fragment)
    except DriverError as e:
        LOG.debug("%s: %s from state %s", server, DispatchState.FAILED.value, state.value)
        raise_classified(e)

    # Failures of lazy catalog loads are classified by options.on_error.
    if state is DispatchState.SCOPED_DATABASE:
        item = catalog.get(database)
        if item is None:
            raise DatabaseNotFoundError(database)
        result = item.data
    elif state is DispatchState.FULL_CATALOG:
        result = catalog

    LOG.debug("%s: %s", server, DispatchState.DONE.value)
    return result


def test_connection(data_source_path: str) -> Tuple[str, str]:
    """
    Arguments used by the host to test a stored data source.

    Args:
        data_source_path: JSON document of the form {"server": "..."}

    Returns:
        Tuple of (data source function name, server)
    """
    server = json.loads(data_source_path)["server"]
    return DATA_SOURCE_FUNCTION, server
