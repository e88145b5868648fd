"""ClickHouse connector for reporting hosts, on top of the ClickHouse ODBC driver."""

from .connector import DispatchState, clickhouse_database
from .credentials import AuthenticationKind, Credential, SSLMode
from .errors import (
    AccessDeniedError,
    ConnectorError,
    CredentialError,
    DatabaseNotFoundError,
    DriverError,
    EncryptionNotSupportedError,
    ErrorCategory,
    InvalidEndpointError,
    UnsupportedAuthenticationError,
)
from .table import Table

__all__ = [
    "clickhouse_database",
    "DispatchState",
    "AuthenticationKind",
    "Credential",
    "SSLMode",
    "AccessDeniedError",
    "ConnectorError",
    "CredentialError",
    "DatabaseNotFoundError",
    "DriverError",
    "EncryptionNotSupportedError",
    "ErrorCategory",
    "InvalidEndpointError",
    "UnsupportedAuthenticationError",
    "Table",
]
