"""Connector exceptions and classification of ODBC driver failures."""

import logging
import re
from enum import Enum
from typing import List, NoReturn, Optional, Sequence

LOG = logging.getLogger(__name__)

# Driver-internal protocol marker found in messages of credential-shaped failures.
CREDENTIAL_ERROR_MARKER = "[ThriftExtension]"

# Native error codes that never indicate a credential problem.
NON_CREDENTIAL_NATIVE_CODES = (0, 7)

SSL_NATIVE_ERROR_CODE = 6

# pyodbc ends each record with "(<native>) (<SQLFunction>)".
_NATIVE_CODE_PATTERN = re.compile(r"\((-?\d+)\)\s*\(SQL\w+\)")
_TRAILING_CODE_PATTERN = re.compile(r"\((-?\d+)\)\s*$")


class ErrorCategory(Enum):
    """Host-recognized failure categories."""
    ENCRYPTION_NOT_SUPPORTED = "EncryptionNotSupported"
    ACCESS_DENIED = "AccessDenied"
    PASSTHROUGH = "Passthrough"


class ConnectorError(Exception):
    """Base class for all errors raised by the connector."""


class UnsupportedAuthenticationError(ConnectorError):
    """The credential uses an authentication kind the connector does not implement."""

    def __init__(self, authentication_kind: object):
        self.authentication_kind = authentication_kind
        super().__init__(
            f"Unimplemented authentication kind: {authentication_kind!r} "
            "(only UsernamePassword is supported)"
        )


class InvalidEndpointError(ConnectorError):
    """The endpoint string cannot be used to build a connection descriptor."""


class DatabaseNotFoundError(ConnectorError):
    """The requested database is not part of the navigation catalog."""

    def __init__(self, database: str):
        self.database = database
        super().__init__(f"Database not found in catalog: {database!r}")


class CredentialError(ConnectorError):
    """A classified credential failure, reported to the host as-is."""

    category = ErrorCategory.PASSTHROUGH

    def __init__(self, message: Optional[str] = None):
        self.message = message
        super().__init__(message or self.category.value)


class EncryptionNotSupportedError(CredentialError):
    category = ErrorCategory.ENCRYPTION_NOT_SUPPORTED


class AccessDeniedError(CredentialError):
    category = ErrorCategory.ACCESS_DENIED


class OdbcErrorRecord:
    """One diagnostic record reported by the ODBC driver."""

    def __init__(self, message: str, native_error: Optional[int] = None, sql_state: str = ""):
        self.message = message
        self.native_error = native_error
        self.sql_state = sql_state

    def __repr__(self) -> str:
        return (
            f"OdbcErrorRecord(sql_state={self.sql_state!r}, "
            f"native_error={self.native_error!r}, message={self.message!r})"
        )


class DriverError(ConnectorError):
    """
    A raw failure returned by the driver host.

    Carries the driver's diagnostic records in ``odbc_errors``, first
    record first. Instances reach callers only when they do not match any
    recognized credential failure.
    """

    def __init__(self, message: str, odbc_errors: Sequence[OdbcErrorRecord] = ()):
        super().__init__(message)
        self.odbc_errors: List[OdbcErrorRecord] = list(odbc_errors)

    @classmethod
    def from_pyodbc(cls, error: Exception) -> "DriverError":
        """
        Build a DriverError from a pyodbc exception.

        pyodbc raises errors with args ``(sqlstate, message)`` where the
        message embeds the native error code in parentheses, e.g.
        ``"[HY000] [ClickHouse][ODBC] ... (6) (SQLDriverConnect)"``.

        Args:
            error: The pyodbc.Error instance

        Returns:
            DriverError with a single OdbcErrorRecord
        """
        if len(error.args) > 1:
            sql_state = str(error.args[0])
            message = str(error.args[1])
        else:
            sql_state = ""
            message = str(error)

        record = OdbcErrorRecord(message, parse_native_error(message), sql_state)
        return cls(f"[{sql_state or 'Unknown'}] {message}", [record])


def parse_native_error(message: str) -> Optional[int]:
    """
    Extract the native error code from a pyodbc message.

    The code is the integer right before the "(SQLFunction)" trailer of the
    first record; integers inside the driver text are ignored. Messages
    without a trailer fall back to a parenthesized integer at the very end.
    """
    match = _NATIVE_CODE_PATTERN.search(message) or _TRAILING_CODE_PATTERN.search(message)
    if match is None:
        return None
    return int(match.group(1))


def is_credential_error(record: OdbcErrorRecord) -> bool:
    return (
        CREDENTIAL_ERROR_MARKER in (record.message or "")
        and record.native_error is not None
        and record.native_error not in NON_CREDENTIAL_NATIVE_CODES
    )


def is_ssl_error(record: OdbcErrorRecord) -> bool:
    return record.native_error == SSL_NATIVE_ERROR_CODE


def classify_error(error: DriverError) -> ErrorCategory:
    """
    Decide which host-recognized category a driver failure belongs to.

    Only the first diagnostic record is inspected.

    Args:
        error: Raw failure from the driver host

    Returns:
        ErrorCategory for the failure
    """
    if not error.odbc_errors:
        return ErrorCategory.PASSTHROUGH

    record = error.odbc_errors[0]
    if not is_credential_error(record):
        return ErrorCategory.PASSTHROUGH
    if is_ssl_error(record):
        return ErrorCategory.ENCRYPTION_NOT_SUPPORTED
    return ErrorCategory.ACCESS_DENIED


def raise_classified(error: DriverError) -> NoReturn:
    """Raise the classified credential error for ``error``, or ``error`` itself."""
    category = classify_error(error)
    LOG.debug("Driver error classified as %s: %s", category.value, error)

    if category is ErrorCategory.ENCRYPTION_NOT_SUPPORTED:
        raise EncryptionNotSupportedError() from error
    if category is ErrorCategory.ACCESS_DENIED:
        raise AccessDeniedError(error.odbc_errors[0].message) from error
    raise error
