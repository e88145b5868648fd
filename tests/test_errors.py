"""Unit tests for driver error classification."""

import pyodbc
import pytest

from clickhouse_connector.errors import (
    AccessDeniedError,
    CredentialError,
    DriverError,
    EncryptionNotSupportedError,
    ErrorCategory,
    OdbcErrorRecord,
    classify_error,
    is_credential_error,
    is_ssl_error,
    parse_native_error,
    raise_classified,
)


def _driver_error(message, native_error):
    return DriverError(message, [OdbcErrorRecord(message, native_error, "HY000")])


def test_ssl_error_is_encryption_not_supported():
    """Test a credential-shaped failure with the SSL native code."""
    error = _driver_error("[ThriftExtension] SSL handshake failed", 6)

    assert is_ssl_error(error.odbc_errors[0])
    assert classify_error(error) is ErrorCategory.ENCRYPTION_NOT_SUPPORTED

    with pytest.raises(EncryptionNotSupportedError) as exc_info:
        raise_classified(error)
    assert exc_info.value.__cause__ is error


def test_credential_error_is_access_denied():
    """Test a credential-shaped failure with another native code."""
    error = _driver_error("[ThriftExtension] Authentication failed: password is incorrect", 516)

    assert classify_error(error) is ErrorCategory.ACCESS_DENIED

    with pytest.raises(AccessDeniedError) as exc_info:
        raise_classified(error)
    assert exc_info.value.message == "[ThriftExtension] Authentication failed: password is incorrect"
    assert isinstance(exc_info.value, CredentialError)


@pytest.mark.parametrize("native_error", [0, 7])
def test_excluded_native_codes_pass_through(native_error):
    """Test that native codes 0 and 7 are never credential errors."""
    error = _driver_error("[ThriftExtension] something", native_error)

    assert classify_error(error) is ErrorCategory.PASSTHROUGH
    with pytest.raises(DriverError) as exc_info:
        raise_classified(error)
    assert exc_info.value is error


def test_message_without_marker_passes_through():
    """Test that the protocol marker is required."""
    error = _driver_error("Connection refused", 6)

    assert not is_credential_error(error.odbc_errors[0])
    assert classify_error(error) is ErrorCategory.PASSTHROUGH
    with pytest.raises(DriverError) as exc_info:
        raise_classified(error)
    assert exc_info.value is error


def test_no_records_pass_through():
    """Test a failure that carries no driver records."""
    error = DriverError("boom")
    assert classify_error(error) is ErrorCategory.PASSTHROUGH


def test_only_first_record_is_inspected():
    """Test that later diagnostic records are ignored."""
    error = DriverError("multi", [
        OdbcErrorRecord("timeout", 159, "HYT00"),
        OdbcErrorRecord("[ThriftExtension] SSL", 6, "HY000"),
    ])
    assert classify_error(error) is ErrorCategory.PASSTHROUGH


def test_encryption_error_default_message():
    """Test the category-derived message."""
    error = EncryptionNotSupportedError()
    assert error.category is ErrorCategory.ENCRYPTION_NOT_SUPPORTED
    assert str(error) == "EncryptionNotSupported"


def test_parse_native_error():
    """Test extraction of the native code from a pyodbc message."""
    assert parse_native_error("[ClickHouse][ODBC] SSL error (6) (SQLDriverConnect)") == 6
    assert parse_native_error("[HY000] failure (-1)") == -1
    assert parse_native_error("no code here") is None


def test_parse_native_error_ignores_numbers_in_driver_text():
    """Test that the code before the SQL function trailer wins."""
    message = "[ClickHouse][ODBC][ThriftExtension] HTTP status (401) during SSL handshake (6) (SQLDriverConnect)"

    assert parse_native_error(message) == 6
    assert parse_native_error("[HY000] timeout after (30) seconds (7) (SQLExecDirectW)") == 7


def test_parse_native_error_first_record():
    """Test a message where pyodbc joined several records."""
    message = (
        "[08001] [ClickHouse] SSL error (6) (SQLDriverConnect); "
        "[01000] [ClickHouse] retry (0) (SQLDriverConnect)"
    )
    assert parse_native_error(message) == 6


def test_from_pyodbc_embedded_status_code_is_ssl():
    """Test that an HTTP status in the driver text does not hide the SSL code."""
    error = pyodbc.Error(
        "08001",
        "[08001] [ClickHouse][ODBC][ThriftExtension] HTTP status (401) during SSL handshake (6) (SQLDriverConnect)",
    )

    driver_error = DriverError.from_pyodbc(error)

    assert driver_error.odbc_errors[0].native_error == 6
    assert classify_error(driver_error) is ErrorCategory.ENCRYPTION_NOT_SUPPORTED


def test_from_pyodbc():
    """Test converting a pyodbc error."""
    error = pyodbc.Error("08001", "[ThriftExtension] SSL connect error (6) (SQLDriverConnect)")

    driver_error = DriverError.from_pyodbc(error)

    record = driver_error.odbc_errors[0]
    assert record.sql_state == "08001"
    assert record.native_error == 6
    assert "08001" in str(driver_error)
    assert classify_error(driver_error) is ErrorCategory.ENCRYPTION_NOT_SUPPORTED


def test_from_pyodbc_single_argument():
    """Test a pyodbc error without a SQLSTATE."""
    driver_error = DriverError.from_pyodbc(pyodbc.Error("driver crashed"))

    assert driver_error.odbc_errors[0].sql_state == ""
    assert driver_error.odbc_errors[0].native_error is None
    assert "Unknown" in str(driver_error)
