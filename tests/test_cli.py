"""Unit tests for the command-line interface."""

import json
from unittest.mock import patch

from click.testing import CliRunner

from clickhouse_connector.cli import main
from clickhouse_connector.credentials import SSLMode
from clickhouse_connector.errors import DriverError, EncryptionNotSupportedError
from clickhouse_connector.navigation import ItemKind, NavigationItem, NavigationTable
from clickhouse_connector.reporter import Reporter
from clickhouse_connector.table import Table


@patch("clickhouse_connector.cli.clickhouse_database")
def test_cli_query_json(mock_database):
    """Test JSON output of a query result."""
    mock_database.return_value = Table(("number",), [(0,), (1,)])

    result = CliRunner().invoke(
        main, ["http://localhost:8123", "-q", "SELECT * FROM numbers(2)", "-o", "json"]
    )

    assert result.exit_code == 0
    assert json.loads(result.output) == {"columns": ["number"], "rows": [[0], [1]], "row_count": 2}

    args, kwargs = mock_database.call_args
    assert args == ("http://localhost:8123", None, "SELECT * FROM numbers(2)")
    assert kwargs["credential"].username == "default"
    assert kwargs["credential"].encrypt_connection is None


@patch("clickhouse_connector.cli.clickhouse_database")
def test_cli_catalog_text(mock_database):
    """Test the text listing of the catalog."""
    mock_database.return_value = NavigationTable([
        NavigationItem("default", ItemKind.DATABASE, NavigationTable),
    ])

    result = CliRunner().invoke(main, ["http://localhost:8123"])

    assert result.exit_code == 0
    assert "default" in result.output
    assert "Databases" in result.output


@patch("clickhouse_connector.cli.clickhouse_database")
def test_cli_no_encrypt(mock_database):
    """Test that --no-encrypt declines encryption explicitly."""
    mock_database.return_value = Table(("x",), [])

    CliRunner().invoke(main, ["http://localhost:8123", "--no-encrypt", "-u", "alice", "-p", "pw"])

    credential = mock_database.call_args[1]["credential"]
    assert credential.encrypt_connection is False
    assert credential.username == "alice"
    assert credential.password == "pw"


@patch("clickhouse_connector.cli.clickhouse_database")
def test_cli_classified_error(mock_database):
    """Test the exit code and hint for a classified failure."""
    mock_database.side_effect = EncryptionNotSupportedError()

    result = CliRunner().invoke(main, ["http://localhost:8123"])

    assert result.exit_code == 1
    assert "--no-encrypt" in result.output


@patch("clickhouse_connector.cli.clickhouse_database")
def test_cli_driver_error(mock_database):
    """Test the exit code for an unclassified driver failure."""
    mock_database.side_effect = DriverError("[08001] Connection refused")

    result = CliRunner().invoke(main, ["http://localhost:8123"])

    assert result.exit_code == 1
    assert "Connection refused" in result.output


def test_reporter_json_handles_non_json_values():
    """Test JSON rendering of values such as dates."""
    import datetime

    reporter = Reporter(Table(("d",), [(datetime.date(2024, 1, 2),)]), output_format="json")

    assert json.loads(reporter.generate_json())["rows"] == [["2024-01-02"]]


def test_ssl_mode_default_is_require():
    """Test the encryption mode the CLI relies on when --no-encrypt is absent."""
    from clickhouse_connector.credentials import resolve_ssl_mode

    assert resolve_ssl_mode(None) is SSLMode.REQUIRE
