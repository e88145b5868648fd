"""Command-line interface for the ClickHouse connector."""

import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from .config import get_settings
from .connector import clickhouse_database
from .credentials import AuthenticationKind, Credential
from .errors import (
    AccessDeniedError,
    ConnectorError,
    DatabaseNotFoundError,
    DriverError,
    EncryptionNotSupportedError,
    UnsupportedAuthenticationError,
)
from .reporter import Reporter

console = Console()

DIAGNOSTICS = {
    EncryptionNotSupportedError: "The server did not accept an encrypted connection. Retry with --no-encrypt",
    AccessDeniedError: "Authentication failed. Verify username and password",
    UnsupportedAuthenticationError: "Only username/password authentication is supported",
    DatabaseNotFoundError: "Check the database name; run without --database to list databases",
    DriverError: "Check the server URL and that the ClickHouse ODBC driver is installed",
}


def _diagnostic(error: ConnectorError) -> str:
    for error_type, diagnostic in DIAGNOSTICS.items():
        if isinstance(error, error_type):
            return diagnostic
    return "Check the connection parameters"


@click.command()
@click.argument("server", type=str)
@click.option("--database", "-d", default=None, help="Database to navigate into")
@click.option("--query", "-q", default=None, help="Query to run instead of navigating")
@click.option("--user", "-u", envvar="CLICKHOUSE_USER", default="default", show_default=True)
@click.option(
    "--password",
    "-p",
    envvar="CLICKHOUSE_PASSWORD",
    default="",
    help="Password (or set CLICKHOUSE_PASSWORD)",
)
@click.option(
    "--no-encrypt",
    is_flag=True,
    help="Allow an unencrypted connection if the server does not support TLS",
)
@click.option(
    "--output",
    "-o",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.version_option(version="0.1.0", prog_name="clickhouse-connector")
def main(
    server: str,
    database: Optional[str],
    query: Optional[str],
    user: str,
    password: str,
    no_encrypt: bool,
    output: str,
    verbose: bool,
) -> None:
    """
    Browse a ClickHouse catalog or run a query through the ODBC driver.

    SERVER: ClickHouse URL (e.g., "http://localhost:8123")

    Examples:

        clickhouse-connector http://localhost:8123

        clickhouse-connector http://localhost:8123 --database default

        clickhouse-connector http://localhost:8123 -q "SELECT * FROM numbers(10)" -o json
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    credential = Credential(
        AuthenticationKind.USERNAME_PASSWORD,
        username=user,
        password=password,
        encrypt_connection=False if no_encrypt else None,
    )

    if output == "text":
        console.print(
            Panel.fit(
                "[bold cyan]ClickHouse Connector[/bold cyan]",
                subtitle=server,
            )
        )

    try:
        result = clickhouse_database(
            server, database, query, credential=credential, settings=get_settings()
        )
    except ConnectorError as e:
        console.print(f"[bold red]✗ {type(e).__name__}:[/bold red] {escape(str(e))}")
        console.print(f"\n[yellow]Diagnostic:[/yellow] {_diagnostic(e)}")
        sys.exit(1)

    reporter = Reporter(result, output_format=output, console=console)

    if output == "json":
        click.echo(reporter.generate_json())
    elif query is not None:
        reporter.display_text_report(title="Query Result")
    elif database is not None:
        reporter.display_text_report(title=f"Database: {database}")
    else:
        reporter.display_text_report(title="Databases")

    sys.exit(0)


if __name__ == "__main__":
    main()
