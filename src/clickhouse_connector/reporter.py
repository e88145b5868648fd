"""Rendering of catalogs and query results for the command line."""

import json
from typing import Any, Dict, Optional, Union

from rich.console import Console
from rich.markup import escape
from rich.table import Table as RichTable

from .navigation import NavigationTable
from .table import Table

Result = Union[NavigationTable, Table]


class Reporter:
    """Displays a connector result as a rich table or as JSON."""

    def __init__(self, result: Result, output_format: str = "text", console: Optional[Console] = None):
        self.result = result
        self.output_format = output_format
        self.console = console or Console()

    def as_table(self) -> Table:
        """The result as a plain Table; catalogs become a Name/Kind listing."""
        if isinstance(self.result, NavigationTable):
            return self.result.to_table()
        return self.result

    def display_text_report(self, title: str = "Result"):
        """Display the result using Rich."""
        table = self.as_table()

        rich_table = RichTable(title=title, show_header=True, header_style="bold cyan")
        for name in table.columns:
            rich_table.add_column(name)

        for row in table.rows:
            rich_table.add_row(*("[dim]null[/dim]" if v is None else escape(str(v)) for v in row))

        self.console.print(rich_table)
        self.console.print(f"[dim]{len(table)} row(s)[/dim]")

    def to_dict(self) -> Dict[str, Any]:
        table = self.as_table()
        return {
            "columns": list(table.columns),
            "rows": [list(row) for row in table.rows],
            "row_count": len(table),
        }

    def generate_json(self) -> str:
        """
        Generate JSON report.

        Values that JSON cannot represent (dates, decimals, UUIDs) are
        rendered with str().

        Returns:
            JSON string of the result
        """
        return json.dumps(self.to_dict(), indent=2, default=str)
