"""Output formatters for CLI commands."""

import csv
import io
import json
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

from hoa_ledger.cli.config import OutputFormat

console = Console()
error_console = Console(stderr=True)

Row = dict[str, Any]


def format_output(
    data: BaseModel | Sequence[BaseModel] | Row | list[Row],
    output_format: OutputFormat,
    *,
    title: str | None = None,
    columns: list[str] | None = None,
) -> None:
    """Format and print records in the specified format.

    Args:
        data: Records to print (Pydantic model, list of models, or dict/list)
        output_format: Output format (table, json, csv)
        title: Optional title for table output
        columns: Optional column names to include (for table/csv)
    """
    rows: list[Row]
    if isinstance(data, BaseModel):
        rows = [data.model_dump(mode="json", exclude_none=True)]
    elif isinstance(data, dict):
        rows = [data]
    else:
        rows = [
            item.model_dump(mode="json", exclude_none=True) if isinstance(item, BaseModel) else item
            for item in data
        ]

    if output_format == OutputFormat.JSON:
        _format_json(rows)
    elif output_format == OutputFormat.CSV:
        _format_csv(rows, columns)
    else:
        _format_table(rows, title, columns)


def print_model_json(report: BaseModel) -> None:
    """Print a nested report model as one JSON document."""
    console.print_json(report.model_dump_json())


def _format_json(data: list[Row]) -> None:
    if len(data) == 1:
        console.print_json(json.dumps(data[0], default=str))
    else:
        console.print_json(json.dumps(data, default=str))


def _format_csv(data: list[Row], columns: list[str] | None) -> None:
    if not data:
        return

    if columns is None:
        columns = list(data[0].keys())

    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=columns, extrasaction="ignore")
    writer.writeheader()
    writer.writerows(data)
    console.print(output.getvalue(), end="", markup=False, highlight=False)


def _snake_to_title(s: str) -> str:
    """Convert snake_case to Title Case for table headers."""
    return " ".join(word.capitalize() for word in s.split("_"))


def format_money(value: Decimal | int | str | None) -> str:
    """$1,234.50 style, with negatives in parentheses."""
    if value is None:
        return ""
    amount = Decimal(str(value))
    text = f"${abs(amount):,.2f}"
    return f"({text})" if amount < 0 else text


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Decimal):
        return f"{value:,.2f}"
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def _format_table(data: list[Row], title: str | None, columns: list[str] | None) -> None:
    if not data:
        console.print("[dim]No data[/dim]")
        return

    if columns is None:
        columns = list(data[0].keys())

    table = Table(title=title, show_header=True, header_style="bold")
    for col in columns:
        justify = "right" if isinstance(data[0].get(col), Decimal) else "left"
        table.add_column(_snake_to_title(col), justify=justify)

    for row in data:
        table.add_row(*[_cell(row.get(col)) for col in columns])

    console.print(table)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[red]Error:[/red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning:[/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {message}")
