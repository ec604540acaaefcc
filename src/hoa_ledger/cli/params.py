"""Parsing of command-line values the engine takes as dates and money."""

from datetime import date
from decimal import Decimal, InvalidOperation

import typer

from hoa_ledger.cli.formatters import print_error


def parse_date(value: str | None, option: str = "date") -> date | None:
    """Parse YYYY-MM-DD, exiting with an error message when malformed."""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        print_error(f"Invalid {option} format. Use YYYY-MM-DD.")
        raise typer.Exit(1) from None


def parse_amount(value: str) -> Decimal:
    """Parse a money amount such as 450, 450.00 or 1,250.50."""
    try:
        return Decimal(value.replace(",", "").lstrip("$"))
    except InvalidOperation:
        print_error(f"Invalid amount: {value}")
        raise typer.Exit(1) from None
