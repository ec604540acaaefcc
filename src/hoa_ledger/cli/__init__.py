"""hoa-ledger CLI - Command-line interface for the HOA ledger engine."""

from hoa_ledger.cli.app import app

# Import command modules to register them with the app
from hoa_ledger.cli.commands import (
    accounts,
    init,
    invoices,
    journal,
    reports,
    sync,
    units,
    work_orders,
)

# Register commands and sub-apps
app.command("init")(init.init)
app.add_typer(accounts.app, name="accounts", help="Chart of accounts.")
app.add_typer(journal.app, name="journal", help="General ledger postings.")
app.add_typer(units.app, name="units", help="Unit billing, payments and fees.")
app.add_typer(invoices.app, name="invoices", help="Invoices to unit owners.")
app.add_typer(work_orders.app, name="work-orders", help="Vendor work orders.")
app.add_typer(reports.app, name="reports", help="Financial reports.")
app.add_typer(sync.app, name="sync", help="Remote mirror.")


def main() -> None:
    """Entry point for the CLI."""
    app()


__all__ = ["app", "main"]
