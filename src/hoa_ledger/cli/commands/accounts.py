"""Chart of accounts commands."""

import typer

from hoa_ledger.cli.config import CLIConfig
from hoa_ledger.cli.engine_factory import open_engine
from hoa_ledger.cli.formatters import format_output, print_success
from hoa_ledger.ledger.models import Account, AccountType

app = typer.Typer(no_args_is_help=True)


def _account_row(account: Account) -> dict[str, object]:
    return {
        "number": account.number,
        "name": account.name,
        "type": str(account.account_type),
        "sub": account.sub,
        "parent": account.parent or "",
        "active": account.active,
    }


@app.command("list")
def list_accounts(
    ctx: typer.Context,
    account_type: AccountType | None = typer.Option(
        None,
        "--type",
        help="Only accounts of this type.",
    ),
) -> None:
    """List the chart of accounts in number order."""
    config: CLIConfig = ctx.obj

    with open_engine(config) as engine:
        accounts = engine.accounts.list_accounts(account_type)

    format_output(
        [_account_row(a) for a in accounts], config.output_format, title="Chart of Accounts"
    )


@app.command("add-section")
def add_section(
    ctx: typer.Context,
    number: str = typer.Argument(..., help="Account number, e.g. 7000."),
    name: str = typer.Argument(..., help="Section name."),
    account_type: AccountType = typer.Argument(..., help="Account type of the section."),
) -> None:
    """Add a top-level header account."""
    with open_engine(ctx.obj) as engine:
        account = engine.accounts.add_section(number, name, account_type)
    print_success(f"Added section {account.display_name}")


@app.command("add")
def add_account(
    ctx: typer.Context,
    number: str = typer.Argument(..., help="Account number."),
    name: str = typer.Argument(..., help="Account name."),
    parent: str = typer.Argument(..., help="Parent header account number."),
    sub: str = typer.Option(
        "detail",
        "--sub",
        help="Detail kind (bank, receivable, operating, ...) or 'header' for a group.",
    ),
    budget_category: str | None = typer.Option(
        None,
        "--budget-category",
        help="Budget category whose actuals come from this account.",
    ),
    reserve_item: str | None = typer.Option(
        None,
        "--reserve-item",
        help="Reserve item this account tracks.",
    ),
) -> None:
    """Add an account under a header; it inherits the header's type."""
    with open_engine(ctx.obj) as engine:
        account = engine.accounts.add_account(
            number,
            name,
            parent,
            sub,
            budget_category=budget_category,
            reserve_item=reserve_item,
        )
    print_success(f"Added {account.display_name} ({account.account_type})")


@app.command("update")
def update_account(
    ctx: typer.Context,
    number: str = typer.Argument(..., help="Account number."),
    name: str | None = typer.Option(None, "--name", help="New name."),
    active: bool | None = typer.Option(
        None,
        "--active/--inactive",
        help="Accept or refuse new postings.",
    ),
) -> None:
    """Rename or (de)activate an account."""
    with open_engine(ctx.obj) as engine:
        current = engine.accounts.get(number)
        account = engine.accounts.update(
            number,
            name if name is not None else current.name,
            active if active is not None else current.active,
        )
    state = "active" if account.active else "inactive"
    print_success(f"Updated {account.display_name} ({state})")


@app.command("delete")
def delete_account(
    ctx: typer.Context,
    number: str = typer.Argument(..., help="Account number."),
) -> None:
    """Delete an account with no ledger history and no children."""
    with open_engine(ctx.obj) as engine:
        account = engine.accounts.delete(number)
    print_success(f"Deleted {account.display_name}")


@app.command("balance")
def account_balance(
    ctx: typer.Context,
    number: str = typer.Argument(..., help="Account number."),
) -> None:
    """Show an account's balance and, for headers, the rollup beneath it."""
    config: CLIConfig = ctx.obj

    with open_engine(config) as engine:
        account = engine.accounts.get(number)
        data = {
            "number": account.number,
            "name": account.name,
            "type": str(account.account_type),
            "balance": engine.state.balance_of(number),
            "rollup": engine.state.group_balance_of(number),
            "entries": engine.state.ledger.references(number),
        }

    format_output(data, config.output_format, title="Account Balance")
