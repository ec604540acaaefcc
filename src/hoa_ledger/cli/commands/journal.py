"""General ledger commands."""

from datetime import date

import typer

from hoa_ledger.cli.config import CLIConfig
from hoa_ledger.cli.engine_factory import open_engine
from hoa_ledger.cli.formatters import format_output, print_success
from hoa_ledger.cli.params import parse_amount, parse_date
from hoa_ledger.ledger.models import EntrySource, LedgerEntry

app = typer.Typer(no_args_is_help=True)


def _entry_row(entry: LedgerEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "date": entry.date.isoformat(),
        "memo": entry.memo,
        "debit": entry.debit_account,
        "credit": entry.credit_account,
        "amount": entry.amount,
        "source": str(entry.source),
        "source_id": entry.source_id or "",
        "reverses": entry.reverses or "",
    }


@app.command("list")
def list_entries(
    ctx: typer.Context,
    account: str | None = typer.Option(None, "--account", "-a", help="Filter by account."),
    source: EntrySource | None = typer.Option(None, "--source", help="Filter by source."),
    search: str | None = typer.Option(
        None,
        "--search",
        "-s",
        help="Text to find in memo or source id.",
    ),
    from_date: str | None = typer.Option(None, "--from", help="Start date (YYYY-MM-DD)."),
    to_date: str | None = typer.Option(None, "--to", help="End date (YYYY-MM-DD)."),
    limit: int | None = typer.Option(
        None,
        "--limit",
        "-n",
        help="Show only the most recent entries.",
    ),
) -> None:
    """List ledger entries, oldest first."""
    config: CLIConfig = ctx.obj
    start = parse_date(from_date, "from date")
    end = parse_date(to_date, "to date")

    with open_engine(config) as engine:
        entries = engine.journal.list_entries(
            account=account, source=source, search=search, start=start, end=end
        )

    if limit:
        entries = entries[-limit:]
    format_output([_entry_row(e) for e in entries], config.output_format, title="General Ledger")


@app.command("post")
def post_entry(
    ctx: typer.Context,
    debit: str = typer.Argument(..., help="Account to debit."),
    credit: str = typer.Argument(..., help="Account to credit."),
    amount: str = typer.Argument(..., help="Amount, e.g. 1250.00."),
    memo: str = typer.Argument(..., help="Entry description."),
    entry_date: str | None = typer.Option(
        None,
        "--date",
        help="Accounting date (YYYY-MM-DD, default today).",
    ),
) -> None:
    """Post a manual journal entry."""
    on = parse_date(entry_date) or date.today()
    with open_engine(ctx.obj) as engine:
        entry = engine.journal.post_manual_entry(on, memo, debit, credit, parse_amount(amount))
    print_success(f"Posted {entry.id}: Dr {debit} / Cr {credit} {entry.amount}")


@app.command("transfer")
def transfer(
    ctx: typer.Context,
    from_account: str = typer.Argument(..., help="Account the money leaves."),
    to_account: str = typer.Argument(..., help="Account the money goes to."),
    amount: str = typer.Argument(..., help="Amount to move."),
    memo: str = typer.Option("Transfer", "--memo", "-m", help="Entry description."),
    entry_date: str | None = typer.Option(
        None,
        "--date",
        help="Accounting date (YYYY-MM-DD, default today).",
    ),
) -> None:
    """Move money between accounts, e.g. operating cash to reserve savings."""
    on = parse_date(entry_date) or date.today()
    with open_engine(ctx.obj) as engine:
        entry = engine.journal.post_transfer(
            on, memo, from_account, to_account, parse_amount(amount)
        )
    print_success(f"Posted {entry.id}: {entry.amount} from {from_account} to {to_account}")


@app.command("reverse")
def reverse(
    ctx: typer.Context,
    entry_id: str = typer.Argument(..., help="Entry to reverse, e.g. GL1004."),
    entry_date: str | None = typer.Option(
        None,
        "--date",
        help="Date of the reversing entry (YYYY-MM-DD, default today).",
    ),
    memo: str | None = typer.Option(None, "--memo", "-m", help="Reversal description."),
) -> None:
    """Post an entry offsetting an earlier one."""
    with open_engine(ctx.obj) as engine:
        entry = engine.journal.reverse(entry_id, parse_date(entry_date), memo)
    print_success(f"Posted {entry.id} reversing {entry_id}")
