"""Unit receivable commands."""

import typer

from hoa_ledger.cli.config import CLIConfig
from hoa_ledger.cli.engine_factory import open_engine
from hoa_ledger.cli.formatters import format_money, format_output, print_info, print_success
from hoa_ledger.cli.params import parse_amount, parse_date
from hoa_ledger.models import Unit, UnitStatus

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_units(
    ctx: typer.Context,
    delinquent: bool = typer.Option(
        False,
        "--delinquent",
        help="Only units with a balance owed.",
    ),
) -> None:
    """List units with their fees and balances."""
    config: CLIConfig = ctx.obj

    with open_engine(config) as engine:
        units = engine.units.list_units()

    if delinquent:
        units = [u for u in units if u.is_delinquent]
    rows = [
        {
            "number": u.number,
            "owner": u.owner,
            "status": str(u.status),
            "monthly_fee": u.monthly_fee,
            "balance": u.balance,
            "late_fees": u.unwaived_late_fees(),
            "special_assessments": u.unpaid_special_assessments(),
        }
        for u in units
    ]
    format_output(rows, config.output_format, title="Units")


@app.command("add")
def add_unit(
    ctx: typer.Context,
    number: str = typer.Argument(..., help="Unit number."),
    monthly_fee: str = typer.Argument(..., help="Monthly assessment."),
    owner: str = typer.Option("", "--owner", help="Owner name."),
    email: str = typer.Option("", "--email", help="Owner email."),
    vacant: bool = typer.Option(False, "--vacant", help="Unit is not occupied."),
    opening_balance: str = typer.Option(
        "0",
        "--opening-balance",
        help="Amount already owed when the unit is added.",
    ),
) -> None:
    """Register a unit."""
    unit = Unit(
        number=number,
        owner=owner,
        email=email,
        monthly_fee=parse_amount(monthly_fee),
        status=UnitStatus.VACANT if vacant else UnitStatus.OCCUPIED,
        balance=parse_amount(opening_balance),
    )
    with open_engine(ctx.obj) as engine:
        unit = engine.units.add_unit(unit)
    print_success(f"Added unit {unit.number} (balance {format_money(unit.balance)})")


@app.command("bill")
def bill(
    ctx: typer.Context,
    number: str | None = typer.Argument(
        None,
        help="Unit to bill (default: every occupied unit).",
    ),
    period: str | None = typer.Option(
        None,
        "--period",
        "-p",
        help="Billing date (YYYY-MM-DD, default today).",
    ),
) -> None:
    """Bill the monthly assessment."""
    on = parse_date(period, "period")
    with open_engine(ctx.obj) as engine:
        if number:
            entries = [engine.units.bill_monthly_assessment(number, on)]
        else:
            entries = engine.units.bill_all_occupied(on)
    total = sum(e.amount for e in entries)
    print_success(f"Billed {len(entries)} assessment(s) totaling {format_money(total)}")


@app.command("pay")
def pay(
    ctx: typer.Context,
    number: str = typer.Argument(..., help="Unit number."),
    amount: str = typer.Argument(..., help="Amount received."),
    method: str = typer.Option("ACH", "--method", "-m", help="Payment method."),
    note: str | None = typer.Option(None, "--note", help="Note, e.g. a check number."),
    on: str | None = typer.Option(None, "--date", help="Date received (YYYY-MM-DD)."),
) -> None:
    """Record a payment from a unit owner."""
    with open_engine(ctx.obj) as engine:
        entry = engine.units.record_payment(
            number, parse_amount(amount), method, note, on=parse_date(on)
        )
        balance = engine.units.get(number).balance
    print_success(f"Recorded {format_money(entry.amount)} from unit {number} ({entry.id})")
    print_info(f"Unit {number} balance: {format_money(balance)}")


@app.command("late-fee")
def late_fee(
    ctx: typer.Context,
    number: str = typer.Argument(..., help="Unit number."),
    amount: str = typer.Argument(..., help="Fee amount."),
    reason: str = typer.Argument(..., help="Why the fee is charged."),
    on: str | None = typer.Option(None, "--date", help="Date charged (YYYY-MM-DD)."),
) -> None:
    """Charge a late fee to a unit."""
    with open_engine(ctx.obj) as engine:
        entry = engine.units.impose_late_fee(
            number, parse_amount(amount), reason, on=parse_date(on)
        )
    print_success(f"Charged late fee of {format_money(entry.amount)} to unit {number}")


@app.command("waive-fee")
def waive_fee(
    ctx: typer.Context,
    number: str = typer.Argument(..., help="Unit number."),
    index: int = typer.Argument(..., help="Position of the fee in the unit's late fee list."),
) -> None:
    """Waive a late fee. The fee income already recognized stays in the ledger."""
    with open_engine(ctx.obj) as engine:
        fee = engine.units.waive_late_fee(number, index)
    print_success(f"Waived {format_money(fee.amount)} late fee on unit {number}")


@app.command("assess")
def assess(
    ctx: typer.Context,
    number: str = typer.Argument(..., help="Unit number."),
    amount: str = typer.Argument(..., help="Assessment amount."),
    reason: str = typer.Argument(..., help="What the assessment pays for."),
    on: str | None = typer.Option(None, "--date", help="Date levied (YYYY-MM-DD)."),
) -> None:
    """Levy a special assessment on a unit."""
    with open_engine(ctx.obj) as engine:
        assessment = engine.units.add_special_assessment(
            number, parse_amount(amount), reason, on=parse_date(on)
        )
    print_success(
        f"Special assessment {assessment.id} of {format_money(assessment.amount)} "
        f"on unit {number}"
    )


@app.command("pay-assessment")
def pay_assessment(
    ctx: typer.Context,
    number: str = typer.Argument(..., help="Unit number."),
    assessment_id: str = typer.Argument(..., help="Special assessment id."),
    on: str | None = typer.Option(None, "--date", help="Date paid (YYYY-MM-DD)."),
) -> None:
    """Mark a special assessment as paid."""
    with open_engine(ctx.obj) as engine:
        entry = engine.units.mark_special_assessment_paid(
            number, assessment_id, on=parse_date(on)
        )
    print_success(f"Special assessment {assessment_id} paid ({entry.id})")
