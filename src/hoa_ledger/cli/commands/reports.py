"""Financial report commands."""

from decimal import Decimal

import typer
from rich.table import Table

from hoa_ledger.cli.config import CLIConfig, OutputFormat
from hoa_ledger.cli.engine_factory import open_engine
from hoa_ledger.cli.formatters import (
    console,
    format_money,
    format_output,
    print_info,
    print_model_json,
    print_success,
    print_warning,
)
from hoa_ledger.cli.params import parse_amount, parse_date
from hoa_ledger.reports.models import StatementLine

app = typer.Typer(no_args_is_help=True)


def _statement_table(title: str, lines: list[tuple[str, Decimal]], total: Decimal) -> Table:
    table = Table(title=title, show_header=False, title_justify="left")
    table.add_column("Line")
    table.add_column("Amount", justify="right")
    for label, amount in lines:
        table.add_row(label, format_money(amount))
    table.add_row("[bold]Total[/bold]", f"[bold]{format_money(total)}[/bold]")
    return table


def _other(lines: list[StatementLine]) -> list[tuple[str, Decimal]]:
    return [(f"{line.account_number} {line.name}", line.amount) for line in lines]


@app.command("balance-sheet")
def balance_sheet(
    ctx: typer.Context,
    as_of: str | None = typer.Option(None, "--as-of", help="Report date (YYYY-MM-DD)."),
) -> None:
    """Assets, liabilities and equity over all postings."""
    config: CLIConfig = ctx.obj

    with open_engine(config) as engine:
        sheet = engine.reports.balance_sheet(parse_date(as_of, "as-of date"))

    if config.output_format == OutputFormat.JSON:
        print_model_json(sheet)
        return

    assets, liabilities, equity = sheet.assets, sheet.liabilities, sheet.equity
    console.print(f"[bold]Balance Sheet[/bold] as of {sheet.as_of.isoformat()}")
    console.print(
        _statement_table(
            "Assets",
            [
                ("Operating Checking", assets.operating),
                ("Reserve Savings", assets.reserves),
                ("Petty Cash", assets.petty_cash),
                ("Assessments Receivable", assets.assessments_ar),
                ("Special Assessments Receivable", assets.special_ar),
                ("Late Fees Receivable", assets.late_fees_ar),
                ("Insurance Claims Receivable", assets.insurance_ar),
                ("Prepaid Expenses", assets.prepaid),
                *_other(assets.other),
            ],
            assets.total,
        )
    )
    console.print(
        _statement_table(
            "Liabilities",
            [
                ("Accounts Payable", liabilities.payable),
                ("Prepaid Assessments", liabilities.prepaid_assessments),
                ("Security Deposits Held", liabilities.deposits),
                ("Accrued Expenses", liabilities.accrued),
                *_other(liabilities.other),
            ],
            liabilities.total,
        )
    )
    console.print(
        _statement_table(
            "Equity",
            [
                ("Operating Fund Balance", equity.operating_fund),
                ("Reserve Fund Balance", equity.reserve_fund),
                ("Retained Surplus", equity.retained),
                *_other(equity.other),
                ("Current Year Surplus", equity.current_surplus),
            ],
            equity.total,
        )
    )
    if sheet.is_balanced:
        print_success("Assets equal liabilities plus equity")
    else:
        print_warning("Balance sheet does not balance")


@app.command("income-statement")
def income_statement(
    ctx: typer.Context,
    from_date: str | None = typer.Option(
        None,
        "--from",
        help="Start date (YYYY-MM-DD, default January 1).",
    ),
    to_date: str | None = typer.Option(
        None,
        "--to",
        help="End date (YYYY-MM-DD, default today).",
    ),
) -> None:
    """Income and expenses within a date range, year to date by default."""
    config: CLIConfig = ctx.obj
    start = parse_date(from_date, "from date")
    end = parse_date(to_date, "to date")

    with open_engine(config) as engine:
        statement = engine.reports.income_statement(start, end)

    if config.output_format == OutputFormat.JSON:
        print_model_json(statement)
        return

    console.print(
        f"[bold]Income Statement[/bold] {statement.start.isoformat()} to "
        f"{statement.end.isoformat()}"
    )
    console.print(_statement_table("Income", _other(statement.income), statement.total_income))
    console.print(
        _statement_table("Expenses", _other(statement.expenses), statement.total_expenses)
    )
    console.print(f"[bold]Net income:[/bold] {format_money(statement.net_income)}")


@app.command("budget-variance")
def budget_variance(ctx: typer.Context) -> None:
    """Budgeted vs. actual spend per category."""
    config: CLIConfig = ctx.obj

    with open_engine(config) as engine:
        rows = engine.reports.budget_variance()

    data = [
        {
            "id": r.id,
            "name": r.name,
            "budgeted": r.budgeted,
            "actual": r.actual,
            "variance": r.variance,
            "pct": f"{r.pct}%" if r.pct is not None else "",
            "account": r.account_number or "",
        }
        for r in rows
    ]
    format_output(data, config.output_format, title="Budget vs. Actual")


@app.command("aging")
def aging(ctx: typer.Context) -> None:
    """Delinquent units bucketed by months of fees owed."""
    config: CLIConfig = ctx.obj

    with open_engine(config) as engine:
        report = engine.reports.delinquency_aging()

    if config.output_format == OutputFormat.JSON:
        print_model_json(report)
        return

    buckets = [
        ("current", report.current),
        ("30 days", report.days30),
        ("60 days", report.days60),
        ("90+ days", report.days90plus),
    ]
    data = [
        {
            "bucket": bucket,
            "unit": row.unit_number,
            "owner": row.owner,
            "monthly_fee": row.monthly_fee,
            "balance": row.balance,
        }
        for bucket, rows in buckets
        for row in rows
    ]
    format_output(data, config.output_format, title="Delinquency Aging")
    print_info(f"Total outstanding: {format_money(report.total_outstanding)}")


@app.command("reserves")
def reserves(ctx: typer.Context) -> None:
    """Reserve funding status per component."""
    config: CLIConfig = ctx.obj

    with open_engine(config) as engine:
        rows = engine.reports.reserve_funding_status()
        recommended = engine.reports.recommended_annual_reserve()
        contribution = engine.budget.settings.annual_reserve_contribution

    data = [
        {
            "id": r.id,
            "name": r.name,
            "estimated_cost": r.estimated_cost,
            "current_funding": r.current_funding,
            "gap": r.gap,
            "pct": f"{r.pct}%",
            "years_remaining": r.years_remaining,
            "annual_needed": r.annual_needed,
        }
        for r in rows
    ]
    format_output(data, config.output_format, title="Reserve Funding")
    if config.output_format == OutputFormat.TABLE:
        print_info(
            f"Recommended annual contribution: {format_money(recommended)} "
            f"(budgeted {format_money(contribution)})"
        )


@app.command("trial-balance")
def trial_balance(ctx: typer.Context) -> None:
    """Debit and credit totals per account."""
    config: CLIConfig = ctx.obj

    with open_engine(config) as engine:
        report = engine.reports.trial_balance()

    data = [
        {
            "account": r.account_number,
            "name": r.name,
            "type": r.account_type,
            "debits": r.debits,
            "credits": r.credits,
            "balance": r.balance,
        }
        for r in report.rows
    ]
    format_output(data, config.output_format, title="Trial Balance")
    if config.output_format == OutputFormat.TABLE:
        print_info(
            f"Total debits {format_money(report.total_debits)}, "
            f"total credits {format_money(report.total_credits)}"
        )


@app.command("reconcile")
def reconcile(ctx: typer.Context) -> None:
    """Compare unit balances and budget expense lists with the ledger."""
    config: CLIConfig = ctx.obj

    with open_engine(config) as engine:
        units = engine.reports.reconcile_units()
        budget = engine.reports.reconcile_budget()

    format_output(units, config.output_format, title="Unit Balances")
    format_output(budget, config.output_format, title="Budget Categories")
    if config.output_format == OutputFormat.TABLE:
        problems = [u.unit_number for u in units if not u.consistent]
        if problems:
            print_warning(f"Unit balances disagree with their history: {', '.join(problems)}")


@app.command("funding")
def funding(
    ctx: typer.Context,
    amount: str = typer.Argument(..., help="Cost of the proposed project."),
) -> None:
    """Weigh the ways to pay for a proposed expenditure."""
    config: CLIConfig = ctx.obj

    with open_engine(config) as engine:
        analysis = engine.reports.analyze_funding(parse_amount(amount))

    if config.output_format == OutputFormat.JSON:
        print_model_json(analysis)
        return

    data = [
        {
            "option": o.label,
            "available": o.available,
            "recommended": o.recommended,
            "impact": o.impact,
        }
        for o in analysis.options
    ]
    format_output(data, config.output_format, title=f"Funding {format_money(analysis.amount)}")
    print_info(analysis.recommendation)
