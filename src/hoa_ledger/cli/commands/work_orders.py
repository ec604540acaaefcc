"""Vendor work order commands."""

import typer

from hoa_ledger.cli.config import CLIConfig
from hoa_ledger.cli.engine_factory import open_engine
from hoa_ledger.cli.formatters import format_money, format_output, print_success
from hoa_ledger.cli.params import parse_amount, parse_date
from hoa_ledger.models import WorkOrderStatus

app = typer.Typer(no_args_is_help=True)


@app.command("create")
def create_work_order(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Short job title."),
    vendor: str = typer.Argument(..., help="Vendor name."),
    amount: str = typer.Argument(..., help="Estimated amount."),
    account: str = typer.Argument(..., help="Expense account to charge."),
    case_id: str | None = typer.Option(None, "--case", help="Related case id."),
    description: str = typer.Option("", "--description", help="Job details."),
    on: str | None = typer.Option(None, "--date", help="Created date (YYYY-MM-DD)."),
) -> None:
    """Open a draft work order."""
    with open_engine(ctx.obj) as engine:
        work_order = engine.work_orders.create(
            title,
            vendor,
            parse_amount(amount),
            account,
            case_id,
            description,
            on=parse_date(on),
        )
    print_success(f"Created {work_order.id}: {title} ({format_money(work_order.amount)})")


@app.command("approve")
def approve(
    ctx: typer.Context,
    work_order_id: str = typer.Argument(..., help="Work order id, e.g. WO-001."),
    on: str | None = typer.Option(None, "--date", help="Approval date (YYYY-MM-DD)."),
) -> None:
    """Approve a draft work order."""
    with open_engine(ctx.obj) as engine:
        work_order = engine.work_orders.approve(work_order_id, on=parse_date(on))
    print_success(f"Approved {work_order.id}")


@app.command("invoice")
def receive_invoice(
    ctx: typer.Context,
    work_order_id: str = typer.Argument(..., help="Work order id."),
    invoice_number: str = typer.Argument(..., help="Vendor invoice number."),
    amount: str | None = typer.Option(
        None,
        "--amount",
        help="Invoiced amount, when it differs from the estimate.",
    ),
    on: str | None = typer.Option(None, "--date", help="Invoice date (YYYY-MM-DD)."),
) -> None:
    """Record the vendor's invoice for an approved work order."""
    with open_engine(ctx.obj) as engine:
        work_order = engine.work_orders.receive_invoice(
            work_order_id,
            invoice_number,
            parse_amount(amount) if amount is not None else None,
            on=parse_date(on),
        )
    print_success(f"{work_order.id} invoiced as {invoice_number}")


@app.command("pay")
def pay(
    ctx: typer.Context,
    work_order_id: str = typer.Argument(..., help="Work order id."),
    on: str | None = typer.Option(None, "--date", help="Payment date (YYYY-MM-DD)."),
) -> None:
    """Pay the vendor and post the expense."""
    with open_engine(ctx.obj) as engine:
        work_order = engine.work_orders.pay(work_order_id, on=parse_date(on))
    print_success(
        f"Paid {work_order.id}: {format_money(work_order.amount)} ({work_order.gl_entry_id})"
    )


@app.command("list")
def list_work_orders(
    ctx: typer.Context,
    status: WorkOrderStatus | None = typer.Option(None, "--status", help="Filter by status."),
) -> None:
    """List work orders."""
    config: CLIConfig = ctx.obj

    with open_engine(config) as engine:
        work_orders = engine.work_orders.list_work_orders(status)

    rows = [
        {
            "id": w.id,
            "title": w.title,
            "vendor": w.vendor,
            "account": w.account_number,
            "amount": w.amount,
            "status": str(w.status),
            "case": w.case_id or "",
        }
        for w in work_orders
    ]
    format_output(rows, config.output_format, title="Work Orders")
