"""Unit invoice commands."""

import typer

from hoa_ledger.cli.config import CLIConfig
from hoa_ledger.cli.engine_factory import open_engine
from hoa_ledger.cli.formatters import format_money, format_output, print_success
from hoa_ledger.cli.params import parse_amount, parse_date
from hoa_ledger.models import InvoiceStatus, InvoiceType

app = typer.Typer(no_args_is_help=True)


@app.command("create")
def create_invoice(
    ctx: typer.Context,
    unit_number: str = typer.Argument(..., help="Unit to invoice."),
    invoice_type: InvoiceType = typer.Argument(..., help="Invoice type."),
    amount: str = typer.Argument(..., help="Invoice amount."),
    description: str = typer.Argument(..., help="What the invoice is for."),
    case_id: str | None = typer.Option(None, "--case", help="Related case id."),
    on: str | None = typer.Option(None, "--date", help="Issue date (YYYY-MM-DD)."),
) -> None:
    """Issue an invoice to a unit owner, due in 30 days."""
    with open_engine(ctx.obj) as engine:
        invoice = engine.invoices.create(
            unit_number,
            invoice_type,
            parse_amount(amount),
            description,
            case_id,
            on=parse_date(on),
        )
    print_success(
        f"Issued {invoice.id} to unit {unit_number} for {format_money(invoice.amount)}, "
        f"due {invoice.due_date.isoformat()}"
    )


@app.command("pay")
def pay_invoice(
    ctx: typer.Context,
    invoice_id: str = typer.Argument(..., help="Invoice id."),
    method: str = typer.Option("ACH", "--method", "-m", help="Payment method."),
    on: str | None = typer.Option(None, "--date", help="Date paid (YYYY-MM-DD)."),
) -> None:
    """Collect an invoice in full."""
    with open_engine(ctx.obj) as engine:
        invoice = engine.invoices.pay(invoice_id, method, on=parse_date(on))
    print_success(f"Invoice {invoice.id} paid ({invoice.payment_gl_entry_id})")


@app.command("list")
def list_invoices(
    ctx: typer.Context,
    unit_number: str | None = typer.Option(None, "--unit", "-u", help="Filter by unit."),
    status: InvoiceStatus | None = typer.Option(None, "--status", help="Filter by status."),
) -> None:
    """List invoices, newest first."""
    config: CLIConfig = ctx.obj

    with open_engine(config) as engine:
        invoices = engine.invoices.list_invoices(unit_number=unit_number, status=status)

    rows = [
        {
            "id": i.id,
            "unit": i.unit_number,
            "type": str(i.type),
            "description": i.description,
            "amount": i.amount,
            "status": str(i.status),
            "created": i.created_date.isoformat(),
            "due": i.due_date.isoformat(),
        }
        for i in invoices
    ]
    format_output(rows, config.output_format, title="Invoices")
