"""Remote mirror commands."""

import typer

from hoa_ledger.cli.async_runner import async_command
from hoa_ledger.cli.config import CLIConfig
from hoa_ledger.cli.engine_factory import get_mirror, open_engine
from hoa_ledger.cli.formatters import format_output, print_error, print_info, print_success

app = typer.Typer(no_args_is_help=True)


@app.command("push")
@async_command
async def push(ctx: typer.Context) -> None:
    """Push queued changes to the remote mirror."""
    config: CLIConfig = ctx.obj

    async with get_mirror(config) as (engine, mirror):
        if not engine.outbox:
            print_info("Nothing to push.")
            return
        report = await mirror.flush(engine)

    if report.ok:
        print_success(f"Pushed {report.pushed} row(s)")
        return
    for error in report.errors:
        print_error(error)
    print_info(f"{report.pushed} pushed, {report.failed} left queued for the next push.")
    raise typer.Exit(1)


@app.command("status")
def status(ctx: typer.Context) -> None:
    """Show rows waiting in the outbox."""
    config: CLIConfig = ctx.obj

    with open_engine(config) as engine:
        outbox = list(engine.outbox)

    rows = [
        {"table": str(r.table), "key": r.key, "action": "delete" if r.is_delete else "upsert"}
        for r in outbox
    ]
    format_output(rows, config.output_format, title=f"Outbox ({len(rows)} rows)")
