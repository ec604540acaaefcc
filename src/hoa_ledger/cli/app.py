"""Main Typer application."""

import logging
from pathlib import Path

import typer
from rich.logging import RichHandler

from hoa_ledger.cli.config import CLIConfig, OutputFormat
from hoa_ledger.cli.formatters import error_console

# Create main app
app = typer.Typer(
    name="hoa-ledger",
    help="HOA general ledger and financial reports.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    tenant: str | None = typer.Option(
        None,
        "--tenant",
        "-t",
        help="Tenant (association) to operate on.",
        envvar="HOA_LEDGER_TENANT",
    ),
    data_dir: Path | None = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Snapshot directory (default: ~/.local/share/hoa-ledger).",
        envvar="HOA_LEDGER_DATA_DIR",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: ~/.config/hoa-ledger/config.json).",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--format",
        "-f",
        help="Output format.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
) -> None:
    """HOA general ledger and financial reports.

    Each tenant's ledger is kept in one snapshot file; every command that
    changes it saves the file before returning.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=error_console, show_path=False)],
            force=True,
        )
    ctx.obj = CLIConfig(
        tenant_id=tenant,
        data_dir=data_dir,
        config_file=config_file,
        verbose=verbose,
        output_format=output_format,
    )
