"""Tenant initialization command."""

import typer

from hoa_ledger.cli.config import CLIConfig
from hoa_ledger.cli.engine_factory import open_engine
from hoa_ledger.cli.formatters import print_error, print_info, print_success
from hoa_ledger.seed import seed_demo
from hoa_ledger.store import JsonFileStore


def init(
    ctx: typer.Context,
    demo: bool = typer.Option(
        False,
        "--demo",
        help="Load the demo association (units, budget, reserves, work orders).",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Discard an existing ledger for this tenant.",
    ),
) -> None:
    """Create a tenant ledger with the standard HOA chart of accounts."""
    config: CLIConfig = ctx.obj
    ledger_config = config.ledger_config()
    store = JsonFileStore(ledger_config.store_path)

    if store.exists():
        if not force:
            print_error(f"Ledger already exists at {store.path}. Use --force to replace it.")
            raise typer.Exit(1)
        store.clear()

    with open_engine(config) as engine:
        if demo:
            seed_demo(engine)

    print_success(f"Initialized tenant '{ledger_config.tenant_id}' at {store.path}")
    print_info(
        f"{len(engine.state.chart)} accounts, {len(engine.state.ledger)} ledger entries, "
        f"{len(engine.state.units)} units"
    )
