"""Engine and mirror factories for CLI commands."""

from collections.abc import AsyncGenerator, Generator
from contextlib import asynccontextmanager, contextmanager
from typing import TYPE_CHECKING

import typer

from hoa_ledger.cli.formatters import print_error
from hoa_ledger.engine import LedgerEngine
from hoa_ledger.exceptions import LedgerError
from hoa_ledger.sync import RemoteMirror

if TYPE_CHECKING:
    from hoa_ledger.cli.config import CLIConfig


@contextmanager
def open_engine(config: "CLIConfig") -> Generator[LedgerEngine]:
    """Open the tenant's engine for one command.

    Ledger errors and rejected values raised inside the block are printed
    and turned into exit code 1. Each successful operation has already
    been saved by the engine when it returns.

    Usage:
        with open_engine(ctx.obj) as engine:
            engine.units.record_payment("101", amount, "ACH")
    """
    try:
        engine = LedgerEngine.open(config.ledger_config())
    except LedgerError as e:
        print_error(e.message)
        raise typer.Exit(1) from None

    try:
        yield engine
    except LedgerError as e:
        print_error(e.message)
        raise typer.Exit(1) from None
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1) from None


@asynccontextmanager
async def get_mirror(config: "CLIConfig") -> AsyncGenerator[tuple[LedgerEngine, RemoteMirror]]:
    """Open the tenant's engine together with its remote mirror.

    Usage:
        async with get_mirror(ctx.obj) as (engine, mirror):
            report = await mirror.flush(engine)
    """
    ledger_config = config.ledger_config()
    engine = LedgerEngine.open(ledger_config)
    async with RemoteMirror(ledger_config) as mirror:
        yield engine, mirror
