"""Async command support for Typer."""

import asyncio
from collections.abc import Callable, Coroutine
from functools import wraps
from typing import Any, TypeVar

import typer

from hoa_ledger.exceptions import LedgerError, SyncError

T = TypeVar("T")


def async_command(f: Callable[..., Coroutine[Any, Any, T]]) -> Callable[..., T]:
    """Decorator to run async Typer commands.

    Mirror and ledger errors are printed and turned into exit code 1.

    Usage:
        @app.command()
        @async_command
        async def push(ctx: typer.Context):
            async with get_mirror(ctx.obj) as (engine, mirror):
                report = await mirror.flush(engine)
                ...
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        from hoa_ledger.cli.formatters import print_error, print_info

        try:
            return asyncio.run(f(*args, **kwargs))
        except SyncError as e:
            print_error(e.message)
            if e.status_code is not None:
                print_info(f"Mirror responded with HTTP {e.status_code}.")
            raise typer.Exit(1) from None
        except LedgerError as e:
            print_error(e.message)
            raise typer.Exit(1) from None

    return wrapper
