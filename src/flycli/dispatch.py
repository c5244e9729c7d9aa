"""Command dispatching for Fly CLI.

``run`` executes a command body after the common preparers and the
command's own preparers. ``execute`` is the glue used by Typer commands: it
collects flags and turns errors into messages and exit codes.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

import typer
from rich.markup import escape

from .context import Context
from .errors import FlyError, SelectionCancelledError, format_error_with_hint
from .logging import error_console, get_logger
from .preparers import COMMON_PREPARERS, Preparer, prepare

logger = get_logger(__name__)

Runner = Callable[[Context], None]


def run(
    body: Runner | None,
    flags: Mapping[str, Any],
    preparers: Iterable[Preparer] = (),
    *,
    environ: Mapping[str, str] | None = None,
    common: Sequence[Preparer] | None = None,
) -> None:
    """Prepare a fresh Context and run the command body with it.

    Args:
        body: The command body. None for a command that only groups others.
        flags: Explicitly set command-line flags, keyed by option name.
        preparers: Preparers specific to the command, run after the common ones.
        environ: Environment variables, defaults to the process environment.
        common: The common preparers, defaults to COMMON_PREPARERS.

    Raises:
        FlyError: The first error raised by a preparer or the body.
    """
    if body is None:
        return

    ctx = Context(flags=dict(flags), environ=dict(os.environ if environ is None else environ))

    ctx = prepare(ctx, COMMON_PREPARERS if common is None else common)
    ctx = prepare(ctx, preparers)

    body(ctx)


def collect_flags(typer_ctx: typer.Context | None, **flags: Any) -> dict[str, Any]:
    """Merge the root command's global flags with a command's own flags.

    A command flag that was set (not None) wins over the global one.
    """
    merged: dict[str, Any] = {}
    if typer_ctx is not None:
        root = typer_ctx.find_root()
        if isinstance(root.obj, dict):
            merged.update(root.obj)

    merged.update({name: value for name, value in flags.items() if value is not None})
    return merged


def execute(typer_ctx: typer.Context | None, body: Runner | None, *preparers: Preparer, **flags: Any) -> None:
    """Run a command and report its failure the way the shell expects.

    A cancelled prompt stops the command silently. Any other FlyError is
    printed once and exits with status 1.
    """
    try:
        run(body, collect_flags(typer_ctx, **flags), preparers)
    except SelectionCancelledError:
        logger.debug("Cancelled by user")
        raise typer.Exit(0) from None
    except FlyError as e:
        error_msg, hint = format_error_with_hint(e)
        error_console.print(f"[red]{escape(error_msg)}[/red]")
        if hint:
            error_console.print(f"[dim]Hint: {escape(hint)}[/dim]")
        raise typer.Exit(1) from None
