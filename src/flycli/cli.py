"""CLI entry point for Fly CLI."""

import logging
import sys
from typing import Annotated

import typer

from . import __version__
from .logging import console, error_console, get_logger, setup_logging

app = typer.Typer(
    name="fly",
    help="A command-line interface for the Fly platform.",
    no_args_is_help=True,
    rich_markup_mode=None,
)

logger = get_logger(__name__)

# Register command groups (imported here to avoid circular imports)
from .commands import apps, auth, config, orgs  # noqa: E402

app.add_typer(config.app, name="config")
app.add_typer(auth.app, name="auth")
app.add_typer(orgs.app, name="orgs")
app.add_typer(apps.app, name="apps")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"fly {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    access_token: Annotated[
        str | None,
        typer.Option(
            "--access-token",
            "-t",
            help="Fly API access token.",
        ),
    ] = None,
    api_base_url: Annotated[
        str | None,
        typer.Option(
            "--api-base-url",
            help="Base URL of the Fly API.",
        ),
    ] = None,
    org: Annotated[
        str | None,
        typer.Option(
            "--org",
            "-o",
            help="Slug of the organization to use.",
        ),
    ] = None,
    app_name: Annotated[
        str | None,
        typer.Option(
            "--app",
            "-a",
            help="Name of the app to use.",
        ),
    ] = None,
    verbose: Annotated[
        bool | None,
        typer.Option(
            "--verbose/--no-verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = None,
    json_output: Annotated[
        bool | None,
        typer.Option(
            "--json/--no-json",
            "-j",
            help="Output JSON instead of text.",
        ),
    ] = None,
    log_gql_errors: Annotated[
        bool | None,
        typer.Option(
            "--log-gql-errors/--no-log-gql-errors",
            help="Log GraphQL errors returned by the Fly API.",
        ),
    ] = None,
    update_check: Annotated[
        bool | None,
        typer.Option(
            "--update-check/--no-update-check",
            help="Check for a newer release of the CLI.",
        ),
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Fly CLI - A command-line interface for the Fly platform."""
    setup_logging(verbose=bool(verbose))
    logger.debug("Debug logging enabled")

    # Flags keyed by config option name; None means "not given"
    ctx.obj = {
        "access_token": access_token,
        "api_base_url": api_base_url,
        "organization": org,
        "app_name": app_name,
        "verbose": verbose,
        "json_output": json_output,
        "log_gql_errors": log_gql_errors,
        "update_check": update_check,
    }


def cli() -> None:
    """Main entry point for the CLI."""
    try:
        app()
    except Exception as e:
        error_console.print(f"[red]Error: {e}[/red]")
        if logging.getLogger().isEnabledFor(logging.DEBUG):
            error_console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    cli()
