"""App commands for Fly CLI."""

from __future__ import annotations

from functools import partial
from typing import Annotated

import typer

from ..context import Context
from ..dispatch import execute
from ..logging import console, error_console
from ..output import output_json
from ..preparers import require_app_name, require_org, require_session
from ..prompt import confirm

app = typer.Typer(
    help="Manage apps.",
    no_args_is_help=True,
)
config_app = typer.Typer(
    help="Manage an app's configuration.",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")


def _show_app(ctx: Context) -> None:
    app_info = ctx.require("client").get_app(ctx.require("app_name"))

    if ctx.require("config").json_output:
        output_json(app_info.to_dict())
        return

    console.print(f"Name:         {app_info.name}", highlight=False)
    console.print(f"Status:       {app_info.status or '(unknown)'}", highlight=False)
    org_slug = app_info.organization.slug if app_info.organization else "(unknown)"
    console.print(f"Organization: {org_slug}", highlight=False)


def _show_app_config(ctx: Context) -> None:
    output_json(ctx.require("client").get_app_config(ctx.require("app_name")))


def _move_app(ctx: Context, app_name: str, yes: bool) -> None:
    client = ctx.require("client")
    target = ctx.require("org")

    app_info = client.get_app(app_name)
    current = app_info.organization.slug if app_info.organization else "(unknown)"
    console.print(f"App '{app_info.name}' is currently in organization '{current}'", highlight=False)

    if app_info.organization and app_info.organization.id == target.id:
        console.print(f"[dim]Nothing to do, {app_info.name} already belongs to {target.slug}[/dim]")
        return

    if not yes:
        error_console.print(
            "[red]Moving an app between organizations requires a complete shutdown and restart. "
            "This will result in some app downtime.\n"
            "If the app relies on other services within the current organization, "
            "it may not come back up in a healthy manner.[/red]"
        )
        if not confirm(f"Move {app_info.name} from {current} to {target.slug}?"):
            return

    client.move_app(app_info.id, target.id)
    console.print(f"Successfully moved {app_info.name} to {target.slug}", highlight=False)


@app.command("show")
def show_app(
    typer_ctx: typer.Context,
    app_name: Annotated[
        str | None,
        typer.Option(
            "--app",
            "-a",
            help="App name. Defaults to the app in ./fly.toml.",
        ),
    ] = None,
) -> None:
    """Show details of an app.

    Examples:
        fly apps show
        fly apps show --app my-app
    """
    execute(typer_ctx, _show_app, require_session, require_app_name, app_name=app_name)


@app.command("move")
def move_app(
    typer_ctx: typer.Context,
    app_name: Annotated[
        str,
        typer.Argument(
            help="Name of the app to move.",
        ),
    ],
    org: Annotated[
        str | None,
        typer.Option(
            "--org",
            "-o",
            help="Slug of the organization to move the app to.",
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Accept all confirmations.",
        ),
    ] = False,
) -> None:
    """Move an app to another organization.

    Examples:
        fly apps move my-app --org acme
        fly apps move my-app --org acme --yes
        fly apps move my-app
    """
    execute(typer_ctx, partial(_move_app, app_name=app_name, yes=yes), require_org, organization=org)


@config_app.command("show")
def show_app_config(
    typer_ctx: typer.Context,
    app_name: Annotated[
        str | None,
        typer.Option(
            "--app",
            "-a",
            help="App name. Defaults to the app in ./fly.toml.",
        ),
    ] = None,
) -> None:
    """Show the configuration the platform holds for an app, as JSON.

    Examples:
        fly apps config show
        fly apps config show --app my-app
    """
    execute(typer_ctx, _show_app_config, require_session, require_app_name, app_name=app_name)
