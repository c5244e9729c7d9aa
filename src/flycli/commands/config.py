"""Config commands for Fly CLI."""

from __future__ import annotations

import typer

from ..config import read_config_file
from ..context import Context
from ..dispatch import execute
from ..logging import console
from ..output import mask_token, output_json

app = typer.Typer(
    help="Inspect the CLI configuration.",
    no_args_is_help=True,
)


def _org_source(ctx: Context) -> str | None:
    """Describe which layer the organization override came from."""
    if ctx.flags.get("organization") is not None:
        return "--org"
    data = read_config_file(ctx.require("config_file")) or {}
    if data.get("org") is not None:
        return f"config file ({ctx.config_file})"
    if "FLY_ORG" in ctx.environ:
        return "FLY_ORG"
    return None


def _show_config(ctx: Context) -> None:
    config = ctx.require("config")

    config_display = {
        "api_base_url": config.api_base_url,
        "access_token": mask_token(config.access_token),
        "org": config.organization,
        "app": config.app_name,
        "verbose": config.verbose,
        "log_gql_errors": config.log_gql_errors,
        "json": config.json_output,
        "update_check": config.update_check,
    }

    if config.json_output:
        output_json({"config": config_display, "config_file": str(ctx.config_file)})
        return

    for key, value in config_display.items():
        console.print(f"{key}: {value}", highlight=False)
    console.print(f"\n[dim]Config file: {ctx.config_file}[/dim]")

    source = _org_source(ctx)
    if source:
        console.print(f"[dim]Using org {config.organization!r} from {source}[/dim]")
    else:
        console.print("[dim]No org selected (use --org, FLY_ORG or org in the config file)[/dim]")


@app.command("show")
def show_config(typer_ctx: typer.Context) -> None:
    """Show the resolved configuration.

    Examples:
        fly config show
        fly --org acme config show
        fly --json config show
    """
    execute(typer_ctx, _show_config)
