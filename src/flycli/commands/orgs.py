"""Organization commands for Fly CLI."""

from __future__ import annotations

import typer

from ..context import Context
from ..dispatch import execute
from ..logging import console
from ..output import output_json, print_table
from ..preparers import require_org, require_session, sort_orgs

app = typer.Typer(
    help="List and select organizations.",
    no_args_is_help=True,
)


def _list_orgs(ctx: Context) -> None:
    orgs = sort_orgs(ctx.require("client").get_organizations())

    if ctx.require("config").json_output:
        output_json({"organizations": [org.to_dict() for org in orgs], "count": len(orgs)})
        return

    if not orgs:
        console.print("[dim]You don't belong to any organization[/dim]")
        return

    print_table(["Name", "Slug", "Type"], [[org.name, org.slug, org.type] for org in orgs])


def _show_org(ctx: Context) -> None:
    org = ctx.require("org")

    if ctx.require("config").json_output:
        output_json(org.to_dict())
        return

    console.print(f"Name: {org.name}", highlight=False)
    console.print(f"Slug: {org.slug}", highlight=False)
    console.print(f"Type: {org.type}", highlight=False)
    console.print(f"ID:   {org.id}", highlight=False)


@app.command("list")
def list_orgs(typer_ctx: typer.Context) -> None:
    """List the organizations you belong to.

    Examples:
        fly orgs list
        fly --json orgs list
    """
    execute(typer_ctx, _list_orgs, require_session)


@app.command("show")
def show_org(typer_ctx: typer.Context) -> None:
    """Show the selected organization.

    Uses --org (or FLY_ORG, or org in the config file) when given, selects
    your personal organization when it is the only one, and asks otherwise.

    Examples:
        fly orgs show
        fly --org acme orgs show
    """
    execute(typer_ctx, _show_org, require_org)
