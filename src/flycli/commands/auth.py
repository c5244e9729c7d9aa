"""Authentication commands for Fly CLI."""

from __future__ import annotations

import typer

from ..context import Context
from ..dispatch import execute
from ..logging import console
from ..output import output_json
from ..preparers import require_session

app = typer.Typer(
    help="Inspect the current session.",
    no_args_is_help=True,
)


def _whoami(ctx: Context) -> None:
    user = ctx.require("client").get_current_user()

    if ctx.require("config").json_output:
        output_json({"email": user.email, "name": user.name})
        return

    console.print(f"Current user: {user.email}", highlight=False)


@app.command("whoami")
def whoami(typer_ctx: typer.Context) -> None:
    """Show the user the access token belongs to.

    Examples:
        fly auth whoami
        fly --access-token <token> auth whoami
    """
    execute(typer_ctx, _whoami, require_session)
