"""Preparers: the steps that build a command's Context.

A preparer takes the Context produced by the previous step and returns an
enriched one, or raises a FlyError. ``prepare`` runs them in order, so the
first failure skips every later step and reaches the caller unchanged.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

import tomli

from .client import FlyClient
from .config import CONFIG_DIR_NAME, CONFIG_FILE_NAME, Config, assemble_config
from .context import Context
from .errors import (
    AppNameRequiredError,
    ApiError,
    ConfigError,
    EnvironmentDetectionError,
    NoSessionError,
    OrgFetchError,
    OrgNotFoundError,
)
from .logging import get_logger, set_verbose
from .models import PERSONAL, Organization
from .prompt import select_one
from .update import check_for_update

logger = get_logger(__name__)

Preparer = Callable[[Context], Context]

APP_CONFIG_FILE_NAME = "fly.toml"


def prepare(ctx: Context, preparers: Iterable[Preparer]) -> Context:
    """Run preparers in order, each receiving the previous one's Context."""
    for preparer in preparers:
        ctx = preparer(ctx)
    return ctx


def determine_working_dir(ctx: Context) -> Context:
    try:
        wd = Path.cwd()
    except OSError as e:
        raise EnvironmentDetectionError(f"Error determining working directory: {e}") from e

    logger.debug(f"Determined working directory: {wd}")
    return ctx.with_(working_dir=wd)


def determine_user_home_dir(ctx: Context) -> Context:
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise EnvironmentDetectionError(f"Error determining user home directory: {e}") from e

    logger.debug(f"Determined user home directory: {home}")
    return ctx.with_(home_dir=home)


def determine_config_dir(ctx: Context) -> Context:
    config_dir = ctx.require("home_dir") / CONFIG_DIR_NAME

    logger.debug(f"Determined config directory: {config_dir}")
    return ctx.with_(config_dir=config_dir)


def determine_config_file(ctx: Context) -> Context:
    config_file = ctx.require("config_dir") / CONFIG_FILE_NAME

    logger.debug(f"Determined config file: {config_file}")
    return ctx.with_(config_file=config_file)


def load_config(ctx: Context) -> Context:
    """Assemble the configuration: environment, then the file, then flags."""
    path: Path = ctx.require("config_file")

    if not path.exists():
        logger.warning(f"No config file found at {path}")

    config = assemble_config(ctx.environ, path, ctx.flags)
    if config.verbose:
        set_verbose()

    logger.debug("Config initialized.")
    return ctx.with_(config=config)


def init_client(ctx: Context) -> Context:
    config: Config = ctx.require("config")

    client = FlyClient(
        base_url=config.api_base_url,
        token=config.access_token,
        log_gql_errors=config.log_gql_errors,
    )

    logger.debug("Client initialized.")
    return ctx.with_(client=client)


def prompt_to_update(ctx: Context) -> Context:
    check_for_update(ctx.require("config"), ctx.require("config_dir"))
    return ctx


COMMON_PREPARERS: list[Preparer] = [
    determine_working_dir,
    determine_user_home_dir,
    determine_config_dir,
    determine_config_file,
    load_config,
    init_client,
    prompt_to_update,
]


def require_session(ctx: Context) -> Context:
    """Make sure an access token is available."""
    if not ctx.require("client").authenticated:
        raise NoSessionError()
    return ctx


def require_org(ctx: Context) -> Context:
    """Make sure exactly one organization is selected.

    Embeds require_session. The organization is picked, in this order:

    1. the only organization, if there is no slug override and it is personal;
    2. the organization matching the slug override, if one was given;
    3. the user's choice from an interactive list.
    """
    ctx = require_session(ctx)

    client: FlyClient = ctx.require("client")
    try:
        orgs = client.get_organizations()
    except ApiError as e:
        raise OrgFetchError(f"Failed to fetch organizations: {e.message}") from e

    orgs = sort_orgs(orgs)
    slug = ctx.require("config").organization

    if not slug and len(orgs) == 1 and orgs[0].is_personal:
        logger.info(f"Automatically selected {orgs[0].type.lower()} organization: {orgs[0].name}")
        return ctx.with_(org=orgs[0])

    if slug:
        for org in orgs:
            if org.slug == slug:
                logger.debug(f"Selected organization {org.slug} from override")
                return ctx.with_(org=org)
        raise OrgNotFoundError(slug)

    return ctx.with_(org=select_org(orgs))


def sort_orgs(orgs: list[Organization]) -> list[Organization]:
    """Sort personal organizations first, keeping the API order within a type."""
    return sorted(orgs, key=lambda org: (org.type != PERSONAL, org.type))


def select_org(orgs: list[Organization]) -> Organization:
    """Ask the user to pick one of the given organizations."""
    index = select_one("Select organization:", [org.label for org in orgs])
    return orgs[index]


def require_app_name(ctx: Context) -> Context:
    """Make sure an app name is known.

    The --app flag (or FLY_APP, or the config file) wins over the ``app``
    key of a fly.toml in the working directory.
    """
    name = ctx.require("config").app_name
    if not name:
        name = read_app_name(ctx.require("working_dir") / APP_CONFIG_FILE_NAME)
    if not name:
        raise AppNameRequiredError()

    logger.debug(f"Using app {name}")
    return ctx.with_(app_name=name)


def read_app_name(path: Path) -> str | None:
    """Read the app name from a fly.toml file.

    Returns:
        The app name, or None if the file doesn't exist or has no app name.

    Raises:
        ConfigError: If the file isn't valid TOML.
    """
    if not path.exists():
        return None

    try:
        with open(path, "rb") as f:
            data = tomli.load(f)
    except tomli.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse {path}: {e}") from e

    name = data.get("app")
    return name if isinstance(name, str) and name else None
