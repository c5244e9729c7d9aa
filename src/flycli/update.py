"""Release check for Fly CLI.

The check never fails a command: every problem is logged at debug level
and the check is skipped.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from pathlib import Path

import httpx

from . import __version__
from .cache import get_cache_age, load_cache, save_cache
from .config import Config
from .logging import error_console, get_logger

logger = get_logger(__name__)

RELEASES_URL = "https://pypi.org/pypi/flycli/json"
CHECK_TIMEOUT_SECONDS = 2.0
UPDATE_CACHE_NAME = "update"
UPDATE_CACHE_EXPIRY_HOURS = 24


def parse_version(version: str) -> tuple[int, ...]:
    """Parse the numeric release part of a version string.

    "1.2.3" -> (1, 2, 3); "v0.10.0rc1" -> (0, 10, 0). Pre-release suffixes
    are ignored.
    """
    match = re.match(r"v?(\d+(?:\.\d+)*)", version.strip())
    if not match:
        raise ValueError(f"Invalid version: {version!r}")
    return tuple(int(part) for part in match.group(1).split("."))


def is_newer(latest: str, current: str) -> bool:
    """Whether ``latest`` is a newer release than ``current``."""
    return parse_version(latest) > parse_version(current)


def fetch_latest_version(transport: httpx.BaseTransport | None = None) -> str:
    """Fetch the latest released version from the package index.

    Raises:
        ValueError: If the index answers with something that isn't a version string.
    """
    with httpx.Client(timeout=CHECK_TIMEOUT_SECONDS, transport=transport) as client:
        response = client.get(RELEASES_URL)
        response.raise_for_status()
        version = response.json()["info"]["version"]

    if not isinstance(version, str):
        raise ValueError(f"Unexpected version in release data: {version!r}")
    return version


def _cached_version(config_dir: Path) -> str | None:
    cached = load_cache(config_dir, UPDATE_CACHE_NAME)
    if cached is None:
        return None

    data = cached.get("data")
    latest = data.get("latest_version") if isinstance(data, dict) else None
    updated_at = get_cache_age(cached)
    if not isinstance(latest, str) or not latest or updated_at is None:
        return None
    if datetime.now() - updated_at >= timedelta(hours=UPDATE_CACHE_EXPIRY_HOURS):
        return None
    return latest


def get_latest_version(config_dir: Path, transport: httpx.BaseTransport | None = None) -> str:
    """Get the latest released version, using the cached answer if it is fresh.

    A cache file with an unexpected shape counts as a miss.
    """
    latest = _cached_version(config_dir)
    if latest is not None:
        logger.debug(f"Using cached latest version {latest}")
        return latest

    latest = fetch_latest_version(transport)
    save_cache(config_dir, UPDATE_CACHE_NAME, {"latest_version": latest})
    return latest


def check_for_update(
    config: Config,
    config_dir: Path,
    transport: httpx.BaseTransport | None = None,
) -> str | None:
    """Print an advisory if a newer release exists.

    Args:
        config: The resolved configuration.
        config_dir: Directory holding the cached check result.
        transport: Optional HTTP transport (tests pass a MockTransport).

    Returns:
        The newer version that was advertised, or None.
    """
    if not config.update_check or config.json_output:
        return None

    try:
        latest = get_latest_version(config_dir, transport)
        newer = is_newer(latest, __version__)
    except (httpx.HTTPError, OSError, KeyError, TypeError, ValueError) as e:
        logger.debug(f"Update check failed: {e}")
        return None

    if not newer:
        return None

    error_console.print(f"[yellow]A newer version of fly is available: {__version__} -> {latest}[/yellow]")
    error_console.print("[dim]Upgrade with: pip install --upgrade flycli[/dim]")
    return latest
