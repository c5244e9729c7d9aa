"""Small JSON state files kept under the config directory.

Each file holds ``{"metadata": {...}, "data": {...}}``. Anything else on
disk is treated as absent.
"""

import contextlib
import json
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

STATE_DIR_NAME = "state"


@dataclass
class CacheMetadata:
    updated_at: str
    version: int = 1


def get_cache_path(config_dir: Path, cache_name: str) -> Path:
    """``<config_dir>/state/<cache_name>.json``"""
    return config_dir / STATE_DIR_NAME / f"{cache_name}.json"


def load_cache(config_dir: Path, cache_name: str) -> dict[str, Any] | None:
    """Read a state file, or None when it is missing or unreadable.

    Undecodable files are removed so the next write starts clean.
    """
    cache_path = get_cache_path(config_dir, cache_name)
    if not cache_path.exists():
        return None

    try:
        with open(cache_path) as f:
            cached = json.load(f)
    except (json.JSONDecodeError, OSError):
        with contextlib.suppress(OSError):
            cache_path.unlink(missing_ok=True)
        return None

    return cached if isinstance(cached, dict) else None


def save_cache(config_dir: Path, cache_name: str, data: dict[str, Any]) -> Path:
    cache_path = get_cache_path(config_dir, cache_name)
    cache_path.parent.mkdir(parents=True, exist_ok=True)

    cache_data = {
        "metadata": asdict(CacheMetadata(updated_at=datetime.now().isoformat())),
        "data": data,
    }
    with open(cache_path, "w") as f:
        json.dump(cache_data, f, indent=2)

    return cache_path


def get_cache_age(cache_data: dict[str, Any]) -> datetime | None:
    """Timestamp of the last write, or None if the metadata is missing or malformed."""
    metadata = cache_data.get("metadata")
    if not isinstance(metadata, dict):
        return None

    updated_at = metadata.get("updated_at")
    if not isinstance(updated_at, str):
        return None
    try:
        return datetime.fromisoformat(updated_at)
    except ValueError:
        return None
