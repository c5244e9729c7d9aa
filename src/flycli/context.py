"""Execution context for Fly CLI commands.

A Context is built up by the preparer chain one fact at a time and handed to
the command body once every preparer succeeded. It is frozen: each preparer
returns a new Context via ``with_``, and facts are never removed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .client import FlyClient
    from .config import Config
    from .models import Organization


@dataclass(frozen=True)
class Context:
    """Facts resolved for a single command invocation."""

    flags: Mapping[str, Any] = field(default_factory=dict)
    environ: Mapping[str, str] = field(default_factory=dict)
    working_dir: Path | None = None
    home_dir: Path | None = None
    config_dir: Path | None = None
    config_file: Path | None = None
    config: Config | None = None
    client: FlyClient | None = field(default=None, repr=False)
    org: Organization | None = None
    app_name: str | None = None

    def with_(self, **changes: Any) -> Context:
        """Return a copy of this context with the given facts set."""
        return replace(self, **changes)

    def require(self, name: str) -> Any:
        """Get a fact that an earlier preparer must have set.

        Raises:
            RuntimeError: If the fact is not set yet, which means the
                preparer chain is ordered incorrectly.
        """
        value = getattr(self, name)
        if value is None:
            raise RuntimeError(f"Context fact {name!r} is not set; check the preparer order")
        return value
