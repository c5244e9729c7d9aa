"""Unified output formatting for Fly CLI.

All command output goes through these functions so that JSON and text
modes stay consistent.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from rich.table import Table

from .logging import console


def output_json(data: Any) -> None:
    """Output data as JSON.

    Uses plain print() to avoid Rich console formatting.
    """
    print(json.dumps(data, indent=2, ensure_ascii=False))


def print_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
    """Print rows as a table with the given column headers."""
    table = Table(box=None, header_style="bold", pad_edge=False)
    for header in headers:
        table.add_column(header)
    for row in rows:
        table.add_row(*row)
    console.print(table)


def mask_token(token: str) -> str:
    """Shorten a secret for display."""
    if not token:
        return "(not set)"
    return token[:8] + "..." if len(token) > 8 else "***"
