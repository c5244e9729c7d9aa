"""Shared fixtures for Fly CLI tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from flycli.config import ENV_VARS
from flycli.errors import ApiError
from flycli.models import Organization


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run every test with a clean FLY_* environment and a temporary home."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


def make_org(slug: str, type_: str = "SHARED", name: str | None = None) -> Organization:
    return Organization(id=f"id-{slug}", name=name or slug.title(), slug=slug, type=type_)


class FakeClient:
    """Stands in for FlyClient in preparer tests."""

    def __init__(
        self,
        orgs: list[Organization] | None = None,
        token: str = "token",
        error: ApiError | None = None,
    ) -> None:
        self.orgs = orgs or []
        self.token = token
        self.error = error
        self.fetch_count = 0

    @property
    def authenticated(self) -> bool:
        return bool(self.token)

    def get_organizations(self, type_filter: str | None = None) -> list[Organization]:
        self.fetch_count += 1
        if self.error is not None:
            raise self.error
        return list(self.orgs)
