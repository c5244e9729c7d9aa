"""Data models for Fly CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

PERSONAL = "PERSONAL"
SHARED = "SHARED"


@dataclass(frozen=True)
class Organization:
    """Represents a Fly organization."""

    id: str
    name: str
    slug: str
    type: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Organization:
        """Create an Organization from API response data.

        Args:
            data: The organization node from the API.

        Returns:
            An Organization instance.
        """
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            slug=data.get("slug") or "",
            type=data.get("type") or "",
        )

    @property
    def is_personal(self) -> bool:
        """True for a user's own personal organization."""
        return self.type == PERSONAL

    @property
    def label(self) -> str:
        """Label used when asking the user to pick an organization."""
        return f"{self.name} ({self.slug})"

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "slug": self.slug, "type": self.type}


@dataclass(frozen=True)
class App:
    """Represents a Fly app."""

    id: str
    name: str
    status: str
    organization: Organization | None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> App:
        org_data = data.get("organization")
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            status=data.get("status") or "",
            organization=Organization.from_api(org_data) if org_data else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "organization": self.organization.to_dict() if self.organization else None,
        }


@dataclass(frozen=True)
class User:
    """The authenticated user."""

    email: str
    name: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> User:
        return cls(email=data.get("email") or "", name=data.get("name") or "")
