"""Fly API client used by the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx

from .errors import ApiError
from .logging import get_logger
from .models import App, Organization, User
from .retry import create_http_client

logger = get_logger(__name__)

GRAPHQL_PATH = "/graphql"

ORGANIZATIONS_QUERY = """
query($orgType: OrganizationType) {
  organizations(type: $orgType) {
    nodes {
      id
      slug
      name
      type
    }
  }
}
"""

CURRENT_USER_QUERY = """
query {
  viewer {
    email
    name
  }
}
"""

APP_QUERY = """
query($appName: String!) {
  app(name: $appName) {
    id
    name
    status
    organization {
      id
      slug
      name
      type
    }
  }
}
"""

APP_CONFIG_QUERY = """
query($appName: String!) {
  app(name: $appName) {
    config {
      definition
    }
  }
}
"""

MOVE_APP_MUTATION = """
mutation($input: MoveAppInput!) {
  moveApp(input: $input) {
    app {
      id
      name
      status
      organization {
        id
        slug
        name
        type
      }
    }
  }
}
"""


@dataclass
class FlyClient:
    """Fly API client holding the base URL, token and HTTP client."""

    base_url: str
    token: str
    log_gql_errors: bool = False
    transport: httpx.BaseTransport | None = field(default=None, repr=False)
    _http: httpx.Client | None = field(default=None, repr=False)

    @property
    def authenticated(self) -> bool:
        """Whether an access token is available."""
        return bool(self.token)

    @property
    def http(self) -> httpx.Client:
        """Lazily create the HTTP client with retry handling."""
        if self._http is None:
            self._http = create_http_client(self.base_url, self.token, transport=self.transport)
        return self._http

    def graphql(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a GraphQL query and return its data.

        Args:
            query: The GraphQL document.
            variables: Optional query variables.

        Returns:
            The ``data`` member of the response.

        Raises:
            ApiError: On transport errors, non-2xx responses or GraphQL errors.
        """
        try:
            response = self.http.post(GRAPHQL_PATH, json={"query": query, "variables": variables or {}})
        except httpx.HTTPError as e:
            raise ApiError(f"Request to {self.base_url} failed: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        errors = payload.get("errors") if isinstance(payload, dict) else None
        if errors:
            self._log_errors(errors)
            first = errors[0]
            code = (first.get("extensions") or {}).get("code")
            raise ApiError(first.get("message", "unknown error"), code=code)

        if response.is_error:
            code = "UNAUTHORIZED" if response.status_code == 401 else None
            raise ApiError(f"Fly API returned HTTP {response.status_code}", code=code)

        if not isinstance(payload, dict) or payload.get("data") is None:
            raise ApiError("Fly API returned an empty response")

        return payload["data"]

    def _log_errors(self, errors: list[dict[str, Any]]) -> None:
        if not self.log_gql_errors:
            return
        for error in errors:
            logger.warning(f"GraphQL error: {error.get('message')} (path: {error.get('path')})")

    # -------------------------------------------------------------------------
    # Organizations
    # -------------------------------------------------------------------------

    def get_organizations(self, type_filter: str | None = None) -> list[Organization]:
        """List organizations the authenticated user belongs to.

        Args:
            type_filter: Optional organization type (e.g. "PERSONAL") to filter by.

        Returns:
            Organizations in the order the API returned them.
        """
        data = self.graphql(ORGANIZATIONS_QUERY, {"orgType": type_filter})
        nodes = (data.get("organizations") or {}).get("nodes") or []
        logger.debug(f"Fetched {len(nodes)} organization(s)")
        return [Organization.from_api(node) for node in nodes]

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def get_current_user(self) -> User:
        """Get the user the access token belongs to."""
        data = self.graphql(CURRENT_USER_QUERY)
        return User.from_api(data.get("viewer") or {})

    # -------------------------------------------------------------------------
    # Apps
    # -------------------------------------------------------------------------

    def get_app(self, name: str) -> App:
        """Get an app by name.

        Raises:
            ApiError: If the app doesn't exist or the request fails.
        """
        data = self.graphql(APP_QUERY, {"appName": name})
        app = data.get("app")
        if not app:
            raise ApiError(f"Could not find app {name!r}", code="NOT_FOUND")
        return App.from_api(app)

    def get_app_config(self, name: str) -> dict[str, Any]:
        """Get the configuration the platform holds for an app.

        Raises:
            ApiError: If the app doesn't exist or the request fails.
        """
        data = self.graphql(APP_CONFIG_QUERY, {"appName": name})
        app = data.get("app")
        if not app:
            raise ApiError(f"Could not find app {name!r}", code="NOT_FOUND")
        definition = (app.get("config") or {}).get("definition")
        return definition if isinstance(definition, dict) else {}

    def move_app(self, app_id: str, org_id: str) -> App:
        """Move an app to another organization.

        Args:
            app_id: ID of the app to move.
            org_id: ID of the target organization.

        Returns:
            The app as reported after the move.
        """
        data = self.graphql(MOVE_APP_MUTATION, {"input": {"appId": app_id, "organizationId": org_id}})
        return App.from_api((data.get("moveApp") or {}).get("app") or {})

    def close(self) -> None:
        if self._http is not None:
            self._http.close()
            self._http = None
