"""Error types and hints for Fly CLI."""

from __future__ import annotations

# Mapping of Fly API error codes to helpful hint messages
ERROR_HINTS: dict[str, str] = {
    # Authentication errors
    "UNAUTHORIZED": "Access token is invalid or expired. Check access_token in ~/.fly/config.yml or FLY_ACCESS_TOKEN.",
    "UNAUTHENTICATED": "No valid access token was sent. Set FLY_ACCESS_TOKEN or access_token in ~/.fly/config.yml.",
    "FORBIDDEN": "Your account is not allowed to perform this action.",
    # Lookup errors
    "NOT_FOUND": "The requested resource does not exist or you don't have access to it.",
    # Rate limiting
    "RATE_LIMITED": "Rate limit exceeded. Try again in a few seconds.",
    # Server errors
    "INTERNAL_SERVER_ERROR": "The Fly API returned a server error. Try again later.",
    "SERVICE_UNAVAILABLE": "The Fly API is temporarily unavailable. Try again later.",
}


class FlyError(Exception):
    """Base class for errors reported to the user.

    Attributes:
        message: Human readable description of what failed.
        hint: Optional suggestion on how to fix it.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class EnvironmentDetectionError(FlyError):
    """The working directory or home directory could not be determined."""


class ConfigError(FlyError):
    """A configuration source exists but could not be used."""


class NoSessionError(FlyError):
    """No access token is available."""

    def __init__(self) -> None:
        super().__init__(
            "No access token available. Please login first.",
            hint="Set FLY_ACCESS_TOKEN, pass --access-token or add access_token to ~/.fly/config.yml.",
        )


class ApiError(FlyError):
    """A call to the Fly API failed.

    Attributes:
        code: The API error code (e.g. ``NOT_FOUND``), if the API reported one.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message, hint=get_error_hint(code) if code else None)
        self.code = code


class OrgFetchError(FlyError):
    """The list of organizations could not be fetched."""


class OrgNotFoundError(FlyError):
    """An explicitly requested organization slug matched nothing."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            f"Organization {slug!r} not found",
            hint="Run 'fly orgs list' to see the organizations you belong to.",
        )
        self.slug = slug


class SelectionCancelledError(FlyError):
    """The user aborted an interactive prompt."""

    def __init__(self, message: str = "Selection cancelled") -> None:
        super().__init__(message)


class PromptError(FlyError):
    """The interactive prompt itself failed."""


class AppNameRequiredError(FlyError):
    """No app name was given and none could be found in fly.toml."""

    def __init__(self) -> None:
        super().__init__(
            "We couldn't find a fly.toml nor an app specified by the --app flag.",
            hint="Pass --app <name>, set FLY_APP or run the command from a directory containing fly.toml.",
        )


def get_error_hint(error_code: str) -> str | None:
    """Get a helpful hint message for a Fly API error code.

    Args:
        error_code: The API error code (e.g., "UNAUTHORIZED").

    Returns:
        A helpful hint message, or None if no hint is available.
    """
    return ERROR_HINTS.get(error_code)


def format_error_with_hint(error: FlyError) -> tuple[str, str | None]:
    """Format an error for display.

    Args:
        error: The error to format.

    Returns:
        A tuple of (error_message, hint_message or None).
    """
    hint = error.hint
    if hint is None and isinstance(error.__cause__, ApiError):
        hint = error.__cause__.hint

    return f"Error: {error.message}", hint
