"""Rate limit retry handling for Fly API calls."""

from __future__ import annotations

import time

import httpx

from .logging import get_logger

logger = get_logger(__name__)

# Default max retry count for rate limit errors
DEFAULT_MAX_RETRY_COUNT = 3

# Used when the API doesn't send a usable Retry-After header
DEFAULT_RETRY_AFTER_SECONDS = 1.0

DEFAULT_TIMEOUT_SECONDS = 30.0


class RateLimitRetryTransport(httpx.BaseTransport):
    """Transport that retries requests answered with HTTP 429.

    It respects the Retry-After header. Any other response, including other
    errors, is returned as is.
    """

    def __init__(
        self,
        transport: httpx.BaseTransport | None = None,
        max_retry_count: int = DEFAULT_MAX_RETRY_COUNT,
        sleep=time.sleep,
    ) -> None:
        self._transport = transport or httpx.HTTPTransport()
        self._max_retry_count = max_retry_count
        self._sleep = sleep

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        attempt = 0
        while True:
            response = self._transport.handle_request(request)
            if response.status_code != 429 or attempt >= self._max_retry_count:
                return response

            attempt += 1
            delay = _retry_after(response)
            response.close()
            logger.debug(f"Rate limited, retrying in {delay}s (attempt {attempt}/{self._max_retry_count})")
            self._sleep(delay)

    def close(self) -> None:
        self._transport.close()


def _retry_after(response: httpx.Response) -> float:
    value = response.headers.get("Retry-After")
    try:
        return max(float(value), 0.0) if value is not None else DEFAULT_RETRY_AFTER_SECONDS
    except ValueError:
        return DEFAULT_RETRY_AFTER_SECONDS


def create_http_client(
    base_url: str,
    token: str,
    transport: httpx.BaseTransport | None = None,
    max_retry_count: int = DEFAULT_MAX_RETRY_COUNT,
) -> httpx.Client:
    """Create an httpx Client with rate limit retries configured.

    Args:
        base_url: The Fly API base URL.
        token: The access token, sent as a bearer token when not empty.
        transport: Optional underlying transport (tests pass a MockTransport).
        max_retry_count: Maximum number of retry attempts for rate limits.

    Returns:
        A configured Client instance.
    """
    headers = {"Authorization": f"Bearer {token}"} if token else {}

    client = httpx.Client(
        base_url=base_url,
        headers=headers,
        timeout=DEFAULT_TIMEOUT_SECONDS,
        transport=RateLimitRetryTransport(transport, max_retry_count=max_retry_count),
    )

    logger.debug(f"Created HTTP client for {base_url} with up to {max_retry_count} rate limit retries")

    return client
