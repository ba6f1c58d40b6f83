"""Shared HTTP client configuration."""

import httpx

from streamreq._version import __version__

DEFAULT_TIMEOUT_MS = 3000
DEFAULT_CONTENT_TYPE = "application/json"


def create_async_client(*, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> httpx.AsyncClient:
    """Create configured async HTTP client.

    Redirects are followed so callers only ever see the final response.

    Args:
        timeout_ms: Default request timeout in milliseconds.

    Returns:
        Configured httpx.AsyncClient instance.
    """
    return httpx.AsyncClient(
        timeout=timeout_ms / 1000,
        follow_redirects=True,
        headers={"User-Agent": f"streamreq/{__version__}"},
    )
