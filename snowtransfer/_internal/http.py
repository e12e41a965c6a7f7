"""Shared HTTP client configuration."""

import platform

import httpx

from snowtransfer._version import __version__

DEFAULT_TIMEOUT = 30.0
MULTIPART_TIMEOUT = 15.0

USER_AGENT = f"DiscordBot (snowtransfer, {__version__}) Python/{platform.python_version()}"


def default_headers(token: str | None = None) -> dict[str, str]:
    """Build the headers sent with every request.

    Args:
        token: Optional authorization value, used verbatim.

    Returns:
        A new dict; callers may keep it as their shared default set.
    """
    headers = {"User-Agent": USER_AGENT}
    if token:
        headers["Authorization"] = token
    return headers


def create_http_client(
    *,
    timeout: float = DEFAULT_TIMEOUT,
    base_url: str | None = None,
) -> httpx.AsyncClient:
    """Create configured async HTTP client.

    Args:
        timeout: Default request timeout in seconds.
        base_url: Optional base URL for all requests.

    Returns:
        Configured httpx.AsyncClient instance.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        base_url=base_url or "",
    )
