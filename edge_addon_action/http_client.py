"""HTTP client utilities with consistent user agent."""

from typing import Optional

from . import __version__

USER_AGENT = f"edge-addon-action/{__version__}"


def get_default_headers(content_type: Optional[str] = None) -> dict:
    """
    Get default HTTP headers with user agent.

    Authorization is not handled here; credential providers contribute
    their own headers on top of these.

    Args:
        content_type: Optional Content-Type header value (e.g., "application/zip")

    Returns:
        Dictionary of HTTP headers
    """
    headers = {"User-Agent": USER_AGENT}
    if content_type:
        headers["Content-Type"] = content_type
    return headers
