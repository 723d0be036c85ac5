"""HTTP helper utilities for tests."""

from __future__ import annotations

from urllib.parse import urlencode


def json_headers(access_token: str | None = None, *, scheme: str = "Bearer") -> dict[str, str]:
    """Return standard JSON headers, optionally with an ``Authorization`` header.

    Parameters
    ----------
    access_token:
        Optional access token to include.
    scheme:
        First word of the header; the server ignores it.
    """

    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if access_token:
        headers["Authorization"] = f"{scheme} {access_token}"
    return headers


def build_url(path: str, **query: str | int | float | None) -> str:
    """Build a URL with encoded query parameters (``None`` values dropped)."""

    qs = urlencode({k: v for k, v in query.items() if v is not None})
    return f"{path}?{qs}" if qs else path
