"""URL helper utilities."""

from __future__ import annotations

from typing import Union

import httpx

from .errors import InvalidLocationError


def is_valid_url(candidate: str) -> bool:
    """Return whether ``candidate`` parses as an absolute URL."""

    if not candidate:
        return False
    try:
        parsed = httpx.URL(candidate)
    except (httpx.InvalidURL, TypeError, ValueError):
        return False
    if not parsed.scheme:
        return False
    # Hierarchical schemes need a host; opaque ones (mailto:, data:) do not.
    if parsed.scheme in {"http", "https", "ws", "wss", "ftp"}:
        return bool(parsed.host)
    return True


def resolve_location(current: Union[httpx.URL, str], location: str) -> httpx.URL:
    """Turn a raw Location value into the next absolute URL of the chain.

    Path-absolute targets (``/path``) keep the scheme and host of ``current``;
    anything else must already be an absolute URL.
    """

    location = location.strip()
    if not location:
        raise InvalidLocationError(location, "empty header")

    try:
        if location.startswith("/"):
            resolved = httpx.URL(current).join(location)
        else:
            resolved = httpx.URL(location)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise InvalidLocationError(location, str(exc)) from exc

    if not resolved.is_absolute_url:
        raise InvalidLocationError(location, "not an absolute URL")
    return resolved


__all__ = ["is_valid_url", "resolve_location"]
