"""Exceptions raised while resolving redirect chains."""

from __future__ import annotations


class RedirectChainError(Exception):
    """Base class for redirect chain failures."""


class ProbeError(RedirectChainError):
    """A hop could not be probed, or answered with an unusable status."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class InvalidLocationError(RedirectChainError):
    """A Location header could not be turned into an absolute URL."""

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(f"invalid Location {location!r}: {reason}")
        self.location = location
        self.reason = reason


__all__ = ["RedirectChainError", "ProbeError", "InvalidLocationError"]
