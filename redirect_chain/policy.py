"""Hosts that must never receive a HEAD probe."""

from __future__ import annotations

from typing import Iterable, Optional, Set

# Some services (Mega, for one) never answer HEAD requests properly, so probing
# them only wastes a round trip before the GET fallback.
NO_HEAD_REQUEST_DOMAINS: Set[str] = {
    "mega.co.nz",
    "mega.io",
    "mega.nz",
}


class DomainPolicy:
    """Exact-match lookup over a set of hostnames.

    Without arguments the policy wraps the process-wide ``NO_HEAD_REQUEST_DOMAINS``
    set itself, so runtime edits to that set are visible. Pass a set to get an
    isolated table. Lookups are case-sensitive and never match subdomains.
    """

    def __init__(self, hosts: Optional[Set[str]] = None) -> None:
        self.hosts = NO_HEAD_REQUEST_DOMAINS if hosts is None else hosts

    def contains(self, hostname: Optional[str]) -> bool:
        if not hostname:
            return False
        return hostname in self.hosts

    __contains__ = contains

    def extended(self, extra: Iterable[str]) -> "DomainPolicy":
        """Return an isolated copy with ``extra`` hosts added."""

        hosts = set(self.hosts)
        hosts.update(host.strip() for host in extra if host and host.strip())
        return DomainPolicy(hosts)

    def __repr__(self) -> str:
        return f"DomainPolicy({sorted(self.hosts)!r})"


__all__ = ["NO_HEAD_REQUEST_DOMAINS", "DomainPolicy"]
