"""Walk a URL's redirect chain one probe at a time."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

import httpx

from .errors import InvalidLocationError
from .policy import DomainPolicy
from .probe import DEFAULT_GET_TIMEOUT, DEFAULT_HEAD_TIMEOUT, ProbeExecutor, ProbeOutcome, client_scope
from .url_tools import resolve_location

logger = logging.getLogger(__name__)

# Browsers give up after 20 redirects as well.
DEFAULT_MAX_CHAIN_LENGTH = 20


@dataclass
class ChainResult:
    """Outcome of one walk.

    ``fatal`` marks a chain that must be discarded. In lenient mode a failed
    probe still records ``error`` but keeps the chain usable.
    """

    url: httpx.URL
    chain: List[httpx.URL] = field(default_factory=list)
    truncated: bool = False
    fatal: bool = False
    error: Optional[str] = None
    failed_url: Optional[httpx.URL] = None

    @property
    def ok(self) -> bool:
        return not self.fatal

    @property
    def final_url(self) -> Optional[httpx.URL]:
        if self.fatal or not self.chain:
            return None
        return self.chain[-1]

    @property
    def hops(self) -> int:
        return max(len(self.chain) - 1, 0)


class ChainWalker:
    def __init__(
        self,
        prober: ProbeExecutor,
        max_chain_length: int = DEFAULT_MAX_CHAIN_LENGTH,
        strict: bool = True,
    ) -> None:
        if max_chain_length < 1:
            raise ValueError("max_chain_length must be at least 1")
        self.prober = prober
        self.max_chain_length = max_chain_length
        self.strict = strict

    async def walk(self, url: Union[httpx.URL, str]) -> ChainResult:
        current = httpx.URL(url)
        result = ChainResult(url=current)

        while len(result.chain) < self.max_chain_length:
            result.chain.append(current)
            probe = await self.prober.probe(current)

            if probe.outcome is ProbeOutcome.FAILURE:
                result.error = probe.error
                result.failed_url = current
                result.fatal = self.strict or probe.malformed_location
                logger.warning("Request to %s failed as part of a redirect chain: %s", current, probe.error)
                return result

            if probe.outcome is ProbeOutcome.NO_REDIRECT:
                logger.debug("%s does not redirect (HTTP %s)", current, probe.status_code)
                return result

            try:
                next_url = resolve_location(current, probe.location or "")
            except InvalidLocationError as exc:
                result.error = str(exc)
                result.failed_url = current
                result.fatal = True
                logger.warning("Redirect from %s is unusable: %s", current, exc)
                return result

            logger.debug("%s -> %s (HTTP %s via %s)", current, next_url, probe.status_code, probe.method)
            current = next_url

        result.truncated = True
        logger.debug("Redirect chain for %s truncated at %s URLs", result.url, self.max_chain_length)
        return result

    async def resolve(self, url: Union[httpx.URL, str]) -> Optional[List[httpx.URL]]:
        """Return the chain, or None when it could not be determined."""

        result = await self.walk(url)
        return result.chain if result.ok else None


async def get_redirect_chain(
    url: Union[httpx.URL, str],
    max_chain_length: int = DEFAULT_MAX_CHAIN_LENGTH,
    *,
    client: Optional[httpx.AsyncClient] = None,
    policy: Optional[DomainPolicy] = None,
    strict: bool = True,
    head_timeout: float = DEFAULT_HEAD_TIMEOUT,
    get_timeout: Optional[float] = DEFAULT_GET_TIMEOUT,
) -> Optional[List[httpx.URL]]:
    """Return every URL ``url`` redirects through, starting with ``url`` itself.

    None means something went wrong getting the chain.
    """

    async with client_scope(client) as active:
        prober = ProbeExecutor(active, policy=policy, head_timeout=head_timeout, get_timeout=get_timeout)
        walker = ChainWalker(prober, max_chain_length=max_chain_length, strict=strict)
        return await walker.resolve(url)


__all__ = ["ChainResult", "ChainWalker", "DEFAULT_MAX_CHAIN_LENGTH", "get_redirect_chain"]
