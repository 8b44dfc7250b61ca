"""Single-hop probing: HEAD first, GET when HEAD gets nowhere."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from typing import AsyncIterator, Optional, Union

import httpx

from .errors import ProbeError
from .policy import DomainPolicy

logger = logging.getLogger(__name__)

DEFAULT_HEAD_TIMEOUT = 3.0
DEFAULT_GET_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "redirect-chain/0.1"

# Servers that refuse the method outright get the GET fallback too.
HEAD_REJECTED_STATUSES = {405, 501}


class ProbeOutcome(str, Enum):
    REDIRECT = "redirect"
    NO_REDIRECT = "no_redirect"
    FAILURE = "failure"


@dataclass(frozen=True)
class ProbeResult:
    url: httpx.URL
    outcome: ProbeOutcome
    location: Optional[str] = None
    status_code: Optional[int] = None
    method: Optional[str] = None
    error: Optional[str] = None
    malformed_location: bool = False

    @property
    def failed(self) -> bool:
        return self.outcome is ProbeOutcome.FAILURE


def is_acceptable_status(status_code: int) -> bool:
    """2xx answers end the chain, 3xx answers may carry a Location."""

    return 200 <= status_code < 400


class ProbeExecutor:
    """Issue the requests for one hop without letting httpx follow redirects."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        policy: Optional[DomainPolicy] = None,
        head_timeout: float = DEFAULT_HEAD_TIMEOUT,
        get_timeout: Optional[float] = DEFAULT_GET_TIMEOUT,
    ) -> None:
        self.client = client
        self.policy = policy if policy is not None else DomainPolicy()
        self.head_timeout = head_timeout
        self.get_timeout = get_timeout

    async def _head(self, url: httpx.URL) -> Optional[httpx.Response]:
        """Return the HEAD response, or None when there is none to use."""

        # Policy entries use the ASCII (punycode) form of the host
        host = url.raw_host.decode("ascii")
        if self.policy.contains(host):
            logger.debug("Skipping HEAD for %s (host on no-HEAD list)", host)
            return None
        try:
            # wait_for cancels the request on expiry, so no timer outlives the call
            response = await asyncio.wait_for(
                self.client.head(url, follow_redirects=False),
                timeout=self.head_timeout,
            )
        except asyncio.TimeoutError:
            logger.debug("HEAD to %s timed out after %.1fs; falling back to GET", url, self.head_timeout)
            return None
        except httpx.HTTPError as exc:
            logger.debug("HEAD to %s failed (%s); falling back to GET", url, exc)
            return None

        if response.status_code in HEAD_REJECTED_STATUSES:
            logger.debug("HEAD to %s rejected with HTTP %s; falling back to GET", url, response.status_code)
            return None
        return response

    async def _get(self, url: httpx.URL) -> httpx.Response:
        pending = self.client.get(url, follow_redirects=False)
        if self.get_timeout is None:
            return await pending
        return await asyncio.wait_for(pending, timeout=self.get_timeout)

    async def probe(self, url: Union[httpx.URL, str]) -> ProbeResult:
        url = httpx.URL(url)

        try:
            response = await self._head(url)
            if response is None:
                response = await self._get(url)
        except httpx.InvalidURL as exc:
            # httpx builds the follow-up request for every 3xx, even when not following it
            return ProbeResult(
                url=url,
                outcome=ProbeOutcome.FAILURE,
                error=f"invalid Location header: {exc}",
                malformed_location=True,
            )
        except asyncio.TimeoutError:
            return ProbeResult(
                url=url,
                outcome=ProbeOutcome.FAILURE,
                method="GET",
                error=f"GET timed out after {self.get_timeout}s",
            )
        except httpx.HTTPError as exc:
            return ProbeResult(url=url, outcome=ProbeOutcome.FAILURE, method="GET", error=str(exc) or repr(exc))

        method = response.request.method
        if not is_acceptable_status(response.status_code):
            return ProbeResult(
                url=url,
                outcome=ProbeOutcome.FAILURE,
                status_code=response.status_code,
                method=method,
                error=f"HTTP {response.status_code}",
            )

        location = response.headers.get("Location")
        if location is None:
            return ProbeResult(
                url=url,
                outcome=ProbeOutcome.NO_REDIRECT,
                status_code=response.status_code,
                method=method,
            )
        return ProbeResult(
            url=url,
            outcome=ProbeOutcome.REDIRECT,
            location=location,
            status_code=response.status_code,
            method=method,
        )


@asynccontextmanager
async def client_scope(
    client: Optional[httpx.AsyncClient] = None,
    user_agent: str = DEFAULT_USER_AGENT,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield ``client``, or a short-lived client closed on exit."""

    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(headers={"User-Agent": user_agent}, follow_redirects=False) as owned:
        yield owned


async def get_location_header(
    url: Union[httpx.URL, str],
    *,
    client: Optional[httpx.AsyncClient] = None,
    policy: Optional[DomainPolicy] = None,
    head_timeout: float = DEFAULT_HEAD_TIMEOUT,
    get_timeout: Optional[float] = DEFAULT_GET_TIMEOUT,
) -> Optional[str]:
    """Return the Location header ``url`` answers with, or None if it does not redirect.

    Raises ProbeError when neither HEAD nor GET produce a usable response.
    """

    async with client_scope(client) as active:
        prober = ProbeExecutor(active, policy=policy, head_timeout=head_timeout, get_timeout=get_timeout)
        result = await prober.probe(url)
    if result.failed:
        raise ProbeError(str(result.url), result.error or "probe failed")
    return result.location


__all__ = [
    "HEAD_REJECTED_STATUSES",
    "ProbeExecutor",
    "ProbeOutcome",
    "ProbeResult",
    "client_scope",
    "get_location_header",
    "is_acceptable_status",
]
