"""Redirect chain resolution."""

from .chain import ChainResult, ChainWalker, get_redirect_chain
from .errors import InvalidLocationError, ProbeError, RedirectChainError
from .policy import NO_HEAD_REQUEST_DOMAINS, DomainPolicy
from .probe import ProbeExecutor, ProbeOutcome, ProbeResult, get_location_header
from .url_tools import is_valid_url, resolve_location

__all__ = [
    "ChainResult",
    "ChainWalker",
    "DomainPolicy",
    "InvalidLocationError",
    "NO_HEAD_REQUEST_DOMAINS",
    "ProbeError",
    "ProbeExecutor",
    "ProbeOutcome",
    "ProbeResult",
    "RedirectChainError",
    "get_location_header",
    "get_redirect_chain",
    "is_valid_url",
    "resolve_location",
]

__version__ = "0.1.0"
