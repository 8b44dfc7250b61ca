"""Configuration utilities for redirect chain resolution."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .policy import DomainPolicy


@dataclass
class Config:
    """Runtime configuration parameters."""

    max_chain_length: int = 20
    head_timeout: float = 3.0
    get_timeout: float = 10.0
    concurrency: int = 10
    user_agent: str = "redirect-chain/0.1"
    strict: bool = True
    extra_no_head_domains: List[str] = field(default_factory=list)
    summary_json: Path = Path("redirect_chain.summary.json")

    def build_policy(self) -> DomainPolicy:
        if not self.extra_no_head_domains:
            return DomainPolicy()
        return DomainPolicy().extended(self.extra_no_head_domains)


def parse_bool(value: str) -> bool:
    return value.lower() in {"1", "true", "yes", "on"}


def parse_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config(env_file: Optional[str] = ".env") -> Config:
    """Load configuration from environment variables and optional .env file."""

    if env_file:
        load_dotenv(env_file, override=False)

    config = Config(
        max_chain_length=int(os.getenv("RCH_MAX_CHAIN_LENGTH", Config.max_chain_length)),
        head_timeout=float(os.getenv("RCH_HEAD_TIMEOUT", Config.head_timeout)),
        get_timeout=float(os.getenv("RCH_GET_TIMEOUT", Config.get_timeout)),
        concurrency=int(os.getenv("RCH_CONCURRENCY", Config.concurrency)),
        user_agent=os.getenv("RCH_USER_AGENT", Config.user_agent),
        strict=parse_bool(os.getenv("RCH_STRICT", str(Config.strict))),
        extra_no_head_domains=parse_list(os.getenv("RCH_NO_HEAD_DOMAINS")),
        summary_json=Path(os.getenv("RCH_SUMMARY_JSON", str(Config.summary_json))),
    )

    if config.max_chain_length < 1:
        raise ValueError("RCH_MAX_CHAIN_LENGTH must be at least 1")

    return config


__all__ = ["Config", "load_config", "parse_bool", "parse_list"]
