"""Logging setup for command line runs."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# HTTP client libraries that log each request; only interesting when tracing hops.
CLIENT_LOGGERS = ("httpx", "httpcore")


def configure_logging(log_file: Optional[Path] = None, verbose: bool = False) -> None:
    """Send logs to stderr and, optionally, a rotating log file.

    Without ``verbose`` the output carries progress (INFO) and failed hops
    (WARNING). With it every hop and every HEAD fallback is logged, along with
    the HTTP client's own request lines.
    """

    level = logging.DEBUG if verbose else logging.INFO

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(log_file, maxBytes=5_000_000, backupCount=3, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT, handlers=handlers, force=True)

    for name in CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)


__all__ = ["CLIENT_LOGGERS", "configure_logging"]
