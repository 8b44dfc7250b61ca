"""CSV and summary storage utilities."""

from __future__ import annotations

import csv
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .chain import ChainResult

OUTPUT_COLUMNS = [
    "url",
    "final_url",
    "hops",
    "chain",
    "status",
    "error_message",
]

CHAIN_SEPARATOR = " -> "


@dataclass
class ChainRow:
    url: str
    final_url: Optional[str] = None
    chain: List[str] = field(default_factory=list)
    status: str = "ok"
    error_message: Optional[str] = None

    @classmethod
    def from_result(cls, result: ChainResult) -> "ChainRow":
        if result.fatal:
            status = "failed"
        elif result.error:
            status = "stopped"
        elif result.truncated:
            status = "truncated"
        else:
            status = "ok"
        final_url = result.final_url
        return cls(
            url=str(result.url),
            final_url=str(final_url) if final_url is not None else None,
            chain=[str(item) for item in result.chain] if result.ok else [],
            status=status,
            error_message=result.error,
        )

    @property
    def hops(self) -> int:
        return max(len(self.chain) - 1, 0)

    def to_dict(self) -> Dict[str, str]:
        return {
            "url": self.url,
            "final_url": self.final_url or "",
            "hops": str(self.hops) if self.chain else "",
            "chain": CHAIN_SEPARATOR.join(self.chain),
            "status": self.status,
            "error_message": self.error_message or "",
        }


def read_input_csv(path: Path) -> List[str]:
    """Read URLs from the ``url`` (or ``website``) column of a CSV file."""

    with path.open("r", newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        urls = []
        for row in reader:
            url = (row.get("url") or row.get("website") or "").strip()
            if url:
                urls.append(url)
        return urls


def write_output_csv(path: Path, rows: Iterable[ChainRow]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=OUTPUT_COLUMNS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row.to_dict())


def write_summary_json(path: Path, summary: Dict[str, int]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, sort_keys=True))


__all__ = [
    "CHAIN_SEPARATOR",
    "ChainRow",
    "OUTPUT_COLUMNS",
    "read_input_csv",
    "write_output_csv",
    "write_summary_json",
]
