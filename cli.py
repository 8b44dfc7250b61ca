"""Command line interface for redirect chain resolution."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import List, Optional

import httpx

from redirect_chain.chain import ChainWalker
from redirect_chain.config import load_config
from redirect_chain.logging_utils import configure_logging
from redirect_chain.probe import ProbeExecutor
from redirect_chain.storage import ChainRow, read_input_csv, write_output_csv, write_summary_json
from redirect_chain.url_tools import is_valid_url

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Redirect chain resolver")
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve = subparsers.add_parser("resolve", help="Resolve the redirect chain of each URL")
    resolve.add_argument("urls", nargs="*", help="URLs to resolve")
    resolve.add_argument("--input", help="Input CSV with a url column")
    resolve.add_argument("--output", help="Output CSV for results (prints to stdout when omitted)")
    resolve.add_argument("--max-chain-length", type=int, help="Maximum URLs per chain")
    resolve.add_argument("--concurrency", type=int, help="Max chains resolved at once")
    resolve.add_argument("--lenient", action="store_true", help="Keep the chain when a hop cannot be probed")
    resolve.add_argument(
        "--no-head-domain",
        action="append",
        default=[],
        metavar="HOST",
        help="Never send HEAD requests to HOST (repeatable)",
    )
    resolve.add_argument("--summary-json", type=str, help="Summary JSON output path")
    resolve.add_argument("--log-file", type=str, help="Optional log file path")
    resolve.add_argument("--verbose", action="store_true", help="Log every hop")

    validate = subparsers.add_parser("validate", help="Check whether strings are valid absolute URLs")
    validate.add_argument("urls", nargs="+", help="Strings to check")

    return parser


async def resolve_command(
    args: argparse.Namespace,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[ChainRow]:
    config = load_config()

    if args.max_chain_length is not None:
        config.max_chain_length = args.max_chain_length
    if args.concurrency:
        config.concurrency = args.concurrency
    if args.lenient:
        config.strict = False
    if args.no_head_domain:
        config.extra_no_head_domains.extend(args.no_head_domain)
    if args.summary_json:
        config.summary_json = Path(args.summary_json)

    configure_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)

    urls: List[str] = list(args.urls)
    if args.input:
        input_path = Path(args.input)
        urls.extend(read_input_csv(input_path))
        logger.info("Loaded %s URLs from %s", len(urls), input_path)
    if not urls:
        logger.warning("No URLs to resolve")

    summary: Counter = Counter()
    rows: List[Optional[ChainRow]] = [None] * len(urls)

    async with httpx.AsyncClient(
        headers={"User-Agent": config.user_agent},
        follow_redirects=False,
        transport=transport,
    ) as client:
        prober = ProbeExecutor(
            client,
            policy=config.build_policy(),
            head_timeout=config.head_timeout,
            get_timeout=config.get_timeout,
        )
        walker = ChainWalker(prober, max_chain_length=config.max_chain_length, strict=config.strict)
        semaphore = asyncio.Semaphore(config.concurrency)

        async def worker(index: int, url: str) -> None:
            if not is_valid_url(url):
                summary["invalid"] += 1
                rows[index] = ChainRow(url=url, status="invalid", error_message="invalid_url")
                return
            async with semaphore:
                result = await walker.walk(url)
            row = ChainRow.from_result(result)
            if result.fatal:
                summary["failed"] += 1
            else:
                summary["resolved"] += 1
                if result.hops:
                    summary["redirected"] += 1
                if result.truncated:
                    summary["truncated"] += 1
            rows[index] = row

        await asyncio.gather(*(worker(index, url) for index, url in enumerate(urls)))

    results = [row for row in rows if row is not None]

    if args.output:
        output_path = Path(args.output)
        write_output_csv(output_path, results)
        logger.info("Wrote %s rows to %s", len(results), output_path)
    else:
        for row in results:
            print(f"{row.status}\t{row.to_dict()['chain'] or row.url}\t{row.error_message or ''}".rstrip())

    summary_dict = {
        "resolved": summary.get("resolved", 0),
        "redirected": summary.get("redirected", 0),
        "truncated": summary.get("truncated", 0),
        "failed": summary.get("failed", 0),
        "invalid": summary.get("invalid", 0),
    }

    write_summary_json(config.summary_json, summary_dict)
    logger.info("Summary saved to %s", config.summary_json)
    return results


def validate_command(args: argparse.Namespace) -> int:
    exit_code = 0
    for url in args.urls:
        valid = is_valid_url(url)
        print(f"{'valid' if valid else 'invalid'}\t{url}")
        if not valid:
            exit_code = 1
    return exit_code


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "resolve":
        asyncio.run(resolve_command(args))
    elif args.command == "validate":
        sys.exit(validate_command(args))
    else:
        parser.error("Unknown command")


if __name__ == "__main__":
    main()
