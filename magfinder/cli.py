#!/usr/bin/env python3
"""
Command line entry point.

    magfinder "Widget Monthly"
    magfinder "Widget Monthly" --json
    magfinder "Widget Monthly" --sources archive-catalog,google_books
"""
import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from sources import FETCHERS_BY_ID
from .config import Settings
from .log import setup_logging
from .search import PeriodicalSearch, SearchReport

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 200

USAGE = 'Usage: magfinder "Name"'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="magfinder",
        description="Search public archives, libraries and the web for editions of a periodical."
    )
    parser.add_argument("name", nargs="?", help="Periodical name to search for.")
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON.")
    parser.add_argument(
        "--sources",
        default="",
        help=f"Comma-separated source ids to query ({', '.join(FETCHERS_BY_ID)})."
    )
    parser.add_argument("--log-level", default=None, help="Override MAGFINDER_LOG_LEVEL.")
    return parser


def preview(text: str, limit: int = PREVIEW_LENGTH) -> str:
    return f"{text[:limit]}..."


def print_report(report: SearchReport) -> None:
    if not report.results:
        print("No results found.")
        return

    print(f"\nFound {len(report.results)} unique results:")
    for source, results in report.grouped_by_source().items():
        print(f"\n=== Results from {source} ===")
        for result in results:
            print(f"\nTitle: {result.title}")
            print(f"Year: {result.year}")
            print(f"URL: {result.url}")
            if result.description:
                print(f"Description: {preview(result.description)}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    name = (args.name or "").strip()
    if not name:
        print("Please provide a magazine name as an argument.", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    requested = [item.strip() for item in args.sources.split(",") if item.strip()]
    unknown = [sid for sid in requested if sid not in FETCHERS_BY_ID]
    if unknown:
        print(f"Unknown source(s): {', '.join(unknown)}", file=sys.stderr)
        return 1

    settings = Settings.from_env()
    setup_logging(args.log_level or settings.log_level, settings.log_file)

    if not args.json:
        print(f"Starting comprehensive search for: {name}")

    search = PeriodicalSearch(settings, sources=requested or None)
    report = asyncio.run(search.run(name))

    if report.warnings:
        failed = ", ".join(sorted({f"{w.source}:{w.unit}" for w in report.warnings}))
        logger.warning(f"⚠️ {len(report.warnings)} source unit(s) failed: {failed}")

    if args.json:
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
