#!/usr/bin/env python3
# =============================================================================
# scripts/check_article.py - Article Quality Check
# =============================================================================
# Runs the editorial checks from lib/article.py on the article and exits
# non-zero when anything fails.
#
# Usage:
#   python scripts/check_article.py                      # offline checks only
#   python scripts/check_article.py --check-links        # also hit every URL
#   python scripts/check_article.py --path other.md --check-links --timeout 5
# =============================================================================

import argparse
import asyncio
import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from app.config import settings
from lib.article import build_report, check_links, load_article


def positive_int(value: str) -> int:
    """argparse type for --concurrency: an integer of at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def positive_float(value: str) -> float:
    """argparse type for --timeout: a number greater than 0."""
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check the FastAPI vs Express article")
    parser.add_argument(
        "--path",
        default=settings.ARTICLE_PATH,
        help=f"Markdown file to check (default: {settings.ARTICLE_PATH})",
    )
    parser.add_argument(
        "--check-links",
        action="store_true",
        help="Request every external link and report the ones that don't resolve",
    )
    parser.add_argument(
        "--timeout",
        type=positive_float,
        default=settings.LINK_CHECK_TIMEOUT,
        help="Per-link timeout in seconds",
    )
    parser.add_argument(
        "--concurrency",
        type=positive_int,
        default=settings.LINK_CHECK_CONCURRENCY,
        help="Links checked at the same time",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the checks and print the report. Returns the exit code."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        text = load_article(args.path)
    except (OSError, UnicodeDecodeError) as e:
        print(f"ERROR: cannot read {args.path}: {e}")
        return 2

    print("=" * 60)
    print(f"Checking {args.path}")
    print("=" * 60)

    report = build_report(text)
    if args.check_links:
        report.link_results = asyncio.run(
            check_links(report.links, timeout=args.timeout, concurrency=args.concurrency)
        )

    print(report.summary())
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
