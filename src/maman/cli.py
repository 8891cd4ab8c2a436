"""
Command-line interface for the spider.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from maman.config import SpiderConfig
from maman.core import Spider

USAGE = "Usage: maman URL"


def configure_logging(level_name: Optional[str] = None) -> None:
    """Send log records to stderr at MAMAN_LOG_LEVEL (default INFO)."""
    level_name = (level_name or os.environ.get("MAMAN_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the spider CLI."""
    parser = argparse.ArgumentParser(
        prog="maman",
        usage=USAGE,
        description="Crawl a single domain and push every page to a Redis work queue.",
    )
    parser.add_argument("url", nargs="?", help="Seed URL (e.g. https://example.com/)")
    args = parser.parse_args(argv)

    if not args.url:
        print(USAGE)
        return 1

    configure_logging()
    spider = Spider(args.url, config=SpiderConfig.from_env())
    try:
        spider.crawl()
    finally:
        spider.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
