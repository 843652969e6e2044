#!/usr/bin/env python3
"""CLI for the PKP Index journal harvester.

Example:
  python -m scraper.pkpindex.cli -t 2020-03-01 -x 6000 --verbose > journals.jsonl

Each output line is a JSON object::

  {"name":"Scholarly and Research Communication","homepage":"http://src-online.ca/index.php/src","oai":"http://src-online.ca/index.php/src/oai"}
"""

import argparse
import io
import sys
from pathlib import Path
from typing import List, Optional

import requests

from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_ID,
    DEFAULT_MAX_SUBSEQUENT_REFRESHES,
    DEFAULT_SLEEP_S,
    DEFAULT_TIMEOUT,
    LEGACY_USER_AGENT,
    HarvestConfig,
    default_cache_dir,
    default_tag,
)
from .crawler import HarvestError
from .harvest import run_harvest
from .storage import write_file_atomic
from .utils import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Harvest journal names, homepages and OAI endpoints from the PKP Index",
    )
    parser.add_argument("-d", "--cache-dir", type=Path, default=None, help="Path to cache dir (default: user cache dir)")
    parser.add_argument("-t", "--tag", default=None, help="Subdirectory under cache dir to store pages (default: today)")
    parser.add_argument("-b", "--base-url", default=DEFAULT_BASE_URL, help="Base URL of the browse endpoint")
    parser.add_argument("-s", "--sleep", type=float, default=DEFAULT_SLEEP_S, help="Seconds to sleep between page fetches")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("-x", "--max-id", type=int, default=DEFAULT_MAX_ID, help="Upper bound, exclusive; max id to fetch")
    parser.add_argument("--ua", "--user-agent", dest="user_agent", default=LEGACY_USER_AGENT, help="User agent to use")
    parser.add_argument("-f", "--force", action="store_true", help="Force redownload of zero length files")
    parser.add_argument(
        "--mssr", "--max-subsequent-refreshes",
        dest="max_subsequent_refreshes",
        type=int,
        default=DEFAULT_MAX_SUBSEQUENT_REFRESHES,
        help="Maximum number of subsequent refreshes before the crawl stops",
    )
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT[1], help="Read timeout in seconds per request")
    parser.add_argument("-o", "--out", type=Path, default=None, help="Write JSON lines to this file instead of stdout")
    parser.add_argument("--extract-only", action="store_true", help="Skip the crawl, only export the cached pages")
    return parser


def config_from_args(args: argparse.Namespace) -> HarvestConfig:
    return HarvestConfig(
        cache_dir=args.cache_dir or default_cache_dir(),
        tag=args.tag or default_tag(),
        base_url=args.base_url,
        sleep=args.sleep,
        verbose=args.verbose,
        max_id=args.max_id,
        user_agent=args.user_agent,
        force=args.force,
        max_subsequent_refreshes=args.max_subsequent_refreshes,
        timeout=(DEFAULT_TIMEOUT[0], args.timeout),
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logger(args.verbose)
    config = config_from_args(args)

    try:
        if args.out:
            buf = io.StringIO()
            count = run_harvest(config, out=buf, extract_only=args.extract_only)
            write_file_atomic(args.out, buf.getvalue().encode("utf-8"))
            logger.info("Wrote %d records to %s", count, args.out)
        else:
            sys.stdout.reconfigure(encoding="utf-8")
            run_harvest(config, out=sys.stdout, extract_only=args.extract_only)
    except (HarvestError, requests.RequestException, OSError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
