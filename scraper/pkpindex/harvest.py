"""Harvest pipeline: crawl the index into the cache, then extract JSON lines."""

from __future__ import annotations

import logging
import sys
from typing import Iterable, Optional, TextIO

import requests

from .config import HarvestConfig
from .crawler import Crawler
from .extract import extract_from_files, find_cached_pages
from .http_client import create_session
from .models import JournalInfo
from .storage import ensure_dir, harvest_dir

logger = logging.getLogger("pkpindex")


def write_json_lines(records: Iterable[JournalInfo], out: TextIO) -> int:
    count = 0
    for record in records:
        out.write(record.to_json())
        out.write("\n")
        count += 1
    out.flush()
    return count


def run_harvest(
    config: HarvestConfig,
    session: Optional[requests.Session] = None,
    out: TextIO = sys.stdout,
    extract_only: bool = False,
) -> int:
    """Crawl IDs into ``<cache_dir>/<tag>``, extract every cached page, write JSON lines.

    Returns the number of records written. With ``extract_only`` the crawl is
    skipped and only the existing cache is exported.
    """
    target = ensure_dir(harvest_dir(config.cache_dir, config.tag))

    if not extract_only:
        own_session = session is None
        if own_session:
            session = create_session(config.user_agent)
        try:
            Crawler(config, session).run(target)
        finally:
            if own_session:
                session.close()

    files = find_cached_pages(target)
    if config.verbose:
        logger.info("extracting journal info from %d files", len(files))
    infos = extract_from_files(files)
    return write_json_lines(infos, out)
