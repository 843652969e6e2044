"""Sequential, resumable crawl of PKP Index archive info pages.

Unknown IDs are not answered with a 404 or a 3XX but with a 200 and a
``refresh`` header pointing back to the browse page, e.g.::

    refresh: 0; url=https://index.pkp.sfu.ca/index.php/browse

Such IDs get a zero-length sentinel in the cache. After too many of them in
a row the live ID range is assumed to be exhausted and the crawl stops.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Tuple

import requests

from .config import HarvestConfig
from .http_client import PageResponse, fetch_page
from .storage import CacheState, cache_state, page_path, write_file_atomic

logger = logging.getLogger("pkpindex")

Fetch = Callable[[requests.Session, str, Tuple[float, float]], PageResponse]


class HarvestError(RuntimeError):
    """The index answered with an HTTP error status."""

    def __init__(self, url: str, status: int) -> None:
        super().__init__(f"failed with {status} for {url}")
        self.url = url
        self.status = status


@dataclass
class CrawlState:
    next_id: int = 1
    consecutive_refreshes: int = 0
    # run counters, for the summary line
    requests: int = 0
    pages: int = 0
    refreshes: int = 0
    cached: int = 0


class Crawler:
    """Populate the page cache for IDs ``1 .. max_id - 1``."""

    def __init__(
        self,
        config: HarvestConfig,
        session: requests.Session,
        fetch: Fetch = fetch_page,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config
        self.session = session
        self.fetch = fetch
        self.sleep = sleep

    def should_stop(self, state: CrawlState) -> bool:
        return state.consecutive_refreshes > self.config.max_subsequent_refreshes

    def run(self, target: Path, state: Optional[CrawlState] = None) -> CrawlState:
        state = state or CrawlState()
        while state.next_id < self.config.max_id:
            if self.should_stop(state):
                logger.info(
                    "stopping at id %d after %d subsequent refreshes",
                    state.next_id, state.consecutive_refreshes,
                )
                break
            self.crawl_id(target, state.next_id, state)
            state.next_id += 1
        logger.info(
            "crawl done: %d requests, %d pages, %d refreshes, %d cached",
            state.requests, state.pages, state.refreshes, state.cached,
        )
        return state

    def crawl_id(self, target: Path, archive_id: int, state: CrawlState) -> None:
        link = self.config.archive_info_url(archive_id)
        dst = page_path(target, archive_id)

        entry = cache_state(dst)
        if entry is CacheState.PAGE or (entry is CacheState.SENTINEL and not self.config.force):
            logger.debug("already cached %s %s", dst, link)
            state.cached += 1
            return
        if entry is CacheState.SENTINEL:
            logger.debug("force redownload: %s", link)

        resp = self.fetch(self.session, link, self.config.timeout)
        state.requests += 1
        if resp.status >= 400:
            raise HarvestError(link, resp.status)

        if "refresh" in resp.headers:
            logger.info("[touch] refresh found for %s", link)
            write_file_atomic(dst, b"")
            state.consecutive_refreshes += 1
            state.refreshes += 1
            return

        state.consecutive_refreshes = 0
        write_file_atomic(dst, resp.body)
        state.pages += 1
        logger.debug("done: %s %s", dst, link)
        self.sleep(self.config.sleep)
