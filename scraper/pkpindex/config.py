"""Runtime configuration for a harvest run."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

import platformdirs

APP_NAME = "pkpindex"

DEFAULT_BASE_URL = "https://index.pkp.sfu.ca/index.php/browse"

# The index answers unknown clients badly; an old desktop browser gets through.
LEGACY_USER_AGENT = "Mozilla/5.0 (compatible; MSIE 9.0; Windows NT 6.1; Trident/5.0)"

DEFAULT_SLEEP_S = 1.0
DEFAULT_MAX_ID = 20000
DEFAULT_MAX_SUBSEQUENT_REFRESHES = 100
DEFAULT_TIMEOUT: Tuple[float, float] = (5.0, 15.0)


def default_cache_dir() -> Path:
    return Path(platformdirs.user_cache_dir(APP_NAME))


def default_tag() -> str:
    """Today's date as YYYY-MM-DD, so each day gets a fresh harvest directory."""
    return dt.date.today().isoformat()


@dataclass
class HarvestConfig:
    cache_dir: Path = field(default_factory=default_cache_dir)
    tag: str = field(default_factory=default_tag)
    base_url: str = DEFAULT_BASE_URL
    sleep: float = DEFAULT_SLEEP_S
    verbose: bool = False
    max_id: int = DEFAULT_MAX_ID  # exclusive
    user_agent: str = LEGACY_USER_AGENT
    force: bool = False
    max_subsequent_refreshes: int = DEFAULT_MAX_SUBSEQUENT_REFRESHES
    timeout: Tuple[float, float] = DEFAULT_TIMEOUT

    def archive_info_url(self, archive_id: int) -> str:
        # e.g. https://index.pkp.sfu.ca/index.php/browse/archiveInfo/5000
        return f"{self.base_url.rstrip('/')}/archiveInfo/{archive_id}"
