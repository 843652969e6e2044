"""Extraction pass: cached archive info pages -> JournalInfo records.

Reads the cache only, never touches the network.
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, List

from .models import JournalInfo
from .parsers import extract_journal_info
from .storage import PAGE_GLOB, page_id

logger = logging.getLogger("pkpindex")

PROGRESS_EVERY = 200


def find_cached_pages(target: Path) -> List[Path]:
    """Return non-empty page files directly under ``target``, in ID order.

    Zero-length sentinels, directories and half-written temp files are left out.
    Sorted by numeric ID; names widen past six digits from ID 1000000 on.
    """
    pages: List[Path] = []
    for path in sorted(target.glob(PAGE_GLOB), key=lambda p: page_id(p) or 0):
        if page_id(path) is None or not path.is_file():
            continue
        if path.stat().st_size == 0:
            continue
        pages.append(path)
    return pages


def extract_from_files(
    paths: Iterable[Path],
    extractor: Callable[[bytes], JournalInfo] = extract_journal_info,
) -> List[JournalInfo]:
    results: List[JournalInfo] = []
    for i, path in enumerate(paths):
        if i % PROGRESS_EVERY == 0:
            logger.info("@%d", i)
        results.append(extractor(path.read_bytes()))
    return results
