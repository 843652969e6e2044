"""On-disk page cache: layout, entry states and atomic writes.

Layout::

    <cache_dir>/<tag>/page-000001.html
    <cache_dir>/<tag>/page-000002.html
    ...

A zero-length page file is a sentinel for an ID the index soft-redirected
(``refresh`` header), so later runs do not ask for it again.
"""

from __future__ import annotations

import enum
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

PAGE_PREFIX = "page-"
PAGE_SUFFIX = ".html"
PAGE_GLOB = f"{PAGE_PREFIX}*{PAGE_SUFFIX}"
PAGE_MODE = 0o644
DIR_MODE = 0o755


class CacheState(enum.Enum):
    ABSENT = "absent"
    SENTINEL = "sentinel"
    PAGE = "page"


def page_filename(archive_id: int) -> str:
    return f"{PAGE_PREFIX}{archive_id:06d}{PAGE_SUFFIX}"


def page_id(path: Path) -> Optional[int]:
    """Inverse of ``page_filename``; None for names outside the layout."""
    name = path.name
    if not (name.startswith(PAGE_PREFIX) and name.endswith(PAGE_SUFFIX)):
        return None
    digits = name[len(PAGE_PREFIX):-len(PAGE_SUFFIX)]
    if not digits.isdigit():
        return None
    return int(digits)


def harvest_dir(cache_dir: Union[str, Path], tag: str) -> Path:
    return Path(cache_dir) / tag


def page_path(target: Path, archive_id: int) -> Path:
    return target / page_filename(archive_id)


def cache_state(path: Path) -> CacheState:
    try:
        size = path.stat().st_size
    except FileNotFoundError:
        return CacheState.ABSENT
    return CacheState.PAGE if size > 0 else CacheState.SENTINEL


def ensure_dir(path: Path) -> Path:
    path.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    return path


def write_file_atomic(path: Union[str, Path], data: bytes, mode: int = PAGE_MODE) -> Path:
    """Write ``data`` to a temp file next to ``path`` and rename it into place.

    The temp file lives in the same directory so the final ``os.replace`` is
    a same-filesystem rename. Any failure removes the temp file and re-raises.
    """
    path = Path(path)
    handle = tempfile.NamedTemporaryFile(
        "wb",
        dir=str(path.parent),
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    )
    temp_name = handle.name
    try:
        with handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(temp_name, mode)
        os.replace(temp_name, path)
    except BaseException:
        try:
            os.unlink(temp_name)
        except FileNotFoundError:
            pass
        raise
    return path
