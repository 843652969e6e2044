"""Test doubles: a stub PKP Index, a fake session and page builders.

No test talks to the network. The crawler gets ``StubIndex`` as its fetch
callable; it answers every ID with a soft-404 (``refresh`` header) unless a
page or an error status was registered for it.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from requests.structures import CaseInsensitiveDict

from scraper.pkpindex.http_client import PageResponse

BASE_URL = "https://index.example.org/index.php/browse"


def archive_info_html(name: Optional[str], homepage: Optional[str]) -> str:
    """Return an archive info page shaped like the real index output."""
    title = f"<h3>{name}</h3>" if name is not None else ""
    links = ""
    if homepage is not None:
        links = (
            '<p class="archiveLinks"><a href="https://index.example.org/index.php/browse/index/37">'
            "Browse Records</a>&nbsp;&nbsp;|&nbsp;&nbsp;"
            f'<a href="{homepage}" target="_blank">Journal Website</a>&nbsp;&nbsp;|&nbsp;&nbsp;'
            f'<a href="{homepage.rstrip("/")}/issue/current" target="_blank">Current Issue</a></p>'
        )
    return (
        "<!DOCTYPE html>\n<html><head><title>PKP Index</title></head>\n"
        f'<body><div id="content">\n{title}\n{links}\n</div></body></html>\n'
    )


class StubIndex:
    """Fetch callable standing in for the retrying HTTP session."""

    def __init__(self, pages: Optional[Dict[int, str]] = None, errors: Optional[Dict[int, int]] = None) -> None:
        self.pages: Dict[int, bytes] = {k: v.encode("utf-8") for k, v in (pages or {}).items()}
        self.errors: Dict[int, int] = dict(errors or {})
        self.calls: List[str] = []

    @property
    def requested_ids(self) -> List[int]:
        return [int(url.rsplit("/", 1)[-1]) for url in self.calls]

    def __call__(self, session, url, timeout=None) -> PageResponse:
        self.calls.append(url)
        archive_id = int(url.rsplit("/", 1)[-1])
        if archive_id in self.errors:
            return PageResponse(status=self.errors[archive_id], headers=CaseInsensitiveDict(), body=b"error")
        if archive_id in self.pages:
            headers = CaseInsensitiveDict({"Content-Type": "text/html; charset=utf-8"})
            return PageResponse(status=200, headers=headers, body=self.pages[archive_id])
        headers = CaseInsensitiveDict({"Refresh": f"0; url={BASE_URL}"})
        return PageResponse(status=200, headers=headers, body=b"")


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FakeResponse:
    def __init__(self, page: PageResponse) -> None:
        self.status_code = page.status
        self.headers = page.headers
        self.content = page.body
        self.closed = False

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """Minimal ``requests.Session`` stand-in backed by a ``StubIndex``."""

    def __init__(self, index: StubIndex) -> None:
        self.index = index
        self.timeouts: List[object] = []
        self.closed = False

    def get(self, url, timeout=None) -> FakeResponse:
        self.timeouts.append(timeout)
        return FakeResponse(self.index(self, url, timeout))

    def close(self) -> None:
        self.closed = True
