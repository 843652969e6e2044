"""HTTP client utilities: a polite, retrying session for the PKP Index."""

from dataclasses import dataclass, field
from typing import Mapping, Tuple

import requests
from requests.adapters import HTTPAdapter
from requests.structures import CaseInsensitiveDict
from urllib3.util.retry import Retry

from .config import DEFAULT_TIMEOUT, LEGACY_USER_AGENT


@dataclass
class PageResponse:
    """Status, headers and raw body of a single GET."""

    status: int
    headers: Mapping[str, str] = field(default_factory=CaseInsensitiveDict)
    body: bytes = b""


def create_session(user_agent: str = LEGACY_USER_AGENT) -> requests.Session:
    """Return a requests Session that retries rate-limited and failed GETs.

    429 responses are retried with backoff, honouring Retry-After, so the
    caller never sees them unless every attempt was rate limited.
    """
    session = requests.Session()
    session.headers.update({
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
        "Connection": "keep-alive",
    })

    retry = Retry(
        total=5,
        backoff_factor=1.0,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET",),
        raise_on_status=False,
        respect_retry_after_header=True,
    )
    adapter = HTTPAdapter(max_retries=retry, pool_connections=1, pool_maxsize=1)

    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def fetch_page(
    session: requests.Session,
    url: str,
    timeout: Tuple[float, float] = DEFAULT_TIMEOUT,
) -> PageResponse:
    """GET the URL and return status, headers and the full body.

    Transport failures raise ``requests.RequestException``; HTTP error
    statuses are returned as-is for the caller to judge.
    """
    response = session.get(url, timeout=timeout)
    try:
        return PageResponse(
            status=response.status_code,
            headers=response.headers,
            body=response.content,
        )
    finally:
        response.close()
