"""HTML parsers for PKP Index archive info pages (BeautifulSoup).

An archive info page looks like::

    <div id="content">
    <h3>Revista de Psicologia del Deporte</h3>
    <p class="archiveLinks"><a href="https://index.pkp.sfu.ca/index.php/browse/index/37">Browse
    Records</a>&nbsp;&nbsp;|&nbsp;&nbsp;<a href="http://rpd-online.com" target="_blank">Journal
    Website</a>&nbsp;&nbsp;|&nbsp;&nbsp;<a href="http://rpd-online.com/issue/current" ...

The second link of ``p.archiveLinks`` is the journal's own website.
"""

import logging
from typing import Callable, Union

from bs4 import BeautifulSoup, Tag

from .models import JournalInfo

logger = logging.getLogger("pkpindex")

NAME_SELECTOR = "h3"
HOMEPAGE_SELECTOR = "p.archiveLinks > a:nth-child(2)"

Html = Union[bytes, str]
# raw markup, or a document already parsed by BeautifulSoup
Markup = Union[bytes, str, Tag]
# (html, css selector) -> string, empty when nothing matches
Selector = Callable[[Html, str], str]


def _soup(html: Markup) -> Tag:
    if isinstance(html, Tag):
        return html
    if isinstance(html, bytes):
        # the index serves UTF-8; a stray bad byte must not switch the codec
        html = html.decode("utf-8", errors="replace")
    return BeautifulSoup(html, "html.parser")


def select_text(html: Markup, selector: str) -> str:
    """Return the text of the first element matching ``selector``."""
    el = _soup(html).select_one(selector)
    if el is None:
        return ""
    return el.get_text(" ", strip=True)


def select_href(html: Markup, selector: str) -> str:
    """Return the ``href`` of the first element matching ``selector``."""
    return select_attr(html, selector, "href")


def select_attr(html: Markup, selector: str, attr: str) -> str:
    el = _soup(html).select_one(selector)
    if el is None:
        return ""
    value = el.get(attr)
    if value is None:
        return ""
    if isinstance(value, list):
        value = " ".join(value)
    return value.strip()


def derive_oai_endpoint(homepage: str) -> str:
    """Guess the OAI-PMH base URL of an OJS journal from its homepage.

    >>> derive_oai_endpoint("https://journals.aijr.in/index.php/jmm/index")
    'https://journals.aijr.in/index.php/jmm/oai'
    >>> derive_oai_endpoint("http://example.org/")
    'http://example.org/oai'
    >>> derive_oai_endpoint("http://example.org")
    'http://example.org/oai'
    """
    if homepage.endswith("/index"):
        return homepage[: -len("/index")] + "/oai"
    if homepage.endswith("/"):
        return homepage + "oai"
    return homepage + "/oai"


def extract_journal_info(
    html: Html,
    text_selector: Selector = select_text,
    href_selector: Selector = select_href,
) -> JournalInfo:
    """Extract journal name and homepage from raw HTML, guess the endpoint.

    Blank input yields an all-empty record. A missing name or homepage is
    logged but the record is still returned; the caller decides what to keep.
    """
    if not html.strip():
        return JournalInfo()

    # built-in selectors share one parse; injected ones get the raw html
    builtin = (select_text, select_href)
    doc = _soup(html) if text_selector in builtin or href_selector in builtin else None
    name = text_selector(doc if text_selector in builtin else html, NAME_SELECTOR).strip()
    homepage = href_selector(doc if href_selector in builtin else html, HOMEPAGE_SELECTOR).strip()
    if not name:
        logger.warning("empty name for page [%d bytes]", len(html))
    if not homepage:
        logger.warning("empty homepage for %r [%d bytes]", name, len(html))

    return JournalInfo(
        name=name,
        homepage=homepage,
        endpoint=derive_oai_endpoint(homepage),
    )
