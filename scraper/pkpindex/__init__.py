"""PKP Index journal harvester (requests + BeautifulSoup).

Walks the archive info pages of https://index.pkp.sfu.ca by numeric ID,
caches every page on disk and turns the cache into JSON lines with the
journal name, homepage and a guessed OAI-PMH endpoint.
"""

__all__ = [
    "run_harvest",
]

from .harvest import run_harvest
