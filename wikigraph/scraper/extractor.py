"""Title and internal-link extraction for Wikipedia article HTML."""

from __future__ import annotations

import logging
from typing import List, Optional
from urllib.parse import urlsplit

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from wikigraph.config import settings
from wikigraph.errors import ParseError
from wikigraph.scraper.models import ExtractedPage, RawPage

logger = logging.getLogger(__name__)

WIKI_PREFIX = "/wiki/"
TITLE_SUFFIX = " - Wikipedia"

# Non-article namespaces; matched case-sensitively against the path after /wiki/.
EXCLUDED_NAMESPACES = (
    "Special:", "Help:", "File:", "Category:", "Portal:", "Talk:", "Template:",
    "Template_talk:", "User:", "User_talk:", "Wikipedia:", "Wikipedia_talk:",
    "Draft:", "TimedText:", "Module:", "Book:", "Education_Program:", "Gadget:",
    "Gadget_definition:", "MediaWiki:", "MediaWiki_talk:",
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _collapse(text: str) -> str:
    return " ".join(text.split())


def _extract_title(soup: BeautifulSoup) -> str:
    """Return the ``h1#firstHeading`` text, else the ``<title>`` minus the site suffix."""
    heading = soup.select_one("h1#firstHeading")
    if heading is not None:
        text = _collapse(heading.get_text(" "))
        if text:
            return text

    if soup.title is None:
        return ""
    text = _collapse(soup.title.get_text())
    if text.endswith(TITLE_SUFFIX):
        text = text[: -len(TITLE_SUFFIX)]
    return text.strip()


def _is_excluded_namespace(path_part: str) -> bool:
    if not path_part.strip():
        return True
    return path_part.startswith(EXCLUDED_NAMESPACES)


def _normalise_href(href: Optional[str]) -> Optional[str]:
    """Strip the fragment from *href*; ``None`` when nothing usable remains."""
    if href is None or not href.strip() or href.startswith("#"):
        return None
    href = href.split("#", 1)[0]
    return href if href.strip() else None


def _extract_links(
    soup: BeautifulSoup,
    page_url: str,
    max_links: int,
    allowed_domain: str,
) -> List[str]:
    """Return unique absolute article URLs, in document order, capped at *max_links*."""
    parts = urlsplit(page_url)
    origin = f"{parts.scheme}://{parts.hostname}"

    seen: dict[str, None] = {}
    for anchor in soup.select('a[href^="/wiki/"]'):
        if len(seen) >= max_links:
            break

        href = _normalise_href(anchor.get("href"))
        if href is None:
            continue

        path_part = href[len(WIKI_PREFIX):] if href.startswith(WIKI_PREFIX) else href
        if _is_excluded_namespace(path_part):
            logger.debug("Skipping non-article link %s", href)
            continue

        absolute = origin + href
        if allowed_domain.lower() not in absolute.lower():
            continue

        seen.setdefault(absolute, None)

    return list(seen)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_html(raw: RawPage) -> BeautifulSoup:
    """Parse the fetched HTML into a document.

    Raises:
        ParseError: If the parser rejects the markup outright.
    """
    try:
        return BeautifulSoup(raw.html, "html.parser")
    except ParserRejectedMarkup as exc:
        raise ParseError(f"Could not parse HTML from {raw.url}: {exc}") from exc


def extract_page(
    soup: BeautifulSoup,
    page_url: str,
    max_links: Optional[int] = None,
    allowed_domain: Optional[str] = None,
) -> ExtractedPage:
    """Extract the title and internal article links from *soup*.

    Never fails on missing content: a page without a heading, title or links
    yields an empty title and an empty link list.
    """
    title = _extract_title(soup)
    links = _extract_links(
        soup,
        page_url,
        max_links if max_links is not None else settings.max_links,
        allowed_domain or settings.allowed_domain,
    )
    return ExtractedPage(url=page_url, title=title, links=links)
