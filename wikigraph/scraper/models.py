"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int
    content_type: Optional[str] = None


@dataclass
class ExtractedPage:
    """Title and internal article links found on a Wikipedia page.

    ``links`` holds absolute URLs, unique and in first-seen document order.
    """

    url: str
    title: str
    links: List[str] = field(default_factory=list)
