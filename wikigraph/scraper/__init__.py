"""Scraper package — URL validation, page fetch & link extraction."""

from wikigraph.scraper.extractor import extract_page, parse_html
from wikigraph.scraper.fetcher import fetch_page
from wikigraph.scraper.models import ExtractedPage, RawPage
from wikigraph.scraper.validator import validate_url

__all__ = [
    "validate_url",
    "fetch_page",
    "parse_html",
    "extract_page",
    "RawPage",
    "ExtractedPage",
]
