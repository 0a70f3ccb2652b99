"""Conversion pipeline — Wikipedia URL to page graph.

``convert_page`` runs the stages in order and stops at the first failure:

    validate → fetch → parse/extract → write graph

Each stage raises a :class:`~wikigraph.errors.ConversionError` subclass;
they are turned into a :class:`ConversionFailure` here and nowhere else.
Nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from neo4j import Driver

from wikigraph.errors import ConversionError, Stage
from wikigraph.graph.writer import write_graph
from wikigraph.scraper.extractor import extract_page, parse_html
from wikigraph.scraper.fetcher import fetch_page
from wikigraph.scraper.models import ExtractedPage, RawPage
from wikigraph.scraper.validator import validate_url

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], RawPage]


@dataclass(frozen=True)
class ConversionSuccess:
    url: str
    title: str
    link_count: int
    nodes_created: int
    relationships_created: int

    ok = True


@dataclass(frozen=True)
class ConversionFailure:
    stage: Stage
    message: str
    reason: Optional[str] = None

    ok = False


ConversionOutcome = Union[ConversionSuccess, ConversionFailure]


def extract_from_url(url: str, fetch: Optional[Fetcher] = None) -> ExtractedPage:
    """Validate, fetch and extract *url* without touching the graph store.

    Validation happens before any network access.

    Raises:
        ValidationError, FetchError, ParseError: From the failing stage.
    """
    validate_url(url)
    raw = (fetch or fetch_page)(url)
    soup = parse_html(raw)
    return extract_page(soup, url)


def convert_page(
    url: str,
    driver: Driver,
    fetch: Optional[Fetcher] = None,
    database: Optional[str] = None,
) -> ConversionOutcome:
    """Convert one Wikipedia article into ``:Page`` nodes and ``LINKS_TO`` edges.

    Args:
        url: The article URL as supplied by the caller.
        driver: Open Neo4j driver.
        fetch: Page fetcher; replaced in tests.
        database: Neo4j database name (server default when omitted).

    Returns:
        A :class:`ConversionSuccess` with the page title and the counters of
        this call, or a :class:`ConversionFailure` naming the failed stage.
    """
    logger.info("Converting %s", url)
    try:
        page = extract_from_url(url, fetch=fetch)
        counters = write_graph(driver, url, page.title, page.links, database=database)
    except ConversionError as exc:
        logger.warning("Conversion of %s failed at %s: %s", url, exc.stage.value, exc.message)
        logger.debug("Failure detail", exc_info=True)
        return ConversionFailure(stage=exc.stage, message=exc.message, reason=exc.reason)

    logger.info(
        "Converted %s (%r): %d links, %d nodes created, %d relationships created",
        url, page.title, len(page.links),
        counters.nodes_created, counters.relationships_created,
    )
    return ConversionSuccess(
        url=url,
        title=page.title,
        link_count=len(page.links),
        nodes_created=counters.nodes_created,
        relationships_created=counters.relationships_created,
    )
