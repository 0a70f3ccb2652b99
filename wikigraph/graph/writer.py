"""Idempotent writes of a page and its outgoing links into Neo4j.

Semantics:

- ``MERGE`` a ``:Page`` node for the main URL; a new node takes the given
  title, an existing node keeps its title unless it has none.
- For each linked URL, ``MERGE`` a ``:Page`` node the same way, using a
  title derived from the URL slug.
- ``MERGE`` a ``LINKS_TO`` relationship from the main page to each linked
  page.

All statements of one call run in a single explicit write transaction: they
commit together or not at all.  Nodes and relationships are keyed by URL, so
repeating a call against a store that already holds its result creates
nothing new.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional
from urllib.parse import unquote, urlsplit

from neo4j import Driver, ManagedTransaction, Transaction
from neo4j.exceptions import DriverError, Neo4jError

from wikigraph.config import settings
from wikigraph.errors import PersistError
from wikigraph.graph.models import GraphCounters, PageRef

logger = logging.getLogger(__name__)

MERGE_PAGE = """
MERGE (p:Page {url: $url})
ON CREATE SET p.title = $title
ON MATCH SET p.title = coalesce(p.title, $title)
"""

MERGE_LINK = """
MATCH (p:Page {url: $main_url})
MATCH (l:Page {url: $linked_url})
MERGE (p)-[:LINKS_TO]->(l)
"""


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def derive_title(url: Optional[str]) -> Optional[str]:
    """Turn the last path segment of *url* into a readable title.

    ``https://en.wikipedia.org/wiki/Alan_Turing`` becomes ``"Alan Turing"``.
    Returns ``None`` (not ``""``) when no title can be derived so that an
    existing title survives the ``coalesce`` on match.
    """
    if url is None or not url.strip():
        return None
    try:
        path = urlsplit(url).path
    except ValueError:
        return None
    if not path.strip():
        return None

    slug = unquote(path.rsplit("/", 1)[-1])
    candidate = slug.replace("_", " ").strip()
    if not candidate:
        return None
    return candidate[0].upper() + candidate[1:]


def _counters(summary) -> GraphCounters:  # type: ignore[no-untyped-def]
    counters = getattr(summary, "counters", None)
    if counters is None:
        return GraphCounters()
    return GraphCounters(
        nodes_created=counters.nodes_created,
        relationships_created=counters.relationships_created,
    )


def _merge_page(tx: Transaction | ManagedTransaction, page: PageRef) -> GraphCounters:
    summary = tx.run(MERGE_PAGE, url=page.url, title=page.title).consume()
    return _counters(summary)


def _merge_link(tx: Transaction | ManagedTransaction, main_url: str, linked_url: str) -> GraphCounters:
    summary = tx.run(MERGE_LINK, main_url=main_url, linked_url=linked_url).consume()
    return _counters(summary)


def write_page_links(
    tx: Transaction | ManagedTransaction,
    main: PageRef,
    linked_urls: Iterable[str],
) -> GraphCounters:
    """Issue every MERGE for one page inside *tx*, in link order.

    Returns the counters summed over all statements.
    """
    total = _merge_page(tx, main)
    for linked_url in linked_urls:
        total += _merge_page(tx, PageRef(url=linked_url, title=derive_title(linked_url)))
        total += _merge_link(tx, main.url, linked_url)
    return total


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def write_graph(
    driver: Driver,
    main_url: str,
    main_title: Optional[str],
    linked_urls: Optional[Iterable[str]],
    database: Optional[str] = None,
) -> GraphCounters:
    """Upsert *main_url* and its links in one atomic write transaction.

    The transaction is attempted once; it is not retried on transient errors.

    Raises:
        PersistError: If the session or transaction fails for any reason.
            Nothing from this call is committed in that case.
    """
    links = list(linked_urls or [])
    main = PageRef(url=main_url, title=main_title)

    try:
        with driver.session(database=database or settings.neo4j_database) as session:
            with session.begin_transaction() as tx:
                counters = write_page_links(tx, main, links)
                tx.commit()
    except (Neo4jError, DriverError) as exc:
        raise PersistError(f"Failed to write graph to Neo4j: {exc}") from exc

    logger.debug(
        "Wrote %s with %d links: %d nodes, %d relationships created",
        main_url, len(links), counters.nodes_created, counters.relationships_created,
    )
    return counters
