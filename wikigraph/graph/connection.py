"""Neo4j driver factory.

Usage::

    from wikigraph.graph.connection import get_driver, close_driver

    driver = get_driver()
    try:
        ...
    finally:
        close_driver(driver)
"""

from __future__ import annotations

import logging
from typing import Optional

from neo4j import Driver, GraphDatabase
from neo4j.exceptions import DriverError

from wikigraph.config import settings

logger = logging.getLogger(__name__)


def get_driver(
    uri: Optional[str] = None,
    user: Optional[str] = None,
    password: Optional[str] = None,
) -> Driver:
    """Create a Neo4j driver using basic auth.

    Arguments default to the values in :data:`wikigraph.config.settings`.
    The driver connects lazily; no network traffic happens here.
    """
    return GraphDatabase.driver(
        uri or settings.neo4j_uri,
        auth=(user or settings.neo4j_user, password or settings.neo4j_password),
    )


def close_driver(driver: Optional[Driver]) -> None:
    """Close *driver*, ignoring errors raised while shutting down."""
    if driver is None:
        return
    try:
        driver.close()
    except (DriverError, OSError) as exc:
        logger.debug("Ignoring error while closing Neo4j driver: %s", exc)
