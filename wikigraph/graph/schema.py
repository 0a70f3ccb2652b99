"""Graph schema bootstrap.

``init_schema(driver)`` is idempotent; every statement uses ``IF NOT EXISTS``
so calling it on an already initialised database is safe.
"""

from __future__ import annotations

import logging
from typing import Optional

from neo4j import Driver

from wikigraph.config import settings

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS: list[str] = [
    "CREATE CONSTRAINT page_url IF NOT EXISTS FOR (p:Page) REQUIRE p.url IS UNIQUE",
]


def init_schema(driver: Driver, database: Optional[str] = None) -> None:
    """Create the ``Page.url`` uniqueness constraint if it is missing."""
    with driver.session(database=database or settings.neo4j_database) as session:
        for statement in SCHEMA_STATEMENTS:
            session.run(statement).consume()
    logger.info("Graph schema ready (%d statements)", len(SCHEMA_STATEMENTS))
