"""Graph store package.

Public re-exports so callers can write::

    from wikigraph.graph import get_driver, write_graph
"""

from wikigraph.graph.connection import close_driver, get_driver
from wikigraph.graph.models import GraphCounters, PageRef
from wikigraph.graph.schema import init_schema
from wikigraph.graph.writer import derive_title, write_graph

__all__ = [
    "get_driver",
    "close_driver",
    "init_schema",
    "write_graph",
    "derive_title",
    "GraphCounters",
    "PageRef",
]
