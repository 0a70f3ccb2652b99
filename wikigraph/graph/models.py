"""Value types exchanged with the graph layer.

These are plain Python objects, not ORM models.  Identity of a page node is
its URL; the title is informational only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PageRef:
    url: str
    title: Optional[str] = None


@dataclass(frozen=True)
class GraphCounters:
    """Creation counters summed over the statements of one write."""

    nodes_created: int = 0
    relationships_created: int = 0

    def __add__(self, other: "GraphCounters") -> "GraphCounters":
        return GraphCounters(
            nodes_created=self.nodes_created + other.nodes_created,
            relationships_created=self.relationships_created + other.relationships_created,
        )
