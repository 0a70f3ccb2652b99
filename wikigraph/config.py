"""Centralised settings for the WikiGraph converter.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Neo4j graph store
    # ------------------------------------------------------------------
    neo4j_uri: str = field(
        default_factory=lambda: os.environ.get("NEO4J_URI", "bolt://localhost:7687")
    )
    neo4j_user: str = field(
        default_factory=lambda: os.environ.get("NEO4J_USER", "neo4j")
    )
    neo4j_password: str = field(
        default_factory=lambda: os.environ.get("NEO4J_PASSWORD", "neo4j")
    )
    neo4j_database: Optional[str] = field(
        default_factory=lambda: os.environ.get("NEO4J_DATABASE") or None
    )
    init_schema_on_startup: bool = field(
        default_factory=lambda: _env_flag("WIKIGRAPH_INIT_SCHEMA")
    )

    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "WIKIGRAPH_USER_AGENT",
            "WikiGraphConverterBot/0.1 (+https://example.com)",
        )
    )
    referrer: str = field(
        default_factory=lambda: os.environ.get("WIKIGRAPH_REFERRER", "https://www.google.com")
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "15.0"))
    )

    # ------------------------------------------------------------------
    # Link extraction
    # ------------------------------------------------------------------
    allowed_domain: str = field(
        default_factory=lambda: os.environ.get("WIKIGRAPH_ALLOWED_DOMAIN", "wikipedia.org")
    )
    max_links: int = field(
        default_factory=lambda: int(os.environ.get("WIKIGRAPH_MAX_LINKS", "200"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )


# Module-level singleton; import this everywhere:
#   from wikigraph.config import settings
settings = Settings()
