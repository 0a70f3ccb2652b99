"""Logging bootstrap shared by the API and the CLI."""

from __future__ import annotations

import logging
from typing import Optional

from wikigraph.config import settings

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a single stream handler to the ``wikigraph`` logger.

    Safe to call more than once; the handler is only installed the first time.
    """
    root = logging.getLogger("wikigraph")
    root.setLevel((level or settings.log_level).upper())
    if not any(getattr(h, "_wikigraph", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._wikigraph = True  # type: ignore[attr-defined]
        root.addHandler(handler)
