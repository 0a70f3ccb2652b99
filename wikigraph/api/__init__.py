"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from wikigraph.api import app

    uvicorn wikigraph.api:app --reload
"""

from wikigraph.api.app import app

__all__ = ["app"]
