"""FastAPI application factory.

Lifespan
--------
On startup the app opens a single Neo4j driver (shared across all requests
via ``request.app.state.driver``) and, when ``WIKIGRAPH_INIT_SCHEMA`` is set,
creates the graph constraints.  On shutdown it closes the driver.

Routers
-------
    /api/convert  — Wikipedia page → Neo4j graph conversion
    /health       — liveness probe
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from wikigraph.config import settings
from wikigraph.graph import close_driver, get_driver, init_schema
from wikigraph.logging_setup import configure_logging

from wikigraph.api.routers import convert as convert_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the Neo4j driver on startup and close it on shutdown."""
    configure_logging()
    driver = get_driver()
    if settings.init_schema_on_startup:
        init_schema(driver)
    app.state.driver = driver
    try:
        yield
    finally:
        close_driver(app.state.driver)


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="WikiGraph API",
        description=(
            "Converts a Wikipedia article into Neo4j graph data: one Page node "
            "per article and a LINKS_TO relationship for each internal link."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, convert_router.request_validation_handler)
    app.include_router(convert_router.router, prefix="/api", tags=["conversion"])

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Module-level instance used by uvicorn:
#   uvicorn wikigraph.api.app:app --reload
app = create_app()
