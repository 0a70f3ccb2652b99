"""Tests for the /api/convert endpoint.

The app runs through the FastAPI TestClient with ``get_driver`` patched to
return a ``FakeDriver`` and ``fetch_page`` patched to return canned HTML, so
no network or Neo4j server is involved.
"""

from __future__ import annotations

from typing import Generator
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from fake_neo4j import FakeDriver
from wikigraph.api.app import create_app
from wikigraph.errors import FetchError
from wikigraph.scraper.models import RawPage


_URL = "https://en.wikipedia.org/wiki/Graph_theory"

_HTML = """\
<html>
<head><title>Graph theory - Wikipedia</title></head>
<body>
  <a href="/wiki/Vertex_(graph_theory)">vertex</a>
  <a href="/wiki/Edge_(graph_theory)">edge</a>
  <a href="/wiki/Special:Random">random</a>
  <a href="/wiki/Leonhard_Euler">Euler</a>
</body>
</html>
"""


def _fake_fetch(url: str) -> RawPage:
    return RawPage(url=url, html=_HTML, status_code=200, content_type="text/html")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture()
def client(driver: FakeDriver) -> Generator[TestClient, None, None]:
    """TestClient whose lifespan opens the in-memory fake driver."""
    app = create_app()
    with patch("wikigraph.api.app.get_driver", return_value=driver), \
            patch("wikigraph.convert.fetch_page", side_effect=_fake_fetch) as fetch:
        with TestClient(app, raise_server_exceptions=True) as c:
            c.fetch = fetch  # type: ignore[attr-defined]
            yield c


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestConvertSuccess:
    def test_fresh_store(self, client: TestClient) -> None:
        resp = client.post("/api/convert", json={"url": _URL})

        assert resp.status_code == 200
        assert resp.json() == {
            "status": "SUCCESS",
            "message": "Conversion completed",
            "summary": {"nodesCreated": 4, "relationshipsCreated": 3, "title": "Graph theory"},
        }

    def test_repeat_reports_zero(self, client: TestClient) -> None:
        client.post("/api/convert", json={"url": _URL})
        resp = client.post("/api/convert", json={"url": _URL})

        assert resp.status_code == 200
        summary = resp.json()["summary"]
        assert summary["nodesCreated"] == 0
        assert summary["relationshipsCreated"] == 0

    def test_driver_closed_on_shutdown(self, driver: FakeDriver) -> None:
        with patch("wikigraph.api.app.get_driver", return_value=driver):
            with TestClient(create_app()):
                assert not driver.closed
        assert driver.closed


class TestConvertValidation:
    def test_http_scheme_rejected_without_fetch(self, client: TestClient) -> None:
        resp = client.post("/api/convert", json={"url": "http://en.wikipedia.org/wiki/Graph_theory"})

        assert resp.status_code == 400
        assert resp.json() == {"status": "ERROR", "message": "url must use https scheme"}
        client.fetch.assert_not_called()  # type: ignore[attr-defined]

    def test_foreign_host_rejected(self, client: TestClient) -> None:
        resp = client.post("/api/convert", json={"url": "https://example.com/wiki/Graph_theory"})
        assert resp.status_code == 400
        assert resp.json()["status"] == "ERROR"
        assert "summary" not in resp.json()

    def test_blank_url_rejected(self, client: TestClient) -> None:
        resp = client.post("/api/convert", json={"url": "   "})
        assert resp.status_code == 400
        assert resp.json() == {"status": "ERROR", "message": "url must not be blank"}

    def test_non_http_url_rejected(self, client: TestClient) -> None:
        resp = client.post("/api/convert", json={"url": "ftp://en.wikipedia.org/wiki/X"})
        assert resp.status_code == 400
        assert resp.json() == {"status": "ERROR", "message": "url must start with http:// or https://"}

    def test_missing_url_rejected(self, client: TestClient) -> None:
        resp = client.post("/api/convert", json={})
        assert resp.status_code == 400
        body = resp.json()
        assert body["status"] == "ERROR"
        assert body["message"].startswith("url:")


class TestConvertServerErrors:
    def test_fetch_failure_is_500(self, client: TestClient) -> None:
        client.fetch.side_effect = FetchError(  # type: ignore[attr-defined]
            f"Failed to fetch URL (503): {_URL}", reason="status", status_code=503
        )
        resp = client.post("/api/convert", json={"url": _URL})

        assert resp.status_code == 500
        assert resp.json() == {
            "status": "ERROR",
            "message": f"Parsing error: Failed to fetch URL (503): {_URL}",
        }

    def test_persist_failure_is_500(self, client: TestClient, driver: FakeDriver) -> None:
        driver.fail_on_run = 1
        resp = client.post("/api/convert", json={"url": _URL})

        assert resp.status_code == 500
        message = resp.json()["message"]
        assert message.startswith("Neo4j write error: Failed to write graph to Neo4j:")
        assert "Traceback" not in message


class TestHealth:
    def test_ok(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}
