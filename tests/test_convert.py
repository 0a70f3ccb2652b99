"""Tests for the conversion pipeline (validate → fetch → extract → write).

The fetcher is replaced with a stub returning canned HTML (or ``respx``
where the real ``fetch_page`` is exercised) and the Neo4j driver with
``FakeDriver``.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import httpx
import pytest
import respx

from fake_neo4j import FakeDriver
from wikigraph.convert import (
    ConversionFailure,
    ConversionSuccess,
    convert_page,
    extract_from_url,
)
from wikigraph.errors import FetchError, Stage, ValidationError
from wikigraph.scraper.models import RawPage


_URL = "https://en.wikipedia.org/wiki/Graph_theory"

_HTML = """\
<html>
<head><title>Graph theory - Wikipedia</title></head>
<body>
  <a href="/wiki/Vertex_(graph_theory)">vertex</a>
  <a href="/wiki/Edge_(graph_theory)">edge</a>
  <a href="/wiki/Help:Contents">help</a>
  <a href="/wiki/Leonhard_Euler#Life">Euler</a>
  <a href="/wiki/Leonhard_Euler">Euler again</a>
</body>
</html>
"""


def _stub_fetch(html: str = _HTML):
    calls: list[str] = []

    def fetch(url: str) -> RawPage:
        calls.append(url)
        return RawPage(url=url, html=html, status_code=200, content_type="text/html")

    fetch.calls = calls  # type: ignore[attr-defined]
    return fetch


@pytest.fixture()
def driver() -> FakeDriver:
    return FakeDriver()


# ---------------------------------------------------------------------------
# extract_from_url
# ---------------------------------------------------------------------------

class TestExtractFromUrl:
    def test_returns_title_and_links(self) -> None:
        page = extract_from_url(_URL, fetch=_stub_fetch())
        assert page.title == "Graph theory"
        assert len(page.links) == 3

    def test_validation_happens_before_fetch(self) -> None:
        fetch = _stub_fetch()
        with pytest.raises(ValidationError):
            extract_from_url("http://en.wikipedia.org/wiki/Graph_theory", fetch=fetch)
        assert fetch.calls == []


# ---------------------------------------------------------------------------
# convert_page
# ---------------------------------------------------------------------------

class TestConvertPage:
    def test_success_on_empty_store(self, driver: FakeDriver) -> None:
        outcome = convert_page(_URL, driver, fetch=_stub_fetch())

        assert outcome == ConversionSuccess(
            url=_URL,
            title="Graph theory",
            link_count=3,
            nodes_created=4,
            relationships_created=3,
        )
        assert outcome.ok is True
        assert driver.graph.nodes["https://en.wikipedia.org/wiki/Leonhard_Euler"] == "Leonhard Euler"

    def test_second_run_creates_nothing(self, driver: FakeDriver) -> None:
        convert_page(_URL, driver, fetch=_stub_fetch())
        outcome = convert_page(_URL, driver, fetch=_stub_fetch())

        assert isinstance(outcome, ConversionSuccess)
        assert outcome.nodes_created == 0
        assert outcome.relationships_created == 0

    def test_scheme_failure_skips_fetch(self, driver: FakeDriver) -> None:
        fetch = _stub_fetch()
        outcome = convert_page("http://en.wikipedia.org/wiki/Graph_theory", driver, fetch=fetch)

        assert outcome == ConversionFailure(
            stage=Stage.VALIDATION, message="url must use https scheme", reason="scheme"
        )
        assert outcome.ok is False
        assert fetch.calls == []
        assert driver.transactions == []

    def test_host_failure(self, driver: FakeDriver) -> None:
        outcome = convert_page("https://example.com/wiki/Graph_theory", driver, fetch=_stub_fetch())
        assert isinstance(outcome, ConversionFailure)
        assert outcome.reason == "host"

    def test_fetch_failure_skips_write(self, driver: FakeDriver) -> None:
        def failing_fetch(url: str) -> RawPage:
            raise FetchError(f"Failed to fetch URL (404): {url}", reason="status", status_code=404)

        outcome = convert_page(_URL, driver, fetch=failing_fetch)

        assert isinstance(outcome, ConversionFailure)
        assert outcome.stage is Stage.FETCH
        assert outcome.message == f"Failed to fetch URL (404): {_URL}"
        assert driver.transactions == []

    def test_real_fetcher_network_error(self, driver: FakeDriver) -> None:
        with respx.mock:
            respx.get(_URL).mock(side_effect=httpx.ConnectTimeout)
            outcome = convert_page(_URL, driver)

        assert isinstance(outcome, ConversionFailure)
        assert outcome.stage is Stage.FETCH
        assert outcome.reason == "network"

    def test_empty_page_still_succeeds(self, driver: FakeDriver) -> None:
        outcome = convert_page(_URL, driver, fetch=_stub_fetch("<html></html>"))

        assert isinstance(outcome, ConversionSuccess)
        assert outcome.title == ""
        assert outcome.link_count == 0
        assert outcome.nodes_created == 1

    def test_persist_failure_is_reported(self) -> None:
        failing = FakeDriver(fail_on_run=2)
        outcome = convert_page(_URL, failing, fetch=_stub_fetch())

        assert isinstance(outcome, ConversionFailure)
        assert outcome.stage is Stage.PERSIST
        assert outcome.message.startswith("Failed to write graph to Neo4j:")
        assert failing.graph.nodes == {}

    def test_unexpected_errors_propagate(self) -> None:
        broken = MagicMock()
        broken.session.side_effect = RuntimeError("bug")
        with pytest.raises(RuntimeError):
            convert_page(_URL, broken, fetch=_stub_fetch())
