"""Tests for the HTTP cause reference source."""

import asyncio

import httpx
import pytest

from philanthropy_scraper.classifier import DEFAULT_CAUSES_URL, HttpCauseSource, StaticCauseSource
from philanthropy_scraper.classifier.source import parse_causes_envelope
from philanthropy_scraper.errors import ReferenceFetchError


def make_source(handler, attempts: int = 3) -> HttpCauseSource:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpCauseSource(DEFAULT_CAUSES_URL, client=client, attempts=attempts, backoff=0)


class TestParseCausesEnvelope:
    """Tests for parse_causes_envelope."""

    def test_parses_names(self) -> None:
        payload = {"data": [{"id": 1, "name": "Health"}, {"id": 2, "name": "Science"}]}
        assert [c.name for c in parse_causes_envelope(payload)] == ["Health", "Science"]

    def test_empty_data_is_valid(self) -> None:
        assert parse_causes_envelope({"data": []}) == []

    def test_missing_data_raises(self) -> None:
        with pytest.raises(ReferenceFetchError, match="no 'data' list"):
            parse_causes_envelope({"results": []})

    def test_null_body_raises(self) -> None:
        with pytest.raises(ReferenceFetchError):
            parse_causes_envelope(None)

    def test_entry_without_name_raises(self) -> None:
        with pytest.raises(ReferenceFetchError, match="entry 1"):
            parse_causes_envelope({"data": [{"name": "Health"}, {"id": 7}]})


class TestHttpCauseSource:
    """Tests for HttpCauseSource with a mocked transport."""

    def test_fetch_success(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert str(request.url) == DEFAULT_CAUSES_URL
            return httpx.Response(200, json={"data": [{"name": "Health"}]})

        causes = asyncio.run(make_source(handler).fetch())
        assert [c.name for c in causes] == ["Health"]

    def test_retries_then_succeeds(self) -> None:
        """Server errors are retried."""
        calls = {"n": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["n"] += 1
            if calls["n"] < 3:
                return httpx.Response(503)
            return httpx.Response(200, json={"data": [{"name": "Food"}]})

        causes = asyncio.run(make_source(handler, attempts=3).fetch())
        assert [c.name for c in causes] == ["Food"]
        assert calls["n"] == 3

    def test_exhausted_retries_raise(self) -> None:
        calls = {"n": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["n"] += 1
            return httpx.Response(500)

        with pytest.raises(ReferenceFetchError, match="HTTP 500"):
            asyncio.run(make_source(handler, attempts=2).fetch())
        assert calls["n"] == 2

    def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ReferenceFetchError, match="after 2 attempt"):
            asyncio.run(make_source(handler, attempts=2).fetch())

    def test_redirect_loop_raises(self) -> None:
        """Request errors other than transport failures are still wrapped."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(302, headers={"Location": DEFAULT_CAUSES_URL})

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)
        source = HttpCauseSource(DEFAULT_CAUSES_URL, client=client, attempts=1, backoff=0)
        with pytest.raises(ReferenceFetchError, match="TooManyRedirects") as exc_info:
            asyncio.run(source.fetch())
        assert isinstance(exc_info.value.__cause__, httpx.TooManyRedirects)

    def test_bad_shape_not_retried(self) -> None:
        calls = {"n": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["n"] += 1
            return httpx.Response(200, json={"unexpected": True})

        with pytest.raises(ReferenceFetchError):
            asyncio.run(make_source(handler).fetch())
        assert calls["n"] == 1

    def test_non_json_body_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        with pytest.raises(ReferenceFetchError, match="not JSON"):
            asyncio.run(make_source(handler).fetch())


class TestStaticCauseSource:
    """Tests for StaticCauseSource."""

    def test_returns_copy(self) -> None:
        source = StaticCauseSource(["Health"])
        first = asyncio.run(source.fetch())
        first.clear()
        assert [c.name for c in asyncio.run(source.fetch())] == ["Health"]
