# tests/test_client.py
from __future__ import annotations

import pytest
import requests

from pqlbench.client import HTTPClient, format_rfc3339, get_scheme
from pqlbench.executor import Failure, Success
from pqlbench.queries import Query


class FakeResponse:
    def __init__(self, status_code: int):
        self.status_code = status_code
        self.closed = False

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """Stands in for requests.Session; records every GET."""

    def __init__(self, status_code: int = 200, exc: Exception | None = None):
        self.status_code = status_code
        self.exc = exc
        self.calls: list[tuple[str, float]] = []
        self.closed = False

    def get(self, url: str, timeout: float) -> FakeResponse:
        self.calls.append((url, timeout))
        if self.exc is not None:
            raise self.exc
        return FakeResponse(self.status_code)

    def close(self) -> None:
        self.closed = True


QUERY = Query(text="some query", start_ms=100000, end_ms=999999, step=50)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("https://example.xyz", "https://"),
        ("ftp://example.xyz", "ftp://"),
        ("http://example.xyz", "http://"),
        ("://example.xyz", None),
        ("example.xyz", None),
        ("htp://example.xyz", None),
    ],
)
def test_get_scheme(text: str, expected: str | None) -> None:
    assert get_scheme(text) == expected


@pytest.mark.parametrize(
    "host, scheme, netloc",
    [
        ("http://localhost:9201", "http", "localhost:9201"),
        ("https://promscale.xyz", "https", "promscale.xyz"),
        ("promscale.xyz", "https", "promscale.xyz"),
        ("ftp://promscale.xyz/", "ftp", "promscale.xyz"),
    ],
)
def test_host_scheme_split(host: str, scheme: str, netloc: str) -> None:
    client = HTTPClient(host, session=FakeSession())

    assert client.scheme == scheme
    assert client.host == netloc


def test_format_rfc3339_truncates_to_seconds() -> None:
    assert format_rfc3339(0) == "1970-01-01T00:00:00Z"
    assert format_rfc3339(100999) == "1970-01-01T00:01:40Z"
    assert format_rfc3339(1597056698698) == "2020-08-10T10:51:38Z"


def test_build_url() -> None:
    client = HTTPClient("promscale.xyz", session=FakeSession())

    url = client.build_url(QUERY)

    assert url == (
        "https://promscale.xyz/api/v1/query_range"
        "?end=1970-01-01T00%3A16%3A39Z"
        "&query=some+query"
        "&start=1970-01-01T00%3A01%3A40Z"
        "&step=50"
    )


def test_build_url_uses_api_version() -> None:
    client = HTTPClient("http://localhost:9201", version="v2", session=FakeSession())

    assert client.build_url(QUERY).startswith(
        "http://localhost:9201/api/v2/query_range?"
    )


def test_execute_success_measures_window() -> None:
    session = FakeSession(status_code=200)
    client = HTTPClient("http://localhost:9201", timeout=1.5, session=session)

    outcome = client.execute(QUERY)

    assert isinstance(outcome, Success)
    assert outcome.query == QUERY
    assert outcome.end_ms >= outcome.start_ms
    assert outcome.elapsed_ms >= 0
    assert session.calls == [(client.build_url(QUERY), 1.5)]


@pytest.mark.parametrize("status", [201, 204, 400, 404, 500, 503])
def test_execute_non_200_is_failure(status: int) -> None:
    client = HTTPClient("http://localhost:9201", session=FakeSession(status_code=status))

    outcome = client.execute(QUERY)

    assert isinstance(outcome, Failure)
    assert str(status) in outcome.cause
    assert outcome.query == QUERY


@pytest.mark.parametrize(
    "exc",
    [
        requests.ConnectionError("connection refused"),
        requests.Timeout("read timed out"),
    ],
)
def test_execute_transport_error_is_failure(exc: Exception) -> None:
    session = FakeSession(exc=exc)
    client = HTTPClient("http://localhost:9201", session=session)

    outcome = client.execute(QUERY)

    assert isinstance(outcome, Failure)
    assert "sending request to server" in outcome.cause
    assert len(session.calls) == 1


def test_context_manager_closes_session() -> None:
    session = FakeSession()

    with HTTPClient("localhost", session=session) as client:
        client.execute(QUERY)

    assert session.closed
