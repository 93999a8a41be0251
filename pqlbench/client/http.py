from __future__ import annotations

import logging
import re
import time
from datetime import datetime, timezone
from urllib.parse import urlencode, urlunsplit

import requests

from pqlbench.executor import Failure, Outcome, Success
from pqlbench.queries import Query

logger = logging.getLogger(__name__)

DEFAULT_SCHEME = "https"
DEFAULT_VERSION = "v1"
DEFAULT_TIMEOUT_S = 1.0

_SCHEME_RE = re.compile(r"^((https?|ftp):/)/")


def get_scheme(text: str) -> str | None:
    match = _SCHEME_RE.match(text)
    if match is None:
        return None
    return match.group(0)


def format_rfc3339(epoch_ms: int) -> str:
    # Sub-second precision is dropped
    moment = datetime.fromtimestamp(epoch_ms // 1000, tz=timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class HTTPClient:
    """
    Issues range queries against `{scheme}://{host}/api/{version}/query_range`.

    `host` may carry an explicit `http://`, `https://` or `ftp://` prefix;
    otherwise https is assumed. `execute` is a query executor suitable for
    the dispatcher: it never raises for network or HTTP errors.
    """

    def __init__(
        self,
        host: str,
        *,
        version: str = DEFAULT_VERSION,
        timeout: float = DEFAULT_TIMEOUT_S,
        session: requests.Session | None = None,
    ):
        scheme = DEFAULT_SCHEME
        prefix = get_scheme(host)
        if prefix is not None:
            host = host[len(prefix) :]
            scheme = prefix[: -len("://")]

        self.scheme = scheme
        self.host = host.rstrip("/")
        self.version = version
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    @property
    def path(self) -> str:
        return f"/api/{self.version}/query_range"

    def build_url(self, query: Query) -> str:
        params = {
            "end": format_rfc3339(query.end_ms),
            "query": query.text,
            "start": format_rfc3339(query.start_ms),
            "step": str(query.step),
        }
        return urlunsplit(
            (self.scheme, self.host, self.path, urlencode(sorted(params.items())), "")
        )

    def execute(self, query: Query) -> Outcome:
        url = self.build_url(query)
        logger.debug("GET %s", url)

        start = _now_ms()
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            return Failure(query, f"sending request to server: {exc}")
        finally:
            end = _now_ms()

        response.close()
        if response.status_code != requests.codes.ok:
            return Failure(
                query, f"unexpected response status code: {response.status_code}"
            )

        return Success(query, start, end)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> HTTPClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
