# tests/fakes.py

from __future__ import annotations

import json
from typing import Any
from urllib.parse import urlsplit

import requests


class _Response:
    """The slice of requests.Response that TaskRpcClient uses."""

    def __init__(self, resp) -> None:
        self._resp = resp
        self.status_code = resp.status_code

    def json(self) -> Any:
        return json.loads(self._resp.get_data(as_text=True))


class FlaskTestSession:
    """
    requests.Session stand-in that routes TaskRpcClient calls into a Flask
    test client, so client tests exercise the real router and store.
    """

    def __init__(self, test_client) -> None:
        self._client = test_client
        self.calls: list[tuple[str, str]] = []

    def get(self, url: str, params: dict[str, str] | None = None, timeout: float | None = None) -> _Response:
        path = urlsplit(url).path
        self.calls.append(("GET", path))
        return _Response(self._client.get(path, query_string=params))

    def post(self, url: str, json: Any = None, timeout: float | None = None) -> _Response:
        path = urlsplit(url).path
        self.calls.append(("POST", path))
        return _Response(self._client.post(path, json=json))


class UnreachableSession:
    """Every call fails the way requests does when the server is down."""

    def get(self, url: str, **kwargs: Any):
        raise requests.ConnectionError(f"cannot reach {url}")

    def post(self, url: str, **kwargs: Any):
        raise requests.ConnectionError(f"cannot reach {url}")
