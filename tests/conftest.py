"""Shared pytest fixtures: a canned HTTP API and a clean environment."""

from __future__ import annotations

import json
from collections.abc import Iterator

import httpx
import pytest

from tripwire.http import HttpClient

NOT_FOUND_BODY: bytes = b'{"message": "Not Found"}'


class FakeApi:
    """Serves canned responses through ``httpx.MockTransport`` and records every request."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, bytes] | Exception] = {}
        self.requests: list[httpx.Request] = []
        self._clients: list[HttpClient] = []

    @property
    def calls(self) -> list[str]:
        return [str(request.url) for request in self.requests]

    def add_json(self, url: str, payload: object, *, status: int = 200) -> None:
        self.routes[url] = (status, json.dumps(payload).encode("utf-8"))

    def add_raw(self, url: str, body: bytes, *, status: int = 200) -> None:
        self.routes[url] = (status, body)

    def add_error(self, url: str, error: Exception) -> None:
        self.routes[url] = error

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def client(self, *, timeout_seconds: float = 5.0) -> HttpClient:
        client = HttpClient(timeout_seconds=timeout_seconds, transport=self.transport())
        self._clients.append(client)
        return client

    def close(self) -> None:
        for client in self._clients:
            client.close()

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, content=NOT_FOUND_BODY)
        if isinstance(route, Exception):
            raise route
        status, body = route
        return httpx.Response(status, content=body)


@pytest.fixture
def fake_api() -> Iterator[FakeApi]:
    """Return a fake API whose clients are closed after the test."""
    api = FakeApi()
    yield api
    api.close()


@pytest.fixture(autouse=True)
def _clean_tripwire_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's shell environment out of the tests."""
    for name in ("TRIPWIRE_SKIP", "TRIPWIRE_HTTP_CACHE_TTL_SECONDS", "TRIPWIRE_GITHUB_TOKEN", "GITHUB_TOKEN"):
        monkeypatch.delenv(name, raising=False)
