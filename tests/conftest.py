"""Shared fixtures: a fake screener API served through httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from screener.transport import ApiClient

BASE_URL = "http://screener.test/api"


class FakeServer:
    """Routes ``(method, path)`` to handlers and records every request."""

    def __init__(self):
        self.routes = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, handler):
        """``handler(request)`` returns an httpx.Response (or awaitable of one),
        or raises to simulate a transport failure."""
        self.routes[(method, path)] = handler

    def json(self, method: str, path: str, payload, status: int = 200):
        self.add(method, path, lambda request: httpx.Response(status, json=payload))

    def fail(self, method: str, path: str, exc: Exception):
        def _raise(request):
            raise exc

        self.add(method, path, _raise)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": f"no route {request.url.path}"})
        response = route(request)
        if not isinstance(response, httpx.Response):
            response = await response
        return response

    def client(self) -> ApiClient:
        return ApiClient(BASE_URL, transport=httpx.MockTransport(self.handler), ping_attempts=1)

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture
def server():
    return FakeServer()
