"""Pytest configuration and fixtures."""

from typing import Any

import pytest

from asana_hooks.api.auth import AuthContext
from asana_hooks.api.client import ResourceClient
from asana_hooks.api.request import RequestDescriptor
from asana_hooks.api.transport import NotFoundError
from asana_hooks.config.settings import DEFAULT_BASE_URL, reset_settings


class FakeTransport:
    """Transport answering from canned responses and recording every request."""

    def __init__(self):
        self.routes: dict[tuple[str, str], Any] = {}
        self.requests: list[RequestDescriptor] = []

    def add(self, path: str, response: Any, method: str = "GET") -> None:
        self.routes[(method, path)] = response

    def paths(self) -> list[str]:
        return [self.path_of(request) for request in self.requests]

    @staticmethod
    def path_of(request: RequestDescriptor) -> str:
        return request.url[len(DEFAULT_BASE_URL) + 1:]

    async def __call__(self, request: RequestDescriptor) -> Any:
        self.requests.append(request)
        key = (request.method, self.path_of(request))
        if key not in self.routes:
            raise NotFoundError(
                f"API request failed: status=404, url={request.url}",
                status_code=404,
                body={"errors": [{"message": "Not Found"}]},
            )

        response = self.routes[key]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(request)
        return response


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from the developer's environment."""
    for name in ("ASANA_ACCESS_TOKEN", "ASANA_WEBHOOK_SECRET", "ASANA_REFRESH_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def auth():
    """Auth context with a fixed token and webhook secret."""
    return AuthContext(access_token="test-token", secret="hook-secret")


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(auth, transport):
    """ResourceClient wired to the fake transport."""
    return ResourceClient(auth, transport=transport)
