"""Shared fakes for Graph and the identity provider."""

import httpx
import pytest

from onenote_sections import config

GRAPH = "https://graph.microsoft.com/v1.0"


class FakeGraph:
    """In-memory Graph answering by URL path.

    Responses registered for a path are served in order; the last one is
    repeated once the queue is down to it.
    """

    def __init__(self):
        self.routes: dict[str, list[httpx.Response]] = {}
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def add(self, path: str, *responses: httpx.Response) -> None:
        self.routes.setdefault(path, []).extend(responses)

    def paths(self) -> list[str]:
        return [req.url.path for req in self.requests]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get(request.url.path)
        if not queue:
            return httpx.Response(418, text=f"no route for {request.url.path}")
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        return httpx.Response(response.status_code, headers=response.headers, content=response.content)


class FakeExchanger:
    """Stands in for TokenExchanger; records every exchanged assertion."""

    def __init__(self, token="graph-token", error=None):
        self.token = token
        self.error = error
        self.calls: list[str] = []

    async def exchange(self, user_assertion: str) -> str:
        self.calls.append(user_assertion)
        if self.error:
            raise self.error
        return self.token


def listing(*items):
    return httpx.Response(200, json={"value": list(items)})


@pytest.fixture
def graph():
    return FakeGraph()


@pytest.fixture
def exchanger():
    return FakeExchanger()


@pytest.fixture
def settings():
    return config.Settings(tenant_id="tenant", client_id="client", client_secret="secret")
