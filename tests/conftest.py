from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator, Dict, List, Tuple

import httpx
import pytest
import pytest_asyncio

from bgpview.client import Client


FIXTURES = Path(__file__).parent / "fixtures"
BASE_URL = "http://bgpview.test"


def load_fixture(name: str) -> bytes:
    return (FIXTURES / name).read_bytes()


class FakeBGPView:
    """Serves canned bodies on exact paths and records every request it sees."""

    def __init__(self) -> None:
        self.routes: Dict[str, Tuple[int, bytes]] = {}
        self.requests: List[httpx.Request] = []

    def serve(self, path: str, fixture: str) -> None:
        self.routes[path] = (200, load_fixture(fixture))

    def respond(self, path: str, status: int, body: str | bytes) -> None:
        self.routes[path] = (status, body.encode() if isinstance(body, str) else body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method != "GET":
            return httpx.Response(405, text=f"unsupported method: {request.method}")
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, text="404 page not found")
        status, body = route
        return httpx.Response(status, content=body, headers={"Content-Type": "application/json"})

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def server() -> FakeBGPView:
    return FakeBGPView()


@pytest_asyncio.fixture
async def client(server: FakeBGPView) -> AsyncIterator[Client]:
    async with Client(BASE_URL, transport=httpx.MockTransport(server.handler)) as c:
        yield c


@pytest.fixture
def fixture_bytes():
    return load_fixture
