"""Shared fixtures: fake toggleable tools, registries and a mocked BrowserStack API."""
import json
from typing import Callable, Dict, List, Tuple

import httpx
import pytest

from browserstack_mcp.client import BrowserStackClient
from browserstack_mcp.config import ServerConfig
from browserstack_mcp.registry import ToolRegistry
from browserstack_mcp.toggler import ToolToggler


class FakeTool:
    """Minimal toggleable tool recording every state change."""

    def __init__(self, name: str, events: List[Tuple[str, str]]):
        self.name = name
        self.enabled = False
        self.activate_calls = 0
        self.deactivate_calls = 0
        self._events = events

    def activate(self):
        self.enabled = True
        self.activate_calls += 1
        self._events.append(("activate", self.name))

    def deactivate(self):
        self.enabled = False
        self.deactivate_calls += 1
        self._events.append(("deactivate", self.name))


@pytest.fixture
def events() -> List[Tuple[str, str]]:
    return []


@pytest.fixture
def make_tool(events) -> Callable[[str], FakeTool]:
    def factory(name: str) -> FakeTool:
        return FakeTool(name, events)
    return factory


@pytest.fixture
def registry() -> ToolRegistry:
    return ToolRegistry()


@pytest.fixture
def toggler(registry) -> ToolToggler:
    return ToolToggler(registry)


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig(username="alice", access_key="secret-key")


class FakeBrowserStackAPI:
    """Routes requests by (method, path) to canned responses."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], httpx.Response] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, json_body=None, text: str = None):
        if text is not None:
            response = httpx.Response(status, text=text)
        else:
            response = httpx.Response(status, content=json.dumps(json_body).encode(),
                                      headers={"Content-Type": "application/json"})
        self.routes[(method, path)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.routes.get((request.method, request.url.path))
        if response is None:
            return httpx.Response(404, text="not found")
        return response


@pytest.fixture
def fake_api() -> FakeBrowserStackAPI:
    return FakeBrowserStackAPI()


@pytest.fixture
def client(config, fake_api) -> BrowserStackClient:
    return BrowserStackClient(config, transport=httpx.MockTransport(fake_api.handler))
