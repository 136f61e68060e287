"""Shared fixtures: a fake llama-server built on httpx.MockTransport."""
import json
from typing import Callable

import httpx
import pytest

from core.config import ServerConfig
from core.llama_client import CompletionClient
from tools.mcp_server import LibreModelTools


SERVER_URL = "http://llama.test:8080"


class FakeLlamaServer:
    """Routes requests by path and records every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, Callable] = {}

    def on(self, path: str, handler: Callable) -> None:
        self.routes[path] = handler

    def json_on(self, path: str, body, status_code: int = 200) -> None:
        self.on(path, lambda request: httpx.Response(status_code, json=body))

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(request.url.path)
        if handler is None:
            return httpx.Response(404, text="not found")
        response = handler(request)
        if not isinstance(response, httpx.Response):
            response = await response
        return response

    def bodies(self, path: str) -> list[dict]:
        return [json.loads(r.content) for r in self.requests if r.url.path == path]


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig(url=SERVER_URL, health_timeout_seconds=0.2)


@pytest.fixture
def fake_server() -> FakeLlamaServer:
    return FakeLlamaServer()


@pytest.fixture
def client(config: ServerConfig, fake_server: FakeLlamaServer) -> CompletionClient:
    return CompletionClient(config, transport=httpx.MockTransport(fake_server))


@pytest.fixture
def tools(config: ServerConfig, client: CompletionClient) -> LibreModelTools:
    return LibreModelTools(config, client)
