import asyncio
import io
import json
from urllib.error import HTTPError
from urllib.parse import parse_qsl, urlsplit

import pytest
from fastmcp import Client

from core.config import Settings

BASE_URL = "https://clawdsbet.test/api"
API_KEY = "test-key-123"


class FakeResponse:
    def __init__(self, raw: bytes):
        self._raw = raw

    def read(self) -> bytes:
        return self._raw

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


class FakeUpstream:
    """Stand-in for urlopen that records requests and serves canned routes.

    Routes are keyed by (method, endpoint), where endpoint is the path below
    the base URL without its query string.  Unknown routes answer 404.
    """

    def __init__(self):
        self.requests = []
        self._routes = {}

    def route(self, endpoint, payload=None, *, method="GET", status=200, body=None, error=None):
        self._routes[(method, endpoint)] = (payload, status, body, error)

    def __call__(self, request, timeout=None):
        self.requests.append(request)
        parts = urlsplit(request.full_url)
        endpoint = parts.path[len(urlsplit(BASE_URL).path):]
        route = self._routes.get((request.get_method(), endpoint))
        if route is None:
            raise HTTPError(request.full_url, 404, "Not Found", None, io.BytesIO(b'{"detail":"Not Found"}'))
        payload, status, body, error = route
        if error is not None:
            raise error
        if status >= 400:
            raw = (body if body is not None else "").encode("utf-8")
            raise HTTPError(request.full_url, status, "error", None, io.BytesIO(raw))
        raw = body.encode("utf-8") if body is not None else json.dumps(payload).encode("utf-8")
        return FakeResponse(raw)

    # --- inspection helpers ---
    def endpoints(self):
        return [urlsplit(r.full_url).path[len(urlsplit(BASE_URL).path):] for r in self.requests]

    def last_query(self):
        return parse_qsl(urlsplit(self.requests[-1].full_url).query)

    def last_body(self):
        return json.loads(self.requests[-1].data.decode("utf-8"))


@pytest.fixture
def upstream(monkeypatch):
    fake = FakeUpstream()
    monkeypatch.setattr("core.client.urlopen", fake)
    return fake


@pytest.fixture
def settings():
    return Settings(api_url=BASE_URL, api_key="")


@pytest.fixture
def keyed_settings():
    return Settings(api_url=BASE_URL, api_key=API_KEY)


@pytest.fixture
def server(monkeypatch, settings):
    from tools import mcp_server

    monkeypatch.setattr(mcp_server, "settings", settings)
    return mcp_server


@pytest.fixture
def keyed_server(monkeypatch, keyed_settings):
    from tools import mcp_server

    monkeypatch.setattr(mcp_server, "settings", keyed_settings)
    return mcp_server


def call_tool(server_module, name, arguments=None):
    """Invoke a tool through an in-memory MCP client and return the raw result."""

    async def _call():
        async with Client(server_module.mcp) as client:
            return await client.call_tool_mcp(name, arguments or {})

    return asyncio.run(_call())


def list_tools(server_module):
    async def _list():
        async with Client(server_module.mcp) as client:
            return await client.list_tools()

    return asyncio.run(_list())


def result_text(result) -> str:
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    return result.content[0].text
