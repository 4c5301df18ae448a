"""
Shared fixtures for appkit tests.
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, List

import httpx
import pytest

from appkit.harness.loader import load_app_dir

EXAMPLES_DIR = Path(__file__).resolve().parents[2] / "examples"
BASIC_APP_DIR = EXAMPLES_DIR / "basic-app"
MCP_APP_DIR = EXAMPLES_DIR / "custom-mcp-server"

VALID_METADATA: Dict[str, Any] = {
    "content": {
        "shortDescription": "A test app",
        "vendor": {"name": "Tests Inc"},
        "overview": {"content": "Used by the test suite."},
        "installation": [{"title": "Install", "description": "Run the installer."}],
        "resources": []
    }
}


@pytest.fixture
def basic_app():
    """Descriptor of the basic example app."""
    return load_app_dir(BASIC_APP_DIR).descriptor


@pytest.fixture
def mcp_app():
    """Descriptor of the custom MCP server example app."""
    return load_app_dir(MCP_APP_DIR).descriptor


@pytest.fixture
def make_app_dir(tmp_path) -> Callable[..., Path]:
    """Write an app.py and metadata.json into a fresh directory."""
    counter = {"n": 0}

    def _make(source: str, metadata: Any = VALID_METADATA) -> Path:
        counter["n"] += 1
        app_dir = tmp_path / f"app_{counter['n']}"
        app_dir.mkdir()
        (app_dir / "app.py").write_text(source, encoding="utf-8")
        (app_dir / "metadata.json").write_text(json.dumps(metadata), encoding="utf-8")
        return app_dir

    return _make


class RecordingTransport(httpx.MockTransport):
    """Mock transport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


def mcp_server(tools: List[Dict[str, Any]], call_result: Any = None) -> RecordingTransport:
    """Mock MCP server answering tools/list and tools/call."""
    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        if payload["method"] == "tools/list":
            result = {"tools": tools}
        elif payload["method"] == "tools/call":
            result = call_result if call_result is not None else {
                "content": [{"type": "text", "text": f"called {payload['params']['name']}"}]
            }
        else:
            return httpx.Response(200, json={
                "jsonrpc": "2.0", "id": payload["id"],
                "error": {"code": -32601, "message": "Method not found"}
            })
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "result": result})

    return RecordingTransport(handler)
