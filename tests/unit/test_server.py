from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from taskstream import server
from taskstream.watch import InMemoryWatchSource
from taskstream.runtime.dependencies import build_runtime_deps
from tests.utils import StaticVerifier, make_settings


@pytest.fixture
def client() -> TestClient:
    server.app.state.runtime_deps = build_runtime_deps(
        make_settings(),
        verifier=StaticVerifier({"good-token": "alice"}),
        watch_source=InMemoryWatchSource(),
    )
    return TestClient(server.app)


@pytest.mark.parametrize("path", ["/", "/health", "/healthz"])
def test_health(client: TestClient, path: str) -> None:
    resp = client.get(path)
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_stream_without_credential_is_401_json(client: TestClient) -> None:
    resp = client.get("/todos/stream")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Missing session"}
    assert resp.headers["content-type"].startswith("application/json")


def test_stream_with_rejected_token_is_401_json(client: TestClient) -> None:
    resp = client.get("/todos/stream", params={"token": "expired"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid or expired token"}
    assert "text/event-stream" not in resp.headers["content-type"]


def test_stream_with_rejected_cookie_is_401_json(client: TestClient) -> None:
    client.cookies.set("__session", "forged")
    resp = client.get("/todos/stream")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid or expired token"}
