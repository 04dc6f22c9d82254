from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient
from opensearchpy.exceptions import ConnectionError as OSConnectionError

from rowsync.errors import IndexLifecycleError
from rowsync.main import app


@pytest.fixture
def client():
    # no context manager: lifespan (logging setup, client shutdown) is not run
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_last_indexed(client):
    with patch("rowsync.controllers.routes.indices.resolve_last_cursor", AsyncMock(return_value=99)) as resolve:
        response = client.get("/indices/posts*/last-indexed", params={"field": "seq"})

    assert response.status_code == 200
    assert response.json() == {"index": "posts*", "field": "seq", "value": 99}
    resolve.assert_awaited_once_with("posts*", "seq")


def test_last_indexed_search_unavailable(client):
    error = OSConnectionError("N/A", "refused", Exception("refused"))
    with patch("rowsync.controllers.routes.indices.resolve_last_cursor", AsyncMock(side_effect=error)):
        response = client.get("/indices/posts/last-indexed")

    assert response.status_code == 503


def test_delete_index(client):
    with patch("rowsync.controllers.routes.indices.delete_index", AsyncMock(return_value=False)):
        response = client.delete("/indices/posts")

    assert response.status_code == 200
    assert response.json() == {"index": "posts", "acknowledged": False}


def test_delete_index_failure(client):
    error = IndexLifecycleError("Failed to delete index 'posts': forbidden", index_name="posts")
    with patch("rowsync.controllers.routes.indices.delete_index", AsyncMock(side_effect=error)):
        response = client.delete("/indices/posts")

    assert response.status_code == 503


def test_ready_when_dependencies_up(client):
    with (
        patch("rowsync.main.ping_opensearch", AsyncMock(return_value={"ok": True})),
        patch.dict("rowsync.main.SOURCE_PINGS", {"mysql": AsyncMock(return_value={"ok": True})}),
    ):
        response = client.get("/ready")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_ready_degraded_when_source_down(client):
    with (
        patch("rowsync.main.ping_opensearch", AsyncMock(return_value={"ok": True})),
        patch.dict(
            "rowsync.main.SOURCE_PINGS",
            {"mysql": AsyncMock(return_value={"ok": False, "error": "connection_failed"})},
        ),
    ):
        response = client.get("/ready")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "degraded"
    assert body["mysql"] == {"ok": False, "error": "connection_failed"}
