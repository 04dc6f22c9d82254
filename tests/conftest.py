"""
Shared fixtures for rowsync tests.

- os_client: MagicMock standing in for AsyncOpenSearch (search, bulk, indices.create/delete)
- FakeSource / fake_source: in-memory BaseDataSource
- make_config: IndexerConfig factory with test defaults
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from rowsync.config.indexer.models import IndexerConfig
from rowsync.services.sources.base import BaseDataSource, Row


def ok_bulk_response(body: list[dict[str, Any]]) -> dict[str, Any]:
    """Bulk response where every action succeeded."""
    items = [
        {"index": {"_index": body[i]["index"]["_index"], "status": 201, "result": "created"}}
        for i in range(0, len(body), 2)
    ]
    return {"took": 1, "errors": False, "items": items}


def bulk_response_with_failures(body: list[dict[str, Any]], failed_positions: set[int]) -> dict[str, Any]:
    """Bulk response where the documents at `failed_positions` (0-based) failed with a mapping error."""
    items = []
    for position, i in enumerate(range(0, len(body), 2)):
        index_name = body[i]["index"]["_index"]
        if position in failed_positions:
            items.append(
                {
                    "index": {
                        "_index": index_name,
                        "status": 400,
                        "error": {"type": "mapper_parsing_exception", "reason": "failed to parse field [id]"},
                    }
                }
            )
        else:
            items.append({"index": {"_index": index_name, "status": 201, "result": "created"}})
    return {"took": 1, "errors": bool(failed_positions), "items": items}


@pytest.fixture
def os_client() -> MagicMock:
    client = MagicMock()
    client.search = AsyncMock(return_value={"hits": {"total": {"value": 0}, "hits": []}})
    client.bulk = AsyncMock(side_effect=lambda body, **kwargs: ok_bulk_response(body))
    client.indices = MagicMock()
    client.indices.create = AsyncMock(return_value={"acknowledged": True, "index": "x"})
    client.indices.delete = AsyncMock(return_value={"acknowledged": True})
    return client


class FakeSource(BaseDataSource):
    """In-memory source recording its calls."""

    def __init__(self, rows: list[Row] | None = None, error: Exception | None = None) -> None:
        self.rows = rows or []
        self.error = error
        self.queries: list[tuple[Any, str | None]] = []
        self.connected = False
        self.ended = False

    @property
    def source_name(self) -> str:
        return "fake"

    async def connect(self) -> None:
        self.connected = True

    async def query(self, query: Any, collection: str | None = None) -> list[Row]:
        self.queries.append((query, collection))
        if self.error is not None:
            raise self.error
        return [dict(row) for row in self.rows]

    async def end(self) -> None:
        self.ended = True


@pytest.fixture
def fake_source() -> FakeSource:
    return FakeSource([{"id": 1}, {"id": 2}, {"id": 3}])


@pytest.fixture
def make_config():
    def _make(**overrides: Any) -> IndexerConfig:
        values: dict[str, Any] = {"query": "SELECT * FROM posts", "index_name": "posts"}
        values.update(overrides)
        return IndexerConfig(**values)

    return _make
