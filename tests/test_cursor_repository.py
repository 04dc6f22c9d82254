import pytest
from opensearchpy.exceptions import ConnectionError as OSConnectionError
from opensearchpy.exceptions import NotFoundError

from rowsync.repositories.opensearch.cursor_repository import (
    DEFAULT_CURSOR,
    build_cursor_query,
    resolve_last_cursor,
)


def _hits(*sources):
    return {"hits": {"total": {"value": len(sources)}, "hits": [{"_source": s} for s in sources]}}


@pytest.mark.asyncio
async def test_returns_highest_value(os_client):
    os_client.search.return_value = _hits({"id": 1532})

    assert await resolve_last_cursor("posts*", "id", client=os_client) == 1532


@pytest.mark.asyncio
async def test_search_sorted_desc_on_field_with_size_one(os_client):
    os_client.search.return_value = _hits({"seq": 9})

    await resolve_last_cursor("posts*", "seq", client=os_client)

    kwargs = os_client.search.await_args.kwargs
    assert kwargs["index"] == "posts*"
    body = kwargs["body"]
    assert body["size"] == 1
    assert body["_source"] == ["seq"]
    assert body["sort"][0]["seq"]["order"] == "desc"
    assert body["query"] == {"match_all": {}}


@pytest.mark.asyncio
async def test_no_hits_defaults_to_zero(os_client):
    assert await resolve_last_cursor("posts*", "id", client=os_client) == DEFAULT_CURSOR == 0


@pytest.mark.asyncio
async def test_missing_index_defaults_to_zero(os_client):
    os_client.search.side_effect = NotFoundError(404, "index_not_found_exception", {})

    assert await resolve_last_cursor("posts", "id", client=os_client) == 0


@pytest.mark.asyncio
async def test_hit_without_field_defaults_to_zero(os_client):
    os_client.search.return_value = _hits({"title": "no id here"})

    assert await resolve_last_cursor("posts*", "id", client=os_client) == 0


@pytest.mark.asyncio
async def test_dotted_field_reads_nested_source(os_client):
    os_client.search.return_value = _hits({"meta": {"seq": 77}})

    assert await resolve_last_cursor("posts*", "meta.seq", client=os_client) == 77


@pytest.mark.asyncio
async def test_connection_errors_propagate(os_client):
    os_client.search.side_effect = OSConnectionError("N/A", "connection refused", Exception("refused"))

    with pytest.raises(OSConnectionError):
        await resolve_last_cursor("posts*", "id", client=os_client)


def test_sort_tolerates_indices_without_the_field():
    assert build_cursor_query("id")["sort"] == [{"id": {"order": "desc", "unmapped_type": "long"}}]
