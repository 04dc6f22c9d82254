"""Index admin routes: last indexed cursor and index delete."""

from fastapi import APIRouter, HTTPException, Query
from opensearchpy.exceptions import TransportError

from rowsync.controllers.schema.indices import DeleteIndexResponse, LastIndexedResponse
from rowsync.errors import IndexLifecycleError
from rowsync.repositories.opensearch.cursor_repository import resolve_last_cursor
from rowsync.resources.opensearch.index_manager import delete_index

router = APIRouter(prefix="/indices", tags=["indices"])


@router.get("/{index}/last-indexed", response_model=LastIndexedResponse)
async def last_indexed(index: str, field: str = Query(default="id", min_length=1)) -> LastIndexedResponse:
    """Highest `field` value indexed in `index` (name or pattern); 0 if nothing is indexed yet."""
    try:
        value = await resolve_last_cursor(index, field)
    except TransportError as e:
        raise HTTPException(status_code=503, detail="Search engine temporarily unavailable") from e
    return LastIndexedResponse(index=index, field=field, value=value)


@router.delete("/{index}", response_model=DeleteIndexResponse)
async def remove_index(index: str) -> DeleteIndexResponse:
    """Delete an index. A missing index is not an error."""
    try:
        acknowledged = await delete_index(index)
    except IndexLifecycleError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    return DeleteIndexResponse(index=index, acknowledged=acknowledged)
