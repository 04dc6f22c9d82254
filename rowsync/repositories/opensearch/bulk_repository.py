"""Async bulk write of grouped index actions. Returns the raw bulk response for per-item accounting."""

from typing import Any

from opensearchpy import AsyncOpenSearch
from opensearchpy.exceptions import TransportError

from rowsync.config.logging import get_logger
from rowsync.config.storage.opensearch import get_opensearch_config
from rowsync.errors import BulkWriteError
from rowsync.resources.opensearch.client import get_opensearch_client

logger = get_logger(__name__)

GroupedAction = tuple[dict[str, Any], dict[str, Any]]


def flatten_actions(actions: list[GroupedAction]) -> list[dict[str, Any]]:
    """[(action, doc), ...] → [action, doc, action, doc, ...] as the bulk API expects."""
    body: list[dict[str, Any]] = []
    for action, document in actions:
        body.append(action)
        body.append(document)
    return body


async def bulk_write(
    actions: list[GroupedAction],
    *,
    refresh: bool = True,
    client: AsyncOpenSearch | None = None,
) -> dict[str, Any]:
    """
    Send one bulk request for the given actions. With refresh, written documents are searchable on return.
    Per-document failures come back inside the response; a failed request raises BulkWriteError.
    """
    if client is None:
        client = get_opensearch_client()
    if not actions:
        return {"errors": False, "items": []}
    try:
        return await client.bulk(
            body=flatten_actions(actions),
            refresh=refresh,
            request_timeout=get_opensearch_config()["bulk_timeout"],
        )
    except TransportError as e:
        logger.error(
            "Bulk request failed",
            extra={"actions_count": len(actions), "status": e.status_code, "error_type": type(e).__name__},
        )
        raise BulkWriteError(f"Bulk request failed: {e}", cause=e) from e
