"""
Async create and delete of destination indices.
Create is create-if-absent: an "already exists" answer is success. Delete treats "not found" as a no-op.
Any other admin failure raises IndexLifecycleError.
"""

from typing import Any

from opensearchpy import AsyncOpenSearch
from opensearchpy.exceptions import NotFoundError, TransportError

from rowsync.config.logging import get_logger
from rowsync.errors import IndexLifecycleError
from rowsync.resources.opensearch.client import get_opensearch_client

logger = get_logger(__name__)

ALREADY_EXISTS_ERROR = "resource_already_exists_exception"


def build_index_body(mappings: dict[str, Any], settings: dict[str, Any]) -> dict[str, Any]:
    """Index create body; empty mappings/settings are left out so cluster defaults apply."""
    body: dict[str, Any] = {}
    if mappings:
        body["mappings"] = {"properties": dict(mappings)}
    if settings:
        body["settings"] = dict(settings)
    return body


def _error_type(e: TransportError) -> str:
    """Best-effort error type from a transport error (`error` arg, or info.error.type)."""
    info = e.info if isinstance(e.info, dict) else {}
    error_info = info.get("error")
    if isinstance(error_info, dict) and error_info.get("type"):
        return str(error_info["type"])
    return str(e.error or "")


def _error_reason(e: TransportError) -> str:
    info = e.info if isinstance(e.info, dict) else {}
    error_info = info.get("error")
    if isinstance(error_info, dict) and "reason" in error_info:
        return str(error_info["reason"])
    return str(e)


def is_already_exists(e: TransportError) -> bool:
    """True for any conflict/already-exists answer to an index create."""
    if e.status_code == 409:
        return True
    return e.status_code == 400 and ALREADY_EXISTS_ERROR in _error_type(e)


async def create_index_if_absent(
    index_name: str,
    mappings: dict[str, Any],
    settings: dict[str, Any],
    *,
    client: AsyncOpenSearch | None = None,
) -> bool:
    """
    Create the index with the given mappings and settings.
    Returns True if this call created it, False if it already existed.
    Raises IndexLifecycleError on any other failure, including an unacknowledged create.
    """
    if client is None:
        client = get_opensearch_client()
    body = build_index_body(mappings, settings)
    try:
        response = await client.indices.create(index=index_name, body=body)
    except TransportError as e:
        if is_already_exists(e):
            logger.info("Index already exists", extra={"index_name": index_name})
            return False
        reason = _error_reason(e)
        logger.error(
            "Failed to create index",
            extra={
                "index_name": index_name,
                "status": e.status_code,
                "error": reason,
                "error_type": type(e).__name__,
            },
        )
        raise IndexLifecycleError(
            f"Failed to create index '{index_name}': {reason}", index_name=index_name, cause=e
        ) from e

    if not response.get("acknowledged"):
        logger.error("Index create not acknowledged", extra={"index_name": index_name, "response": response})
        raise IndexLifecycleError(f"Index create for '{index_name}' was not acknowledged", index_name=index_name)
    logger.info("Index created", extra={"index_name": index_name})
    return True


async def delete_index(index_name: str, *, client: AsyncOpenSearch | None = None) -> bool:
    """
    Delete the index. Returns True only when the cluster acknowledged the delete.
    A missing index is logged and returns False. Other failures raise IndexLifecycleError.
    """
    if client is None:
        client = get_opensearch_client()
    try:
        response = await client.indices.delete(index=index_name)
    except NotFoundError:
        logger.info("Index to delete does not exist", extra={"index_name": index_name})
        return False
    except TransportError as e:
        reason = _error_reason(e)
        logger.error(
            "Failed to delete index",
            extra={"index_name": index_name, "status": e.status_code, "error": reason},
        )
        raise IndexLifecycleError(
            f"Failed to delete index '{index_name}': {reason}", index_name=index_name, cause=e
        ) from e

    acknowledged = bool(response.get("acknowledged"))
    logger.info("Index deleted", extra={"index_name": index_name, "acknowledged": acknowledged})
    return acknowledged
