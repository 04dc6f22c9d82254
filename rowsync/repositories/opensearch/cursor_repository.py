"""
Async lookup of the last indexed cursor value: the highest value of a field across matching indices.
No prior data (no index, no hits, field missing) resolves to DEFAULT_CURSOR instead of an error.
"""

from typing import Any

from opensearchpy import AsyncOpenSearch
from opensearchpy.exceptions import NotFoundError

from rowsync.config.logging import get_logger
from rowsync.resources.opensearch.client import get_opensearch_client

logger = get_logger(__name__)

DEFAULT_CURSOR = 0


def build_cursor_query(cursor_field: str) -> dict[str, Any]:
    """Search body returning only the document with the highest `cursor_field`."""
    return {
        "_source": [cursor_field],
        "size": 1,
        "query": {"match_all": {}},
        # unmapped_type keeps the sort valid on indices that never saw the field
        "sort": [{cursor_field: {"order": "desc", "unmapped_type": "long"}}],
    }


def _field_value(source: dict[str, Any], field: str) -> Any:
    """Read `field` from a hit's _source; dotted names walk into nested objects."""
    if field in source:
        return source[field]
    value: Any = source
    for part in field.split("."):
        if not isinstance(value, dict) or part not in value:
            return None
        value = value[part]
    return value


async def resolve_last_cursor(
    index_pattern: str,
    cursor_field: str = "id",
    *,
    client: AsyncOpenSearch | None = None,
) -> Any:
    """
    Return the max value of `cursor_field` in indices matching `index_pattern`, or DEFAULT_CURSOR.
    Transport and connection errors propagate.
    """
    if client is None:
        client = get_opensearch_client()
    try:
        response = await client.search(
            index=index_pattern,
            body=build_cursor_query(cursor_field),
            ignore_unavailable=True,
        )
    except NotFoundError:
        logger.info(
            "No index matches cursor pattern; using default cursor",
            extra={"index_pattern": index_pattern, "cursor_field": cursor_field},
        )
        return DEFAULT_CURSOR

    hits = (response.get("hits") or {}).get("hits") or []
    if not hits:
        logger.info(
            "No indexed documents; using default cursor",
            extra={"index_pattern": index_pattern, "cursor_field": cursor_field},
        )
        return DEFAULT_CURSOR
    value = _field_value(hits[0].get("_source") or {}, cursor_field)
    if value is None:
        return DEFAULT_CURSOR
    return value
