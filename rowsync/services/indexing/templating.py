"""Substitute the last indexed cursor into an SQL query template."""

from typing import Any, Awaitable, Callable

from rowsync.config.indexer.models import IndexerConfig
from rowsync.config.logging import get_logger
from rowsync.repositories.opensearch.cursor_repository import DEFAULT_CURSOR

logger = get_logger(__name__)

CURSOR_PLACEHOLDER = "{lastIndexedId}"

CursorResolver = Callable[[], Awaitable[Any]]


def has_cursor_placeholder(query: Any) -> bool:
    return isinstance(query, str) and CURSOR_PLACEHOLDER in query


async def generate_query(config: IndexerConfig, resolve_cursor: CursorResolver) -> Any:
    """
    Return the query to run. Filter documents and strings without the placeholder are returned as-is
    and the resolver is never called. Otherwise only the first placeholder is replaced.

    A reindex run rebuilds the indices from scratch, so it starts from DEFAULT_CURSOR
    without asking the indices that are about to be deleted.
    """
    query = config.query
    if not has_cursor_placeholder(query):
        return query
    if config.reindex:
        last_cursor = DEFAULT_CURSOR
    else:
        last_cursor = await resolve_cursor()
    logger.info(
        "Querying by last indexed cursor",
        extra={"cursor_field": config.cursor_field, "last_cursor": str(last_cursor)},
    )
    return query.replace(CURSOR_PLACEHOLDER, str(last_cursor), 1)
