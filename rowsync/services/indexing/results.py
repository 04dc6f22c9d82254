"""Per-document accounting of a bulk response."""

import json
from typing import Any

from rowsync.config.logging import get_logger
from rowsync.repositories.opensearch.bulk_repository import GroupedAction
from rowsync.services.indexing.context import RunStats

logger = get_logger(__name__)


def handle_response(
    response: dict[str, Any],
    actions: list[GroupedAction],
    stats: RunStats,
) -> list[dict[str, Any]]:
    """
    Count successes and failures of one bulk request into `stats` and return the error entries.
    Response items are in the same order as `actions`, one item per document.
    """
    if not response.get("errors"):
        stats.batches_indexed += 1
        stats.records_indexed += len(actions)
        return []

    errored: list[dict[str, Any]] = []
    for item, (action, document) in zip(response.get("items") or [], actions):
        operation = next(iter(item))
        result = item[operation]
        if result.get("error"):
            # 429 is retryable; anything else is usually a mapping problem in the document
            errored.append(
                {
                    "status": result.get("status"),
                    "error": result["error"],
                    "operation": action,
                    "document": document,
                }
            )
            stats.index_errors += 1
        else:
            stats.records_indexed += 1

    stats.errors.extend(errored)
    logger.warning(
        "Bulk request had %d document errors in a batch of %d: %s",
        len(errored),
        len(actions),
        json.dumps(errored, default=str),
        extra={"failed_count": len(errored), "batch_size": len(actions), "errors": errored},
    )
    return errored
