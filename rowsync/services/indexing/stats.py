"""End-of-run summary."""

import json
from typing import Any

from rowsync.config.logging import get_logger
from rowsync.services.indexing.context import RunStats
from rowsync.utils.time import elapsed_seconds

logger = get_logger(__name__)


def display_stats(stats: RunStats, started_clock: float) -> dict[str, Any]:
    """Log the run summary and return it as a dict."""
    summary = {
        "batches_indexed": stats.batches_indexed,
        "total_batches": stats.total_batches,
        "records_indexed": stats.records_indexed,
        "index_errors": stats.index_errors,
        "created_indices": sorted(stats.created_indices),
        "deleted_indices": sorted(stats.deleted_indices),
        "elapsed_seconds": round(elapsed_seconds(started_clock), 3),
    }
    logger.info(
        "Indexing finished | batches %d/%d | records indexed %d | errors %d | elapsed %.3fs"
        " | created indices %s | deleted indices %s",
        summary["batches_indexed"],
        summary["total_batches"],
        summary["records_indexed"],
        summary["index_errors"],
        summary["elapsed_seconds"],
        ", ".join(summary["created_indices"]) or "-",
        ", ".join(summary["deleted_indices"]) or "-",
        extra=summary,
    )
    if stats.errors:
        logger.warning(
            "Documents that failed to index: %s",
            json.dumps(stats.errors, default=str),
            extra={"errors": stats.errors},
        )
    return summary
