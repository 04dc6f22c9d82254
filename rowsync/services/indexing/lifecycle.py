"""Make sure every destination index exists before a batch is written to it."""

from typing import Iterable

from opensearchpy import AsyncOpenSearch

from rowsync.config.indexer.models import IndexerConfig
from rowsync.config.logging import get_logger
from rowsync.resources.opensearch.index_manager import create_index_if_absent, delete_index
from rowsync.services.indexing.context import RunContext

logger = get_logger(__name__)


async def ensure_indices(
    groups: Iterable[str],
    config: IndexerConfig,
    ctx: RunContext,
    *,
    client: AsyncOpenSearch | None = None,
) -> None:
    """
    For each destination: in reindex mode delete it once per run, then create it once per run.
    Only this function writes ctx.stats.created_indices / deleted_indices.
    IndexLifecycleError from the admin calls propagates and ends the run.
    """
    stats = ctx.stats
    for index_name in sorted(groups):
        # never delete an index this run already created and may have written to
        if (
            config.reindex
            and index_name not in stats.deleted_indices
            and index_name not in stats.created_indices
        ):
            logger.info("Deleting index before reindex", extra={"index_name": index_name})
            if await delete_index(index_name, client=client):
                stats.deleted_indices.add(index_name)

        if index_name in stats.created_indices:
            continue
        logger.info("Creating index", extra={"index_name": index_name})
        await create_index_if_absent(index_name, config.mappings, config.settings, client=client)
        stats.created_indices.add(index_name)
