"""
Batch runner: slice rows, then per slice mutate → group → ensure indices → bulk write → account.
Slices are processed strictly one after another.
"""

from typing import Sequence

from opensearchpy import AsyncOpenSearch

from rowsync.config.indexer.models import IndexerConfig
from rowsync.config.logging import get_logger
from rowsync.repositories.opensearch.bulk_repository import bulk_write
from rowsync.services.indexing.context import RunContext, RunStats
from rowsync.services.indexing.grouping import RowClassifier, apply_group
from rowsync.services.indexing.lifecycle import ensure_indices
from rowsync.services.indexing.mutations import RowTransformer, apply_mutations
from rowsync.services.indexing.results import handle_response
from rowsync.services.sources.base import Row
from rowsync.utils.batching import chunked

logger = get_logger(__name__)


async def bulk_index(
    rows: list[Row],
    config: IndexerConfig,
    ctx: RunContext,
    *,
    mutators: Sequence[RowTransformer] = (),
    grouper: RowClassifier | None = None,
    client: AsyncOpenSearch | None = None,
) -> RunStats:
    """
    Index `rows` in batches of config.batch_size and return the run's stats.
    Without a grouper the base index is ensured up front, even when there are no rows.
    """
    if grouper is None:
        await ensure_indices({config.index_name}, config, ctx, client=client)

    batches = chunked(rows, config.batch_size)
    for number, batch in enumerate(batches):
        if number == 0:
            ctx.stats.total_batches = len(batches)
        mutated = apply_mutations(batch, mutators)
        groups, actions = apply_group(mutated, grouper, config, ctx.groups)
        await ensure_indices(groups, config, ctx, client=client)
        logger.info(
            "Indexing batch %d | total batches %d | items in batch %d",
            number,
            len(batches),
            len(batch),
            extra={"indices": sorted(groups)},
        )
        response = await bulk_write(actions, refresh=True, client=client)
        handle_response(response, actions, ctx.stats)
    return ctx.stats
