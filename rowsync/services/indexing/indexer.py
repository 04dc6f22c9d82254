"""
Indexer: one configured source → search-index sync.

    indexer = Indexer(IndexerConfig(query="SELECT * FROM posts WHERE id > {lastIndexedId}", index_name="posts"))
    indexer.add_mutator(strip_html).group_by_date("created_at", "%Y-%m")
    stats = await indexer.start()

Each start() gets a fresh RunContext, so one instance can be run repeatedly.
"""

import asyncio
from typing import Any

from opensearchpy import AsyncOpenSearch

from rowsync.config.indexer.models import IndexerConfig
from rowsync.config.logging import get_logger
from rowsync.repositories.opensearch.cursor_repository import resolve_last_cursor
from rowsync.resources.opensearch.client import close_opensearch_client, get_opensearch_client
from rowsync.services.indexing.context import RunContext, RunStats
from rowsync.services.indexing.grouping import DEFAULT_DATE_FORMAT, RowClassifier, index_by_date
from rowsync.services.indexing.mutations import RowTransformer
from rowsync.services.indexing.runner import bulk_index
from rowsync.services.indexing.stats import display_stats
from rowsync.services.indexing.templating import generate_query
from rowsync.services.sources import data_source_for
from rowsync.services.sources.base import BaseDataSource, Row

logger = get_logger(__name__)


class Indexer:
    """Holds the immutable config plus caller-supplied mutators and grouper."""

    def __init__(
        self,
        config: IndexerConfig,
        *,
        source: BaseDataSource | None = None,
        client: AsyncOpenSearch | None = None,
    ) -> None:
        self.config = config
        self._source = source
        self._client = client
        self._owns_client = client is None
        self._mutators: list[RowTransformer] = []
        self._grouper: RowClassifier | None = None

    @property
    def index_name(self) -> str:
        return self.config.index_name

    @property
    def grouped(self) -> bool:
        return self._grouper is not None

    def add_mutator(self, mutator: RowTransformer) -> "Indexer":
        self._mutators.append(mutator)
        return self

    def group_by(self, grouper: RowClassifier) -> "Indexer":
        self._grouper = grouper
        return self

    def group_by_date(self, field: str, date_format: str = DEFAULT_DATE_FORMAT) -> "Indexer":
        return self.group_by(index_by_date(field, date_format))

    def _get_client(self) -> AsyncOpenSearch:
        if self._client is None:
            self._client = get_opensearch_client()
        return self._client

    def _get_source(self) -> BaseDataSource:
        if self._source is None:
            self._source = data_source_for(self.config)
        return self._source

    async def resolve_last_cursor(self) -> Any:
        """Highest cursor_field value already indexed under index_name*, or 0."""
        return await resolve_last_cursor(
            self.config.cursor_index_pattern, self.config.cursor_field, client=self._get_client()
        )

    async def fetch_rows(self, query: Any) -> list[Row]:
        """Run the query to completion and release the source before indexing starts."""
        source = self._get_source()
        await source.connect()
        try:
            return await source.query(query, self.config.collection)
        finally:
            await source.end()

    async def start(self) -> RunStats:
        """Run once: resolve cursor → query source → bulk index → log stats."""
        ctx = RunContext()
        logger.info(
            "Indexer run starting",
            extra={"index_name": self.index_name, "batch_size": self.config.batch_size, "reindex": self.config.reindex},
        )
        query = await generate_query(self.config, self.resolve_last_cursor)
        rows = await self.fetch_rows(query)
        stats = await bulk_index(
            rows,
            self.config,
            ctx,
            mutators=self._mutators,
            grouper=self._grouper,
            client=self._get_client(),
        )
        display_stats(stats, ctx.started_clock)
        return stats

    def run(self) -> RunStats:
        """Blocking entry point for scripts: start() in a new event loop, then close the shared client."""

        async def _run() -> RunStats:
            try:
                return await self.start()
            finally:
                if self._owns_client and self._client is not None:
                    await close_opensearch_client()
                    self._client = None

        return asyncio.run(_run())
