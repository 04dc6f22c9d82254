"""Base data source contract: connect, run one query to completion, release."""

from abc import ABC, abstractmethod
from typing import Any

Row = dict[str, Any]


class BaseDataSource(ABC):
    """
    A relational or document backend the indexer extracts rows from.
    query() returns the full ordered result set or raises DataSourceError; there is no partial result.
    """

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Source identifier, e.g. 'mysql', 'mongodb'."""
        ...

    async def connect(self) -> None:
        """Open the connection. Idempotent per instance."""

    @abstractmethod
    async def query(self, query: Any, collection: str | None = None) -> list[Row]:
        """Run `query` (SQL string or filter document) and return every row in source order."""
        ...

    async def end(self) -> None:
        """Release the connection. Safe to call when not connected."""
