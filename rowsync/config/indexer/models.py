"""Indexer run configuration. Immutable once built; no business logic."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BATCH_SIZE = 100
DEFAULT_CURSOR_FIELD = "id"


class IndexerConfig(BaseModel):
    """
    One source → search-index sync job.
    `query` is an SQL template for MySQL or a filter document for MongoDB (selected by `collection`).
    """

    model_config = ConfigDict(frozen=True)

    query: str | dict[str, Any] = Field(..., description="SQL template or MongoDB filter")
    collection: str | None = Field(default=None, description="MongoDB collection; switches to document-store mode")
    index_name: str = Field(..., min_length=1, description="Base destination index name")
    batch_size: int = Field(default=DEFAULT_BATCH_SIZE, gt=0, description="Rows per bulk request")
    cursor_field: str = Field(default=DEFAULT_CURSOR_FIELD, min_length=1, description="High-water-mark field")
    explicit_mapping: bool = Field(default=False, description="Index only fields named in mappings")
    reindex: bool = Field(default=False, description="Delete destination indices before the first write")
    mappings: dict[str, Any] = Field(default_factory=dict, description="field → OpenSearch property mapping")
    settings: dict[str, Any] = Field(default_factory=dict, description="Index settings passed on create")

    @property
    def document_mode(self) -> bool:
        """True when rows come from a MongoDB collection."""
        return self.collection is not None

    @property
    def cursor_index_pattern(self) -> str:
        """Pattern covering the base index and every grouped index derived from it."""
        return f"{self.index_name}*"
