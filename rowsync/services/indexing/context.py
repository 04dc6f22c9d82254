"""Per-run state: statistics plus the set of destination indices seen so far."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from rowsync.utils.time import monotonic, utc_now


class RunStats(BaseModel):
    """Counters for one indexer run. Index sets only grow during a run."""

    batches_indexed: int = 0
    records_indexed: int = 0
    index_errors: int = 0
    total_batches: int = 0
    created_indices: set[str] = Field(default_factory=set)
    deleted_indices: set[str] = Field(default_factory=set)
    errors: list[dict[str, Any]] = Field(default_factory=list)


class RunContext(BaseModel):
    """Owned by exactly one Indexer.start() call and passed explicitly through the pipeline."""

    stats: RunStats = Field(default_factory=RunStats)
    groups: set[str] = Field(default_factory=set)
    started_at: datetime = Field(default_factory=utc_now)
    started_clock: float = Field(default_factory=monotonic)
