"""Indexing pipeline: public entry points."""

from rowsync.services.indexing.context import RunContext, RunStats
from rowsync.services.indexing.grouping import index_by_date
from rowsync.services.indexing.indexer import Indexer

__all__ = ["Indexer", "RunContext", "RunStats", "index_by_date"]
