"""Data source implementations: mysql, mongodb."""

from rowsync.config.indexer.models import IndexerConfig
from rowsync.services.sources.base import BaseDataSource
from rowsync.services.sources.mongodb_source import MongoDBDataSource
from rowsync.services.sources.mysql_source import MySQLDataSource

SOURCE_REGISTRY: dict[str, type[BaseDataSource]] = {
    "mysql": MySQLDataSource,
    "mongodb": MongoDBDataSource,
}


def get_data_source(source_name: str) -> BaseDataSource | None:
    """Return a new data source for the given name, or None."""
    cls = SOURCE_REGISTRY.get(source_name)
    if cls is None:
        return None
    return cls()


def data_source_for(config: IndexerConfig) -> BaseDataSource:
    """MongoDB when the config names a collection, MySQL otherwise."""
    return get_data_source("mongodb" if config.document_mode else "mysql")
