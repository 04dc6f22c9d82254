"""MongoDB data source (Motor). Runs a find() filter against one collection."""

from typing import Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from rowsync.config.logging import get_logger
from rowsync.errors import DataSourceError
from rowsync.resources.mongo.client import close_mongo_client, get_database
from rowsync.services.sources.base import BaseDataSource, Row

logger = get_logger(__name__)


def _translate_pymongo_error(e: PyMongoError, context: str) -> DataSourceError:
    """Wrap PyMongo errors into a non-leaking DataSourceError."""
    logger.error("MongoDB operation failed", extra={"context": context, "error_type": type(e).__name__})
    return DataSourceError(f"MongoDB source failed: {context}", cause=e)


def to_row(document: dict[str, Any]) -> Row:
    """
    Make a Mongo document indexable: `_id` is a metadata field in the search index, so it is
    removed from the body and kept as string `id` unless the document already has one.
    """
    row = dict(document)
    if "_id" in row:
        doc_id = row.pop("_id")
        row.setdefault("id", str(doc_id) if isinstance(doc_id, ObjectId) else doc_id)
    return row


class MongoDBDataSource(BaseDataSource):
    """Runs a filter document against `collection` in the configured database."""

    def __init__(self, database: AsyncIOMotorDatabase | None = None) -> None:
        self._database = database
        self._owns_client = database is None

    @property
    def source_name(self) -> str:
        return "mongodb"

    async def connect(self) -> None:
        if self._database is None:
            self._database = get_database()
        try:
            await self._database.client.admin.command("ping")
        except PyMongoError as e:
            raise _translate_pymongo_error(e, "connect") from e

    async def query(self, query: Any, collection: str | None = None) -> list[Row]:
        if not collection:
            raise DataSourceError("MongoDB source requires a collection name")
        if query is not None and not isinstance(query, dict):
            raise DataSourceError(f"MongoDB source expects a filter document, got {type(query).__name__}")
        if self._database is None:
            await self.connect()
        logger.info("Querying MongoDB", extra={"collection": collection})
        try:
            docs = await self._database[collection].find(query or {}).to_list(length=None)
        except PyMongoError as e:
            raise _translate_pymongo_error(e, "find") from e
        logger.info("MongoDB query returned documents", extra={"collection": collection, "rows_count": len(docs)})
        return [to_row(doc) for doc in docs]

    async def end(self) -> None:
        if self._owns_client:
            close_mongo_client()
            self._database = None
