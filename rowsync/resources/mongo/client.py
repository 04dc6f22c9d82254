"""
Motor handle for the MongoDB document source. Collections named by an IndexerConfig
are read from the database set in MONGO_DATABASE.
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from rowsync.config.logging import get_logger
from rowsync.config.settings import get_settings
from rowsync.config.storage.mongo import get_mongo_config

logger = get_logger(__name__)

_client: AsyncIOMotorClient | None = None
_source_db: AsyncIOMotorDatabase | None = None


def get_mongo_client() -> AsyncIOMotorClient:
    global _client
    if _client is None:
        cfg = get_mongo_config()
        # stored dates come back as UTC-aware datetimes
        _client = AsyncIOMotorClient(
            cfg["uri"],
            appname=get_settings().app_name,
            tz_aware=True,
            connectTimeoutMS=cfg["connect_timeout_ms"],
            serverSelectionTimeoutMS=cfg["server_selection_timeout_ms"],
            maxPoolSize=cfg["max_pool_size"],
        )
        logger.info("MongoDB source client ready for database %s", cfg["database"])
    return _client


def get_database() -> AsyncIOMotorDatabase:
    """Database that MongoDBDataSource queries collections from."""
    global _source_db
    if _source_db is None:
        _source_db = get_mongo_client()[get_mongo_config()["database"]]
    return _source_db


def close_mongo_client() -> None:
    global _client, _source_db
    client, _client, _source_db = _client, None, None
    if client is not None:
        client.close()
        logger.info("MongoDB source client closed")
