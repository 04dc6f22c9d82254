"""Async MongoDB health check. Thin wrapper over client for /ready."""

from typing import Any

from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from rowsync.config.logging import get_logger
from rowsync.resources.mongo.client import get_mongo_client

logger = get_logger(__name__)


async def ping_mongo() -> dict[str, Any]:
    """
    Ping MongoDB asynchronously. Returns dict with 'ok' bool and optional 'error' string.
    Used for health checks; does not leak internal details.
    """
    try:
        await get_mongo_client().admin.command("ping")
        return {"ok": True}
    except ServerSelectionTimeoutError as e:
        logger.warning("MongoDB ping timeout", extra={"error": str(type(e).__name__)})
        return {"ok": False, "error": "connection_timeout"}
    except PyMongoError as e:
        logger.warning("MongoDB ping failed", extra={"error": str(type(e).__name__)})
        return {"ok": False, "error": "connection_failed"}
