"""Async MySQL health check for /ready."""

import asyncio
from typing import Any

import pymysql

from rowsync.config.logging import get_logger
from rowsync.resources.mysql.client import connect_mysql

logger = get_logger(__name__)


def _ping() -> None:
    conn = connect_mysql()
    try:
        conn.ping(reconnect=False)
    finally:
        conn.close()


async def ping_mysql() -> dict[str, Any]:
    """
    Ping MySQL from a worker thread. Returns dict with 'ok' bool and optional 'error' string.
    """
    try:
        await asyncio.to_thread(_ping)
        return {"ok": True}
    except pymysql.MySQLError as e:
        logger.warning("MySQL ping failed", extra={"error": str(type(e).__name__)})
        return {"ok": False, "error": "connection_failed"}
