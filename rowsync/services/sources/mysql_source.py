"""MySQL data source (PyMySQL). Blocking driver calls run in a worker thread."""

import asyncio
from typing import Any, Callable

import pymysql

from rowsync.config.logging import get_logger
from rowsync.errors import DataSourceError
from rowsync.resources.mysql.client import connect_mysql
from rowsync.services.sources.base import BaseDataSource, Row

logger = get_logger(__name__)


def _translate_mysql_error(e: pymysql.MySQLError, context: str) -> DataSourceError:
    """Wrap PyMySQL errors into a non-leaking DataSourceError."""
    logger.error("MySQL operation failed", extra={"context": context, "error_type": type(e).__name__})
    return DataSourceError(f"MySQL source failed: {context}", cause=e)


class MySQLDataSource(BaseDataSource):
    """Runs an SQL string and returns rows as column → value dicts."""

    def __init__(self, connection_factory: Callable[[], Any] | None = None) -> None:
        self._connection_factory = connection_factory or connect_mysql
        self._connection: Any = None

    @property
    def source_name(self) -> str:
        return "mysql"

    async def connect(self) -> None:
        if self._connection is not None:
            return
        try:
            self._connection = await asyncio.to_thread(self._connection_factory)
        except pymysql.MySQLError as e:
            raise _translate_mysql_error(e, "connect") from e

    def _fetch_all(self, sql: str) -> list[Row]:
        with self._connection.cursor() as cursor:
            cursor.execute(sql)
            return list(cursor.fetchall())

    async def query(self, query: Any, collection: str | None = None) -> list[Row]:
        if not isinstance(query, str):
            raise DataSourceError(f"MySQL source expects an SQL string, got {type(query).__name__}")
        await self.connect()
        logger.info("Querying MySQL")
        try:
            rows = await asyncio.to_thread(self._fetch_all, query)
        except pymysql.MySQLError as e:
            raise _translate_mysql_error(e, "query") from e
        logger.info("MySQL query returned rows", extra={"rows_count": len(rows)})
        return rows

    async def end(self) -> None:
        if self._connection is None:
            return
        conn, self._connection = self._connection, None
        try:
            await asyncio.to_thread(conn.close)
        except pymysql.MySQLError as e:
            logger.warning("Error closing MySQL connection", extra={"error": str(e)})
