"""Blocking PyMySQL connections for the relational source. Callers run these in a worker thread."""

import pymysql
from pymysql.cursors import DictCursor

from rowsync.config.logging import get_logger
from rowsync.config.storage.mysql import get_mysql_config

logger = get_logger(__name__)


def connect_mysql() -> pymysql.connections.Connection:
    """Open a new connection returning rows as dicts keyed by column name."""
    cfg = get_mysql_config()
    conn = pymysql.connect(
        host=cfg["host"],
        port=cfg["port"],
        user=cfg["user"],
        password=cfg["password"],
        database=cfg["database"] or None,
        connect_timeout=cfg["connect_timeout"],
        charset="utf8mb4",
        cursorclass=DictCursor,
        autocommit=True,
    )
    logger.info("MySQL connection opened", extra={"host": cfg["host"], "database": cfg["database"]})
    return conn
