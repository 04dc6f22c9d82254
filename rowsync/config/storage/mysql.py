"""MySQL connection config (read from settings). Read-only; no business logic."""

from rowsync.config.settings import get_settings


def get_mysql_config() -> dict:
    """Return MySQL connection parameters from settings for use by resources."""
    s = get_settings()
    return {
        "host": s.mysql_host,
        "port": s.mysql_port,
        "user": s.mysql_user,
        "password": s.mysql_password,
        "database": s.mysql_database,
        "connect_timeout": s.mysql_connect_timeout,
    }
