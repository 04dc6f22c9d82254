"""
Destination search cluster. One AsyncOpenSearch per process, shared by Indexer runs,
the CLI commands and the admin API, so cursor lookups and bulk writes reuse the same pool.
"""

from typing import Any

from opensearchpy import AsyncOpenSearch

from rowsync.config.logging import get_logger
from rowsync.config.storage.opensearch import get_opensearch_config

logger = get_logger(__name__)

_client: AsyncOpenSearch | None = None


def client_kwargs(cfg: dict[str, Any]) -> dict[str, Any]:
    """AsyncOpenSearch arguments for `cfg`. An empty username means an unauthenticated cluster."""
    kwargs: dict[str, Any] = {
        "hosts": [cfg["host"]],
        "use_ssl": cfg["use_ssl"],
        "verify_certs": cfg["verify_certs"],
        "timeout": cfg["timeout"],
    }
    if cfg["username"]:
        kwargs["http_auth"] = (cfg["username"], cfg["password"])
    return kwargs


def get_opensearch_client() -> AsyncOpenSearch:
    global _client
    if _client is None:
        cfg = get_opensearch_config()
        _client = AsyncOpenSearch(**client_kwargs(cfg))
        logger.info("Search client ready for %s", cfg["host"], extra={"host": cfg["host"]})
    return _client


async def close_opensearch_client() -> None:
    """Release the pool after a run or at API shutdown. A later call to get_opensearch_client() reconnects."""
    global _client
    client, _client = _client, None
    if client is None:
        return
    try:
        await client.close()
    except Exception as e:
        logger.warning("Search client did not close cleanly: %s", e)
