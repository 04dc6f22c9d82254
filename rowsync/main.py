"""FastAPI admin app: health, readiness, and index admin routes."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from rowsync.config.logging import configure_logging, get_logger
from rowsync.config.settings import get_settings
from rowsync.controllers.routes.indices import router as indices_router
from rowsync.resources.mongo.client import close_mongo_client
from rowsync.resources.mongo.session import ping_mongo
from rowsync.resources.mysql.session import ping_mysql
from rowsync.resources.opensearch.client import close_opensearch_client
from rowsync.resources.opensearch.health import ping_opensearch

logger = get_logger(__name__)

SOURCE_PINGS = {
    "mysql": ping_mysql,
    "mongodb": ping_mongo,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: logging. Shutdown: close MongoDB and OpenSearch clients."""
    settings = get_settings()
    configure_logging()
    logger.info("Application starting", extra={"app_name": settings.app_name, "environment": settings.environment})
    yield
    logger.info("Application shutting down")
    close_mongo_client()
    await close_opensearch_client()
    logger.info("Shutdown complete")


app = FastAPI(
    title="rowsync",
    description="Sync MySQL tables and MongoDB collections into search indices",
    version="1.0.0",
    lifespan=lifespan,
)
app.include_router(indices_router)


@app.get("/health")
async def health() -> dict[str, Any]:
    """Liveness: service is up. Does not check dependencies."""
    return {"status": "ok"}


@app.get("/ready")
async def ready() -> JSONResponse:
    """Readiness: OpenSearch and every enabled source are reachable."""
    checks: dict[str, dict[str, Any]] = {"opensearch": await ping_opensearch()}
    for name in get_settings().enabled_sources:
        ping = SOURCE_PINGS.get(name)
        if ping is None:
            checks[name] = {"ok": False, "error": "unknown_source"}
            continue
        checks[name] = await ping()
    ok = all(check.get("ok", False) for check in checks.values())
    body = {
        "status": "ok" if ok else "degraded",
        **{name: {"ok": c.get("ok", False), "error": c.get("error")} for name, c in checks.items()},
    }
    return JSONResponse(content=body, status_code=200 if ok else 503)


@app.exception_handler(Exception)
async def global_exception_handler(_request: Request, exc: Exception):
    """Centralized error handling: connection failures and timeouts get clear, non-leaking messages."""
    exc_name = type(exc).__name__
    if "Connection" in exc_name or "Timeout" in exc_name:
        logger.warning("Connection or timeout error", extra={"error": exc_name})
        return JSONResponse(
            content={"detail": "A dependency is temporarily unavailable. Please retry later."},
            status_code=503,
        )
    logger.exception("Unhandled error")
    return JSONResponse(content={"detail": "An internal error occurred."}, status_code=500)
