"""Environment-based application settings. Read-only; no business logic."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="rowsync", description="Service name")
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Runtime environment"
    )
    log_level: str = Field(default="INFO", description="Log level name")

    # Admin HTTP server
    host: str = Field(default="0.0.0.0", description="Listen host")
    port: int = Field(default=8000, ge=1, le=65535, description="Listen port")

    # Sources checked by /ready (mysql, mongodb)
    enabled_sources: list[str] = Field(
        default_factory=lambda: ["mysql"], description="Data sources that must be reachable"
    )

    # OpenSearch (destination)
    opensearch_host: str = Field(default="http://localhost:9200", description="OpenSearch base URL")
    opensearch_username: str = Field(default="admin", description="OpenSearch username")
    opensearch_password: str = Field(default="admin", description="OpenSearch password")
    opensearch_use_ssl: bool = Field(default=False, description="Use HTTPS to OpenSearch")
    opensearch_verify_certs: bool = Field(default=False, description="Verify TLS certificates")
    opensearch_timeout: int = Field(default=30, ge=1, description="Request timeout (seconds)")
    bulk_request_timeout: int = Field(default=60, ge=1, description="Bulk request timeout (seconds)")

    # MongoDB (document source)
    mongo_uri: str = Field(default="mongodb://localhost:27017", description="MongoDB connection URI")
    mongo_database: str = Field(default="rowsync", description="Database holding source collections")
    mongo_connect_timeout_ms: int = Field(default=5000, ge=100, description="Connection timeout (ms)")
    mongo_server_selection_timeout_ms: int = Field(
        default=5000, ge=100, description="Server selection timeout (ms)"
    )
    mongo_max_pool_size: int = Field(default=10, ge=1, le=500, description="Max connection pool size")

    # MySQL (relational source)
    mysql_host: str = Field(default="localhost", description="MySQL host")
    mysql_port: int = Field(default=3306, ge=1, le=65535, description="MySQL port")
    mysql_user: str = Field(default="root", description="MySQL user")
    mysql_password: str = Field(default="", description="MySQL password")
    mysql_database: str = Field(default="", description="MySQL database name")
    mysql_connect_timeout: int = Field(default=10, ge=1, description="Connection timeout (seconds)")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Use for process lifetime."""
    return Settings()
