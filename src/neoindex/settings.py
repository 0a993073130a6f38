from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NeoIndexSettings(BaseSettings):
    """Client configuration.

    Environment variables are prefixed with NEOINDEX_.
    """

    model_config = SettingsConfigDict(env_prefix="NEOINDEX_", extra="ignore")

    log_level: str = Field(default="INFO", description="Python logging level")

    # --- Server ---
    url: str = Field(default="http://localhost:7474/db/data", description="REST data root")
    username: str | None = None
    password: str | None = None

    # Used when the service root does not advertise index collections
    node_index_path: str = "index/node"
    relationship_index_path: str = "index/relationship"

    # --- HTTP ---
    connect_timeout_s: float = 10.0
    read_timeout_s: float = 60.0
    max_connections: int = 100
    retry_attempts: int = Field(default=3, ge=1, description="Attempts on transient errors")
    retry_backoff_s: float = Field(default=0.5, ge=0, description="Base delay between attempts")


settings = NeoIndexSettings()
