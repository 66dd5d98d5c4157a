# kafka_mcp/core/config.py
from functools import lru_cache
from typing import Literal, Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central server settings loaded from environment variables (and .env).

    Notes
    -----
    - Every variable carries the ``KAFKA_MCP_`` prefix, e.g.
        KAFKA_MCP_CONSUME_DEADLINE_SEC=5
    - The broker address is never configured here: each tool call names
      the broker it talks to.
    - `kafka_api_version` accepts a dotted string ("2.8.0") and is exposed
      as the tuple kafka-python expects.
    """
    model_config = SettingsConfigDict(
        env_prefix="KAFKA_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------- Server ----------
    server_name: str = "Kafka MCP Server"
    transport: Literal["stdio", "sse", "streamable-http"] = "stdio"
    log_level: str = "INFO"

    # ---------- Kafka client ----------
    client_id: str = "kafka-mcp-server"
    request_timeout_ms: int = Field(default=20_000, ge=1)
    api_version_auto_timeout_ms: int = Field(default=10_000, ge=1)
    kafka_api_version: Optional[str] = None

    # ---------- Consumption ----------
    consume_deadline_sec: float = Field(
        default=5.0, gt=0,
        description="Wall-clock budget for one whole consume call."
    )
    consume_default_count: int = Field(default=10, ge=1)
    consume_max_wait_ms: int = Field(
        default=1_000, ge=1,
        description="Longest single fetch wait; also the cancellation check interval."
    )
    consume_fetch_min_bytes: int = Field(default=1, ge=1)
    consume_fetch_max_bytes: int = Field(default=10_000_000, ge=1)

    # ---------- Produce / topics ----------
    produce_timeout_sec: float = Field(default=10.0, gt=0)
    default_partitions: int = Field(default=1, ge=1)
    replication_factor: int = Field(default=1, ge=1)

    # Reject non-positive count/partitions instead of falling back to defaults.
    strict_params: bool = False

    @field_validator("log_level", mode="before")
    def _normalize_log_level(cls, v):
        return str(v).strip().upper() if v is not None else "INFO"

    @field_validator("kafka_api_version", mode="after")
    def _check_api_version(cls, v):
        if v is None or not v.strip():
            return None
        parts = v.strip().split(".")
        if not all(p.isdigit() for p in parts):
            raise ValueError("kafka_api_version must look like 2.8.0")
        return v.strip()

    @property
    def api_version(self) -> Optional[Tuple[int, ...]]:
        """`kafka_api_version` as the tuple kafka-python expects."""
        if not self.kafka_api_version:
            return None
        return tuple(int(p) for p in self.kafka_api_version.split("."))


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
