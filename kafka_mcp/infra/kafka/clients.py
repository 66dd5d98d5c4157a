"""Shared kafka-python constructor keyword arguments."""
from __future__ import annotations

from kafka_mcp.core.config import Settings, get_settings


def common_kwargs(broker: str, settings: Settings | None = None) -> dict:
    s = settings or get_settings()
    kw = dict(
        bootstrap_servers=[b.strip() for b in broker.split(",") if b.strip()],
        client_id=s.client_id,
        request_timeout_ms=s.request_timeout_ms,
        api_version_auto_timeout_ms=s.api_version_auto_timeout_ms,
    )
    if s.api_version:
        kw["api_version"] = s.api_version
    return kw
