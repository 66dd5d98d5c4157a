import pytest
from pydantic import ValidationError

from kafka_mcp.core.config import Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.transport == "stdio"
    assert s.consume_deadline_sec == 5.0
    assert s.consume_default_count == 10
    assert s.consume_max_wait_ms == 1000
    assert s.consume_fetch_max_bytes == 10_000_000
    assert s.produce_timeout_sec == 10.0
    assert s.default_partitions == 1
    assert s.replication_factor == 1
    assert s.strict_params is False
    assert s.api_version is None


def test_environment_overrides_use_prefix(monkeypatch):
    monkeypatch.setenv("KAFKA_MCP_CONSUME_DEADLINE_SEC", "2.5")
    monkeypatch.setenv("KAFKA_MCP_STRICT_PARAMS", "true")
    monkeypatch.setenv("KAFKA_MCP_LOG_LEVEL", "debug")
    monkeypatch.setenv("KAFKA_MCP_TRANSPORT", "sse")

    s = Settings(_env_file=None)
    assert s.consume_deadline_sec == 2.5
    assert s.strict_params is True
    assert s.log_level == "DEBUG"
    assert s.transport == "sse"


def test_api_version_is_parsed_into_a_tuple(monkeypatch):
    monkeypatch.setenv("KAFKA_MCP_KAFKA_API_VERSION", "2.8.0")
    assert Settings(_env_file=None).api_version == (2, 8, 0)
    assert Settings(_env_file=None, kafka_api_version="").api_version is None
    with pytest.raises(ValidationError):
        Settings(_env_file=None, kafka_api_version="latest")


@pytest.mark.parametrize("field, value", [
    ("consume_deadline_sec", 0),
    ("consume_default_count", 0),
    ("produce_timeout_sec", -1),
    ("transport", "carrier-pigeon"),
])
def test_invalid_values_are_rejected(field, value):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: value})
