"""Shared fixtures for unit tests (no broker required)."""
from __future__ import annotations

import datetime as dt
from types import SimpleNamespace
from typing import List, Union

import pytest

from kafka_mcp.core.config import Settings
from kafka_mcp.core.exceptions import DeadlineExceeded
from kafka_mcp.domain.models.message import Message


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedReader:
    """Stand-in for PartitionReader that replays a script of reads.

    Each script item is a Message (returned) or an exception (raised).
    Once the script runs out every read raises DeadlineExceeded, which is
    what an idle partition looks like to the consumer.
    """

    def __init__(self, script: List[Union[Message, BaseException]]) -> None:
        self.script = list(script)
        self.reads = 0
        self.deadlines = []
        self.opened = False
        self.closed = False
        self.args = None

    def __call__(self, broker, topic, partition, settings=None):
        self.args = (broker, topic, partition)
        return self

    def __enter__(self):
        self.opened = True
        return self

    def __exit__(self, *exc_info):
        self.closed = True

    def read_next(self, deadline):
        self.reads += 1
        self.deadlines.append(deadline)
        if not self.script:
            raise DeadlineExceeded()
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


def make_message(offset: int, value: bytes = b"v", key: bytes | None = None, topic: str = "orders") -> Message:
    return Message(
        topic=topic,
        partition=0,
        offset=offset,
        timestamp=dt.datetime(2024, 5, 17, 8, 30, offset % 60, tzinfo=dt.timezone.utc),
        key=key,
        value=value,
    )


def make_record(offset: int, value: bytes = b"v", key: bytes | None = None, topic: str = "orders",
                timestamp: int = 1_715_934_600_000):
    """Duck-typed kafka-python ConsumerRecord."""
    return SimpleNamespace(topic=topic, partition=0, offset=offset, timestamp=timestamp, key=key, value=value)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        consume_deadline_sec=1.0,
        consume_max_wait_ms=250,
        produce_timeout_sec=2.0,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
