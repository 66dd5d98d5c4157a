"""Messages read from a partition and the tagged result of one consume call."""
from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any, Iterable, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Message(BaseModel):
    """Immutable view of one record read from a partition."""

    model_config = ConfigDict(frozen=True)

    topic: str
    partition: int = Field(..., ge=0)
    offset: int = Field(..., ge=0)
    timestamp: dt.datetime
    key: bytes | None = None
    value: bytes = b""

    @classmethod
    def from_record(cls, record: Any) -> "Message":
        """Decode a kafka-python ``ConsumerRecord``."""
        ts_ms = record.timestamp if record.timestamp is not None and record.timestamp >= 0 else 0
        return cls(
            topic=record.topic,
            partition=record.partition,
            offset=record.offset,
            timestamp=dt.datetime.fromtimestamp(ts_ms / 1000.0, tz=dt.timezone.utc),
            key=record.key or None,
            value=record.value if record.value is not None else b"",
        )


class ConsumeOutcome(str, Enum):
    """How a consume call ended."""

    EMPTY = "empty"  # deadline hit before the first message
    PARTIAL = "partial"  # deadline hit after at least one message
    COMPLETE = "complete"  # requested count reached


class ConsumptionResult(BaseModel):
    """Result of a bounded consume call.

    Failures are never encoded here; they are raised as ``KafkaToolError``.
    `messages` keeps read order, which is offset order within the partition.
    """

    model_config = ConfigDict(frozen=True)

    outcome: ConsumeOutcome
    messages: Tuple[Message, ...] = ()

    @model_validator(mode="after")
    def _empty_iff_no_messages(self) -> "ConsumptionResult":
        if (self.outcome is ConsumeOutcome.EMPTY) != (len(self.messages) == 0):
            raise ValueError("EMPTY outcome must carry no messages, and only EMPTY may")
        return self

    @classmethod
    def empty(cls) -> "ConsumptionResult":
        return cls(outcome=ConsumeOutcome.EMPTY)

    @classmethod
    def of(cls, messages: Iterable[Message], complete: bool) -> "ConsumptionResult":
        msgs = tuple(messages)
        if not msgs:
            return cls.empty()
        return cls(
            outcome=ConsumeOutcome.COMPLETE if complete else ConsumeOutcome.PARTIAL,
            messages=msgs,
        )

    @property
    def is_empty(self) -> bool:
        return self.outcome is ConsumeOutcome.EMPTY

    def __len__(self) -> int:
        return len(self.messages)
