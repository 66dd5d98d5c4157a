"""Render consumption and listing results as plain text tool payloads."""
from __future__ import annotations

import datetime as dt
from typing import Iterable, List

from kafka_mcp.domain.models.message import ConsumptionResult, Message

EMPTY_TOPIC_TEXT = "Topic is empty or no new messages"
NO_TOPICS_TEXT = "No topics found in broker"

_TS_FORMAT = "%Y-%m-%d %H:%M:%S"


def _text(payload: bytes | None) -> str:
    return (payload or b"").decode("utf-8", errors="replace")


def _fmt_ts(ts: dt.datetime) -> str:
    if ts.tzinfo is not None:
        ts = ts.astimezone(dt.timezone.utc)
    return ts.strftime(_TS_FORMAT)


def format_message(msg: Message) -> str:
    """One line: ``[ts] Key: k, Value: v (Partition: p, Offset: o)``."""
    key = f"Key: {_text(msg.key)}, " if msg.key else ""
    return (
        f"[{_fmt_ts(msg.timestamp)}] {key}Value: {_text(msg.value)} "
        f"(Partition: {msg.partition}, Offset: {msg.offset})"
    )


def format_consumption(result: ConsumptionResult) -> str:
    """1-based enumeration in read order, or the fixed empty-topic text."""
    if result.is_empty:
        return EMPTY_TOPIC_TEXT
    return "".join(
        f"{i}. {format_message(m)}\n" for i, m in enumerate(result.messages, start=1)
    )


def format_topics(names: Iterable[str]) -> str:
    """Sorted, 1-based topic listing, or the fixed no-topics text."""
    ordered: List[str] = sorted(set(names))
    if not ordered:
        return NO_TOPICS_TEXT
    lines = "".join(f"{i}. {name}\n" for i, name in enumerate(ordered, start=1))
    return f"List of topics:\n{lines}"


def format_created(topic: str, partitions: int) -> str:
    return f"✅ Successfully created topic '{topic}' with {partitions} partitions"


def format_produced(topic: str, key: str | None) -> str:
    key_info = f" with key '{key}'" if key else ""
    return f"✅ Successfully sent message to topic '{topic}'{key_info}"


def format_messages_payload(topic: str, result: ConsumptionResult) -> str:
    """Tool payload for consume_messages."""
    if result.is_empty:
        return EMPTY_TOPIC_TEXT
    return f"📨 Messages in topic '{topic}':\n\n{format_consumption(result)}"
