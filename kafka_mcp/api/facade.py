"""Tool façade: parameter validation, dispatch, and error-to-text conversion.

Every public method returns a ``ToolResult``; no exception escapes, so one
failed call never affects the next.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from kafka_mcp.core.config import Settings, get_settings
from kafka_mcp.core.deadline import Deadline
from kafka_mcp.core.exceptions import KafkaToolError, ParameterValidationError
from kafka_mcp.domain.models.tool_result import ToolResult
from kafka_mcp.domain.services import formatter
from kafka_mcp.domain.services.consumer_service import ConsumerService
from kafka_mcp.domain.services.producer_service import ProducerService
from kafka_mcp.domain.services.topic_service import TopicService

logger = logging.getLogger(__name__)

MISSING_BROKER = "Missing broker information"
MISSING_TOPIC = "Missing topic name"
MISSING_MESSAGE = "Missing message content"


def _require(value: Any, message: str) -> str:
    """Return *value* as a stripped non-empty string or raise."""
    if not isinstance(value, str) or not value.strip():
        raise ParameterValidationError(message)
    return value.strip()


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ParameterValidationError("key must be a string")
    return value or None


class KafkaToolFacade:
    """Dispatches the four tool operations to the domain services."""

    def __init__(
        self,
        settings: Settings | None = None,
        topics: TopicService | None = None,
        producer: ProducerService | None = None,
        consumer: ConsumerService | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.topics = topics if topics is not None else TopicService(self.settings)
        self.producer = producer if producer is not None else ProducerService(self.settings)
        self.consumer = consumer if consumer is not None else ConsumerService(self.settings)

    # ------------------------------------------------------------------ #
    # Tools                                                               #
    # ------------------------------------------------------------------ #
    def list_topics(self, broker: Any) -> ToolResult:
        def run() -> str:
            b = _require(broker, MISSING_BROKER)
            return formatter.format_topics(self.topics.list_topics(b))

        return self._invoke("list_topics", "Error listing topics", run, broker=broker)

    def create_topic(self, broker: Any, topic: Any, partitions: Any = None) -> ToolResult:
        def run() -> str:
            b = _require(broker, MISSING_BROKER)
            t = _require(topic, MISSING_TOPIC)
            n = self._positive_or_default(partitions, self.settings.default_partitions, "partitions")
            spec = self.topics.create_topic(b, t, n)
            return formatter.format_created(spec.name, spec.partitions)

        return self._invoke(
            "create_topic", "Error creating topic", run,
            broker=broker, topic=topic, partitions=partitions,
        )

    def produce_message(self, broker: Any, topic: Any, message: Any, key: Any = None) -> ToolResult:
        def run() -> str:
            b = _require(broker, MISSING_BROKER)
            t = _require(topic, MISSING_TOPIC)
            if not isinstance(message, str) or message == "":
                raise ParameterValidationError(MISSING_MESSAGE)
            k = _optional_str(key)
            self.producer.produce(b, t, message, k)
            return formatter.format_produced(t, k)

        return self._invoke(
            "produce_message", "Error sending message", run,
            broker=broker, topic=topic,
        )

    def consume_messages(
        self,
        broker: Any,
        topic: Any,
        count: Any = None,
        deadline: Optional[Deadline] = None,
    ) -> ToolResult:
        def run() -> str:
            b = _require(broker, MISSING_BROKER)
            t = _require(topic, MISSING_TOPIC)
            n = self._positive_or_default(count, self.settings.consume_default_count, "count")
            result = self.consumer.consume(b, t, n, deadline=deadline)
            return formatter.format_messages_payload(t, result)

        return self._invoke(
            "consume_messages", "Error reading messages", run,
            broker=broker, topic=topic, count=count,
        )

    # ------------------------------------------------------------------ #
    # Helpers                                                             #
    # ------------------------------------------------------------------ #
    def _positive_or_default(self, value: Any, default: int, name: str) -> int:
        """Coerce a numeric parameter; non-positive values use *default* unless strict."""
        if value is None:
            return default
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ParameterValidationError(f"{name} must be a number")
        if value <= 0:
            if self.settings.strict_params:
                raise ParameterValidationError(f"{name} must be a positive integer")
            return default
        return int(value)

    def _invoke(self, tool: str, error_prefix: str, run: Callable[[], str], **params: Any) -> ToolResult:
        logger.info("%s called with: %s", tool, ", ".join(f"{k}={v!r}" for k, v in params.items()))
        try:
            return ToolResult.ok(run())
        except ParameterValidationError as exc:
            logger.warning("%s rejected: %s", tool, exc)
            return ToolResult.error(exc.message)
        except KafkaToolError as exc:
            logger.warning("%s failed (%s): %s", tool, exc.kind, exc)
            return ToolResult.error(f"{error_prefix}: {exc.message}")
        except Exception as exc:  # noqa: BLE001
            logger.exception("%s raised an unexpected error", tool)
            return ToolResult.error(f"{error_prefix}: {exc}")
