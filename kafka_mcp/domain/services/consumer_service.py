"""Bounded consumption: read up to N messages from partition 0 within one deadline."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from kafka_mcp.core.config import Settings, get_settings
from kafka_mcp.core.deadline import Deadline
from kafka_mcp.core.exceptions import DeadlineExceeded
from kafka_mcp.domain.models.message import ConsumptionResult, Message
from kafka_mcp.infra.kafka.reader import PartitionReader

logger = logging.getLogger(__name__)

ReaderFactory = Callable[..., PartitionReader]


class ConsumerService:
    """Stateless bounded consumer.

    One call reads from partition 0 of *topic* until `max_count` messages
    are collected or the deadline passes:

    - deadline before the first message  -> EMPTY result
    - deadline after some messages       -> PARTIAL result with those messages
    - `max_count` messages read          -> COMPLETE result
    - any other read failure             -> the KafkaToolError propagates
    """

    PARTITION = 0

    def __init__(
        self,
        settings: Settings | None = None,
        reader_factory: ReaderFactory = PartitionReader,
    ) -> None:
        self._settings = settings or get_settings()
        self._reader_factory = reader_factory

    def consume(
        self,
        broker: str,
        topic: str,
        max_count: int,
        deadline: Optional[Deadline] = None,
    ) -> ConsumptionResult:
        if max_count < 1:
            raise ValueError("max_count must be >= 1")
        deadline = deadline or Deadline(self._settings.consume_deadline_sec)

        messages: List[Message] = []
        with self._reader_factory(broker, topic, self.PARTITION, settings=self._settings) as reader:
            for _ in range(max_count):
                try:
                    messages.append(reader.read_next(deadline))
                except DeadlineExceeded as exc:
                    logger.debug(
                        "%s on %s[%d] after %d message(s)",
                        "cancelled" if exc.cancelled else "deadline hit",
                        topic, self.PARTITION, len(messages),
                    )
                    break

        result = ConsumptionResult.of(messages, complete=len(messages) == max_count)
        logger.info(
            "consumed %d message(s) from %s[%d] (%s)",
            len(result), topic, self.PARTITION, result.outcome.value,
        )
        return result
