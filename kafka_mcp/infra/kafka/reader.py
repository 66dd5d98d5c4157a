"""Single-partition reader used by the bounded consumer."""
from __future__ import annotations

import logging
from typing import Optional

from kafka import KafkaConsumer, TopicPartition  # kafka-python

from kafka_mcp.core.config import Settings, get_settings
from kafka_mcp.core.deadline import Deadline
from kafka_mcp.core.exceptions import BrokerProtocolError
from kafka_mcp.domain.models.message import Message
from kafka_mcp.infra.kafka.clients import common_kwargs
from kafka_mcp.infra.kafka.errors import translate_errors

logger = logging.getLogger(__name__)


class PartitionReader:
    """Reads one message at a time from a single topic partition.

    No consumer group is joined and no offsets are committed, so every
    reader starts from the earliest retained offset.
    """

    def __init__(
        self,
        broker: str,
        topic: str,
        partition: int = 0,
        settings: Settings | None = None,
        consumer_factory=KafkaConsumer,
    ) -> None:
        self.broker = broker
        self.tp = TopicPartition(topic, partition)
        self._settings = settings or get_settings()
        self._factory = consumer_factory
        self._consumer: Optional[KafkaConsumer] = None

    def __enter__(self) -> "PartitionReader":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def open(self) -> None:
        s = self._settings
        with translate_errors(f"cannot connect to broker {self.broker}"):
            self._consumer = self._factory(
                **common_kwargs(self.broker, s),
                group_id=None,
                enable_auto_commit=False,
                auto_offset_reset="earliest",
                fetch_min_bytes=s.consume_fetch_min_bytes,
                fetch_max_bytes=s.consume_fetch_max_bytes,
                fetch_max_wait_ms=s.consume_max_wait_ms,
            )
        try:
            with translate_errors("cannot read partitions"):
                partitions = self._consumer.partitions_for_topic(self.tp.topic)
            if not partitions or self.tp.partition not in partitions:
                raise BrokerProtocolError(
                    f"cannot read message: partition {self.tp.partition} of topic "
                    f"'{self.tp.topic}' does not exist"
                )
            self._consumer.assign([self.tp])
        except BaseException:
            self.close()
            raise

    def read_next(self, deadline: Deadline) -> Message:
        """Block until the next message arrives or *deadline* is over.

        Raises DeadlineExceeded when the deadline elapses or is cancelled,
        and another KafkaToolError for any broker failure.
        """
        if self._consumer is None:
            raise RuntimeError("reader is not open")
        while True:
            deadline.check()
            wait_ms = min(deadline.remaining_ms(), self._settings.consume_max_wait_ms)
            with translate_errors("cannot read message"):
                batch = self._consumer.poll(timeout_ms=wait_ms, max_records=1)
            for records in batch.values():
                if records:
                    return Message.from_record(records[0])

    def close(self) -> None:
        if self._consumer is None:
            return
        consumer, self._consumer = self._consumer, None
        try:
            consumer.close(autocommit=False)
        except Exception:  # noqa: BLE001
            logger.debug("error closing reader for %s", self.tp, exc_info=True)
