"""Publish a single message through a short-lived writer."""
from __future__ import annotations

import logging
from typing import Callable, Optional

from kafka_mcp.core.config import Settings, get_settings
from kafka_mcp.core.deadline import Deadline
from kafka_mcp.infra.kafka.writer import MessageWriter

logger = logging.getLogger(__name__)

WriterFactory = Callable[..., MessageWriter]


class ProducerService:
    def __init__(
        self,
        settings: Settings | None = None,
        writer_factory: WriterFactory = MessageWriter,
    ) -> None:
        self._settings = settings or get_settings()
        self._writer_factory = writer_factory

    def produce(self, broker: str, topic: str, value: str, key: Optional[str] = None):
        """Append one message; the key is attached only when non-empty.

        Returns the broker acknowledgement (partition and offset).
        """
        deadline = Deadline(self._settings.produce_timeout_sec)
        key_bytes = key.encode("utf-8") if key else None
        with self._writer_factory(broker, topic, settings=self._settings) as writer:
            meta = writer.write(value.encode("utf-8"), key_bytes, deadline)
        logger.info("sent message to %s[%d] at offset %d", topic, meta.partition, meta.offset)
        return meta
