"""Short-lived single-topic writer with least-bytes partition balancing."""
from __future__ import annotations

import logging
import threading
import time
from collections import defaultdict
from typing import Dict, Optional, Sequence

from kafka import KafkaProducer  # kafka-python

from kafka_mcp.core.config import Settings, get_settings
from kafka_mcp.core.deadline import Deadline
from kafka_mcp.infra.kafka.clients import common_kwargs
from kafka_mcp.infra.kafka.errors import translate_errors

logger = logging.getLogger(__name__)


class LeastBytesPartitioner:
    """Route each record to the partition that has received the fewest bytes.

    Ties go to the lowest partition id. Keys do not influence placement.
    Follows kafka-python's ``partitioner(key, all_partitions, available)``
    calling convention.
    """

    def __init__(self) -> None:
        self._written: Dict[int, int] = defaultdict(int)
        self._lock = threading.Lock()

    def __call__(
        self,
        key: Optional[bytes],
        all_partitions: Sequence[int],
        available: Sequence[int],
    ) -> int:
        candidates = sorted(available or all_partitions)
        with self._lock:
            return min(candidates, key=lambda p: self._written[p])

    def record(self, partition: int, nbytes: int) -> None:
        with self._lock:
            self._written[partition] += nbytes


class MessageWriter:
    """Writes messages to one topic; close it (or use ``with``) when done."""

    def __init__(
        self,
        broker: str,
        topic: str,
        settings: Settings | None = None,
        producer_factory=KafkaProducer,
        partitioner: LeastBytesPartitioner | None = None,
    ) -> None:
        self.broker = broker
        self.topic = topic
        self._settings = settings or get_settings()
        self._partitioner = partitioner or LeastBytesPartitioner()
        with translate_errors(f"cannot connect to broker {broker}"):
            self._producer = producer_factory(
                **common_kwargs(broker, self._settings),
                partitioner=self._partitioner,
                retries=0,
                max_block_ms=int(self._settings.produce_timeout_sec * 1000),
            )

    def __enter__(self) -> "MessageWriter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def write(self, value: bytes, key: Optional[bytes], deadline: Deadline):
        """Append one record and wait for the broker acknowledgement.

        Returns kafka-python's ``RecordMetadata`` (partition, offset, ...).
        """
        with translate_errors("cannot send message"):
            future = self._producer.send(
                self.topic,
                value=value,
                key=key,
                timestamp_ms=int(time.time() * 1000),
            )
            meta = future.get(timeout=deadline.remaining())
        self._partitioner.record(meta.partition, len(value) + len(key or b""))
        return meta

    def close(self) -> None:
        try:
            self._producer.close(timeout=self._settings.produce_timeout_sec)
        except Exception:  # noqa: BLE001
            logger.debug("error closing writer for %s", self.topic, exc_info=True)
