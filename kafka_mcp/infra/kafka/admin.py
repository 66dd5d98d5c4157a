"""Kafka Admin façade built on kafka-python."""
from __future__ import annotations

import logging
from typing import Set

from kafka.admin import KafkaAdminClient, NewTopic  # kafka-python

from kafka_mcp.core.config import Settings, get_settings
from kafka_mcp.core.exceptions import BrokerProtocolError
from kafka_mcp.domain.models.topic import BrokerNode, TopicSpec
from kafka_mcp.infra.kafka.clients import common_kwargs
from kafka_mcp.infra.kafka.errors import translate_errors

logger = logging.getLogger(__name__)


class KafkaAdminFacade:
    """Encapsulates admin operations against one broker connection.

    Use as a context manager so the connection is released on every path.
    """

    def __init__(
        self,
        bootstrap_servers: str,
        settings: Settings | None = None,
        client_factory=KafkaAdminClient,
    ) -> None:
        self.bootstrap_servers = bootstrap_servers
        self._settings = settings or get_settings()
        with translate_errors(f"cannot connect to broker {bootstrap_servers}"):
            self._client = client_factory(**common_kwargs(bootstrap_servers, self._settings))

    def __enter__(self) -> "KafkaAdminFacade":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        try:
            self._client.close()
        except Exception:  # noqa: BLE001
            logger.debug("error closing admin client for %s", self.bootstrap_servers, exc_info=True)

    # ---------- Topics -----------------------------------------------------

    def list_topic_names(self) -> Set[str]:
        """Return the distinct topic names visible on the broker."""
        with translate_errors("cannot read partitions"):
            names = self._client.list_topics()
        return {str(n) for n in names}

    def create_topic(self, topic: TopicSpec) -> None:
        """Create *topic*; an existing topic is reported as an error.

        Parameters
        ----------
        topic : TopicSpec
            Desired topic definition.
        """
        new_topic = NewTopic(
            name=topic.name,
            num_partitions=topic.partitions,
            replication_factor=topic.replication_factor,
        )
        with translate_errors("cannot create topic"):
            self._client.create_topics([new_topic])

    # ---------- Cluster ----------------------------------------------------

    def controller(self) -> BrokerNode:
        """Resolve the node currently acting as cluster controller."""
        with translate_errors("cannot get controller information"):
            meta = self._client.describe_cluster()
        controller_id = meta.get("controller_id")
        for b in meta.get("brokers", []):
            if b.get("node_id") == controller_id:
                return BrokerNode(node_id=b["node_id"], host=b["host"], port=b["port"])
        raise BrokerProtocolError(
            f"cannot get controller information: controller {controller_id} not in broker list"
        )
