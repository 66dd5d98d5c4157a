"""Use-case coordination for topic listing and creation."""
from __future__ import annotations

import logging
from typing import Callable, Set

from pydantic import ValidationError

from kafka_mcp.core.config import Settings, get_settings
from kafka_mcp.core.exceptions import ParameterValidationError
from kafka_mcp.domain.models.topic import TopicSpec
from kafka_mcp.infra.kafka.admin import KafkaAdminFacade

logger = logging.getLogger(__name__)

AdminFactory = Callable[..., KafkaAdminFacade]


class TopicService:
    """Stateless wrapper opening one admin connection per call."""

    def __init__(
        self,
        settings: Settings | None = None,
        admin_factory: AdminFactory = KafkaAdminFacade,
    ) -> None:
        self._settings = settings or get_settings()
        self._admin_factory = admin_factory

    # ------------------------------------------------------------------ #
    # Queries                                                             #
    # ------------------------------------------------------------------ #
    def list_topics(self, broker: str) -> Set[str]:
        """Return the distinct topic names on *broker* (no defined order)."""
        with self._admin_factory(broker, settings=self._settings) as admin:
            names = admin.list_topic_names()
        logger.info("listed %d topic(s) on %s", len(names), broker)
        return names

    # ------------------------------------------------------------------ #
    # Commands                                                            #
    # ------------------------------------------------------------------ #
    def create_topic(self, broker: str, topic: str, partitions: int) -> TopicSpec:
        """Create *topic* through the cluster controller.

        Metadata mutations must reach the controller node, so the broker is
        asked who the controller is and the create request goes there.
        """
        try:
            spec = TopicSpec(
                name=topic,
                partitions=partitions,
                replication_factor=self._settings.replication_factor,
            )
        except ValidationError as exc:
            raise ParameterValidationError(
                f"invalid topic name '{topic}': use letters, digits, '.', '_' or '-'"
            ) from exc
        with self._admin_factory(broker, settings=self._settings) as admin:
            controller = admin.controller()
        logger.info("controller for %s is node %d at %s", broker, controller.node_id, controller.address)

        with self._admin_factory(controller.address, settings=self._settings) as controller_admin:
            controller_admin.create_topic(spec)
        logger.info("created topic %s with %d partition(s)", spec.name, spec.partitions)
        return spec
