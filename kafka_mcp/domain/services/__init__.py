"""Use-case services behind the tool façade."""

from .consumer_service import ConsumerService
from .producer_service import ProducerService
from .topic_service import TopicService

__all__ = ["ConsumerService", "ProducerService", "TopicService"]
