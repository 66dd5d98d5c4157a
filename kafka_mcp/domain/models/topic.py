"""Topic and broker-node value objects used by the admin adapter."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TopicSpec(BaseModel):
    """Desired definition of a topic to create."""

    name: str = Field(
        ...,
        min_length=1,
        pattern=r"^[\w\-.]+$",
        examples=["checkout-orders"],
        description="Kafka topic name",
    )
    partitions: int = Field(default=1, ge=1)
    replication_factor: int = Field(default=1, ge=1)


class BrokerNode(BaseModel):
    """One broker as reported by cluster metadata."""

    model_config = ConfigDict(frozen=True)

    node_id: int
    host: str
    port: int = Field(..., ge=0)

    @property
    def address(self) -> str:
        """``host:port`` form accepted as a bootstrap server."""
        return f"{self.host}:{self.port}"
