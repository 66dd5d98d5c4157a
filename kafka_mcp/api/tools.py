"""MCP tool registration: four Kafka tools on a FastMCP server."""

import functools
from typing import Annotated, Callable, Optional

import anyio
from anyio import to_thread
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from kafka_mcp.api.facade import KafkaToolFacade
from kafka_mcp.core.config import Settings, get_settings
from kafka_mcp.core.deadline import Deadline
from kafka_mcp.domain.models.tool_result import ToolResult

BrokerParam = Annotated[str, Field(description="Kafka broker address (e.g. localhost:9092)")]
TopicParam = Annotated[str, Field(description="Topic name")]


async def _run_blocking(fn: Callable[[], ToolResult], deadline: Optional[Deadline] = None) -> str:
    """Run a blocking façade call in a worker thread and unwrap its result.

    Cancelling the caller cancels *deadline*, so an in-flight read stops at
    its next poll slice and the worker releases its reader.
    """
    try:
        result = await to_thread.run_sync(fn, abandon_on_cancel=True)
    except anyio.get_cancelled_exc_class():
        if deadline is not None:
            deadline.cancel()
        raise
    if result.is_error:
        raise ToolError(result.text)
    return result.text


def register_tools(mcp: FastMCP, facade: KafkaToolFacade) -> FastMCP:
    """Attach list_topics, create_topic, produce_message and consume_messages."""

    @mcp.tool(name="list_topics", description="List all topics in Kafka broker")
    async def list_topics(broker: BrokerParam) -> str:
        return await _run_blocking(functools.partial(facade.list_topics, broker))

    @mcp.tool(name="create_topic", description="Create a new topic in Kafka")
    async def create_topic(
        broker: Annotated[str, Field(description="Kafka broker address")],
        topic: Annotated[str, Field(description="Name of the topic to create")],
        partitions: Annotated[
            Optional[float], Field(description="Number of partitions (default: 1)")
        ] = None,
    ) -> str:
        return await _run_blocking(
            functools.partial(facade.create_topic, broker, topic, partitions)
        )

    @mcp.tool(name="produce_message", description="Send message to Kafka topic")
    async def produce_message(
        broker: Annotated[str, Field(description="Kafka broker address")],
        topic: TopicParam,
        message: Annotated[str, Field(description="Message content")],
        key: Annotated[Optional[str], Field(description="Key for message (optional)")] = None,
    ) -> str:
        return await _run_blocking(
            functools.partial(facade.produce_message, broker, topic, message, key)
        )

    @mcp.tool(name="consume_messages", description="Read messages from Kafka topic")
    async def consume_messages(
        broker: Annotated[str, Field(description="Kafka broker address")],
        topic: TopicParam,
        count: Annotated[
            Optional[float], Field(description="Number of messages to read (default: 10)")
        ] = None,
    ) -> str:
        deadline = Deadline(facade.settings.consume_deadline_sec)
        return await _run_blocking(
            functools.partial(facade.consume_messages, broker, topic, count, deadline),
            deadline,
        )

    return mcp


def create_server(settings: Settings | None = None, facade: KafkaToolFacade | None = None) -> FastMCP:
    """Build the FastMCP server with all Kafka tools registered."""
    s = settings or get_settings()
    mcp = FastMCP(
        s.server_name,
        instructions=(
            "Kafka tools for topic discovery, topic creation, publishing one "
            "message and reading a bounded number of messages from partition 0."
        ),
    )
    return register_tools(mcp, facade or KafkaToolFacade(s))
