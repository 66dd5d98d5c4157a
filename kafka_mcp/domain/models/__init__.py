"""Re-export the domain value objects for short imports."""

from .message import ConsumeOutcome, ConsumptionResult, Message
from .tool_result import ToolResult
from .topic import BrokerNode, TopicSpec

__all__ = [
    "BrokerNode",
    "ConsumeOutcome",
    "ConsumptionResult",
    "Message",
    "ToolResult",
    "TopicSpec",
]
