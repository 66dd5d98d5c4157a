"""Error taxonomy shared by the Kafka adapters, services and tool façade."""
from __future__ import annotations


class KafkaToolError(Exception):
    """Base class for every failure a tool call can report.

    Attributes
    ----------
    kind : str
        Short machine-friendly category ("connectivity", "protocol", ...).
    message : str
        Human-readable explanation, safe to show to the caller.
    """

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConnectivityError(KafkaToolError):
    """Broker or controller could not be reached, or a request timed out."""

    kind = "connectivity"


class BrokerProtocolError(KafkaToolError):
    """The broker answered but rejected the request."""

    kind = "protocol"


class ParameterValidationError(KafkaToolError):
    """A tool parameter is missing or invalid; raised before any broker I/O."""

    kind = "validation"


class DeadlineExceeded(KafkaToolError):
    """Control-flow signal: the shared deadline elapsed or the call was cancelled.

    Only readers raise it and only the bounded consumer catches it, turning it
    into an empty or partial result.
    """

    kind = "deadline"

    def __init__(self, message: str = "deadline exceeded", *, cancelled: bool = False) -> None:
        super().__init__(message)
        self.cancelled = cancelled
