"""Normalize kafka-python failures into the tool error taxonomy."""
from __future__ import annotations

import contextlib
import socket
from typing import Iterator

from kafka.errors import (
    KafkaConnectionError,
    KafkaError,
    KafkaTimeoutError,  # client-side request timeout
    NoBrokersAvailable,
    NodeNotReadyError,
    RequestTimedOutError,  # broker-side request timeout
)

from kafka_mcp.core.exceptions import (
    BrokerProtocolError,
    ConnectivityError,
    KafkaToolError,
)

_CONNECTIVITY = (
    NoBrokersAvailable,
    KafkaConnectionError,
    NodeNotReadyError,
    KafkaTimeoutError,
    RequestTimedOutError,
)


def classify(exc: BaseException, action: str) -> KafkaToolError:
    """Map *exc* to a KafkaToolError whose message starts with *action*."""
    if isinstance(exc, KafkaToolError):
        return exc
    message = f"{action}: {_describe(exc)}"
    if isinstance(exc, _CONNECTIVITY):
        return ConnectivityError(message)
    # lower layers (DNS / TCP) surface as OSError
    if isinstance(exc, (socket.timeout, OSError)):
        return ConnectivityError(message)
    return BrokerProtocolError(message)


@contextlib.contextmanager
def translate_errors(action: str) -> Iterator[None]:
    """Re-raise kafka-python / socket errors as KafkaToolError subclasses.

    Errors that already belong to the taxonomy pass through untouched.
    """
    try:
        yield
    except KafkaToolError:
        raise
    except (KafkaError, OSError, ValueError) as exc:
        raise classify(exc, action) from exc


def _describe(exc: BaseException) -> str:
    text = str(exc).strip()
    name = type(exc).__name__
    if not text:
        return name
    return text if text.startswith(name) else f"{name}: {text}"
