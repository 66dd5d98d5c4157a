"""Wall-clock deadline shared by every read of one consume call."""
from __future__ import annotations

import threading
import time
from typing import Callable

from kafka_mcp.core.exceptions import DeadlineExceeded


class Deadline:
    """A fixed point in time after which blocking work must stop.

    The deadline is set once, when the object is created, and never reset.
    `cancel()` may be called from another thread (e.g. the async tool layer
    when its caller goes away); readers observe it through `check()`.
    """

    def __init__(self, seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._expires_at = clock() + max(0.0, float(seconds))
        self._cancelled = threading.Event()

    def remaining(self) -> float:
        """Seconds left, never negative."""
        return max(0.0, self._expires_at - self._clock())

    def remaining_ms(self) -> int:
        return int(self.remaining() * 1000)

    @property
    def expired(self) -> bool:
        return self._clock() >= self._expires_at

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def check(self) -> None:
        """Raise DeadlineExceeded once the deadline is over or cancelled."""
        if self.cancelled:
            raise DeadlineExceeded("operation cancelled", cancelled=True)
        if self.expired:
            raise DeadlineExceeded()
