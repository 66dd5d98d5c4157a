"""Process-wide logging setup."""
from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Log to stderr; stdout carries the stdio tool protocol."""
    lvl = getattr(logging, str(level).upper(), logging.INFO)
    logging.basicConfig(level=lvl, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("kafka").setLevel(logging.WARNING)
