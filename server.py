# server.py
import logging

from kafka_mcp.api.tools import create_server
from kafka_mcp.core.config import get_settings
from kafka_mcp.core.logging import setup_logging

logger = logging.getLogger("kafka_mcp.server")


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)

    mcp = create_server(settings)
    logger.info("starting %s on %s transport", settings.server_name, settings.transport)
    try:
        mcp.run(transport=settings.transport)
    except Exception:
        logger.exception("server stopped with an error")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
