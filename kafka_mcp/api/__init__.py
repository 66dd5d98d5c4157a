"""Tool surface: façade plus FastMCP registration."""

from .facade import KafkaToolFacade
from .tools import create_server, register_tools

__all__ = ["KafkaToolFacade", "create_server", "register_tools"]
