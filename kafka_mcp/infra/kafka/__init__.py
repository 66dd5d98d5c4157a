"""kafka-python adapters: admin, single-partition reader, writer."""

from .admin import KafkaAdminFacade
from .reader import PartitionReader
from .writer import LeastBytesPartitioner, MessageWriter

__all__ = ["KafkaAdminFacade", "LeastBytesPartitioner", "MessageWriter", "PartitionReader"]
