"""Core interfaces (ports) for read-only access between services."""

from src.core.interfaces.inventory_reader import IInventoryReader
from src.core.interfaces.order_reader import IOrderReader
from src.core.interfaces.queue_reader import IQueueReader

__all__ = [
    "IInventoryReader",
    "IOrderReader",
    "IQueueReader",
]
