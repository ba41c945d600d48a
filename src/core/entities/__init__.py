"""Core domain entities."""

from src.core.entities.inventory import (
    BatchInfo,
    InventoryItem,
    MovementType,
    ScheduleCode,
    StockBatch,
    StockMovement,
    StockReceipt,
)
from src.core.entities.order import (
    ORDER_TRANSITIONS,
    SALE_STATUSES,
    Order,
    OrderLine,
    OrderStatus,
    StatusChange,
)
from src.core.entities.queue import (
    QUEUE_TRANSITIONS,
    QueueEntry,
    QueueStatus,
    QueueType,
)
from src.core.entities.stats import DashboardStats

__all__ = [
    # Inventory entities
    "InventoryItem",
    "BatchInfo",
    "StockBatch",
    "StockMovement",
    "StockReceipt",
    "MovementType",
    "ScheduleCode",
    # Order entities
    "Order",
    "OrderLine",
    "OrderStatus",
    "StatusChange",
    "ORDER_TRANSITIONS",
    "SALE_STATUSES",
    # Queue entities
    "QueueEntry",
    "QueueStatus",
    "QueueType",
    "QUEUE_TRANSITIONS",
    # Dashboard
    "DashboardStats",
]
