"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py
- src/core/concurrency.py

NO application imports. All collaborators injected via constructor.
"""

from src.core.services.inventory_ledger import InventoryLedger, LedgerHold
from src.core.services.order_manager import OrderManager
from src.core.services.queue_manager import QueueManager
from src.core.services.stats_aggregator import StatsAggregator

__all__ = [
    # Inventory
    "InventoryLedger",
    "LedgerHold",
    # Orders
    "OrderManager",
    # Queue
    "QueueManager",
    # Dashboard
    "StatsAggregator",
]
