"""
Service factory functions for dependency injection.

This module wires the core services together from settings. Use cases
should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from src.config import get_logger, get_settings
from src.core.services import (
    InventoryLedger,
    OrderManager,
    QueueManager,
    StatsAggregator,
)

logger = get_logger(__name__)


# Singleton service instances
_inventory_ledger: InventoryLedger | None = None
_queue_manager: QueueManager | None = None
_order_manager: OrderManager | None = None
_stats_aggregator: StatsAggregator | None = None


def get_inventory_ledger() -> InventoryLedger:
    """Get or create the InventoryLedger instance."""
    global _inventory_ledger

    if _inventory_ledger is None:
        settings = get_settings().inventory
        _inventory_ledger = InventoryLedger(
            default_reorder_level=settings.default_reorder_level,
            default_gst_rate=settings.default_gst_rate,
        )
        logger.info("inventory_ledger_created")
    return _inventory_ledger


def get_queue_manager() -> QueueManager:
    """Get or create the QueueManager instance."""
    global _queue_manager

    if _queue_manager is None:
        settings = get_settings().queue
        _queue_manager = QueueManager(
            day_boundary_hour=settings.day_boundary_hour,
            id_prefix=settings.id_prefix,
        )
        logger.info("queue_manager_created", day_boundary_hour=settings.day_boundary_hour)
    return _queue_manager


def get_order_manager() -> OrderManager:
    """
    Get or create the OrderManager instance.

    Shares the ledger and queue singletons: orders reserve stock in the
    ledger and may reference queue entries.
    """
    global _order_manager

    if _order_manager is None:
        settings = get_settings().orders
        _order_manager = OrderManager(
            ledger=get_inventory_ledger(),
            queue=get_queue_manager(),
            id_prefix=settings.id_prefix,
            amount_precision=settings.amount_precision,
        )
        logger.info("order_manager_created")
    return _order_manager


def get_stats_aggregator() -> StatsAggregator:
    """Get or create the StatsAggregator over the three singletons."""
    global _stats_aggregator

    if _stats_aggregator is None:
        settings = get_settings()
        _stats_aggregator = StatsAggregator(
            inventory=get_inventory_ledger(),
            orders=get_order_manager(),
            queue=get_queue_manager(),
            expiring_soon_days=settings.inventory.expiring_soon_days,
            cache_enabled=settings.stats.cache_enabled,
            cache_max_entries=settings.stats.cache_max_entries,
        )
    return _stats_aggregator


def reset_services() -> None:
    """Reset all singleton services (for testing)."""
    global _inventory_ledger, _queue_manager, _order_manager, _stats_aggregator

    _inventory_ledger = None
    _queue_manager = None
    _order_manager = None
    _stats_aggregator = None
