"""
Stats Aggregator.

Read-only projection over the ledger, orders and queue. Every figure is
memoized against the three revision counters. When any of them moves the
whole memo is dropped; otherwise it holds at most ``cache_max_entries``
figures, least recently used evicted first. No locks are taken; a figure
computed while a write lands is returned but not cached.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Awaitable, Callable, Hashable
from datetime import date, datetime
from typing import Any, TypeVar

from src.config import get_logger
from src.core.entities.order import SALE_STATUSES, OrderStatus
from src.core.entities.stats import DashboardStats
from src.core.interfaces.inventory_reader import IInventoryReader
from src.core.interfaces.order_reader import IOrderReader
from src.core.interfaces.queue_reader import IQueueReader

logger = get_logger(__name__)

T = TypeVar("T")


class StatsAggregator:
    """Dashboard figures derived from read-only views of the three managers."""

    def __init__(
        self,
        inventory: IInventoryReader,
        orders: IOrderReader,
        queue: IQueueReader,
        expiring_soon_days: int = 90,
        cache_enabled: bool = True,
        cache_max_entries: int = 64,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._inventory = inventory
        self._orders = orders
        self._queue = queue
        self._expiring_soon_days = expiring_soon_days
        self._cache_enabled = cache_enabled
        self._clock = clock or datetime.now
        self._cache_max_entries = cache_max_entries
        self._cache: OrderedDict[Hashable, Any] = OrderedDict()
        self._cache_revisions: tuple[int, int, int] | None = None

    def revisions(self) -> tuple[int, int, int]:
        """Combined (inventory, orders, queue) revision."""
        return (self._inventory.revision, self._orders.revision, self._queue.revision)

    async def _memoized(self, key: Hashable, compute: Callable[[], Awaitable[T]]) -> T:
        revisions = self.revisions()
        if self._cache_enabled:
            if revisions != self._cache_revisions:
                self._cache.clear()
                self._cache_revisions = revisions
            elif key in self._cache:
                self._cache.move_to_end(key)
                return self._cache[key]

        value = await compute()
        if self._cache_enabled and self.revisions() == self._cache_revisions == revisions:
            self._cache[key] = value
            while len(self._cache) > self._cache_max_entries:
                self._cache.popitem(last=False)
        return value

    async def total_sales(
        self, since: datetime | None = None, until: datetime | None = None
    ) -> float:
        """Sum of order amounts in READY, DISPATCHED or DELIVERED, created in range."""

        async def compute() -> float:
            orders = await self._orders.list_orders(since=since, until=until)
            return round(sum(o.amount for o in orders if o.status in SALE_STATUSES), 2)

        return await self._memoized(("total_sales", since, until), compute)

    async def orders_count(self, status: OrderStatus | None = None) -> int:
        return await self._memoized(
            ("orders_count", status), lambda: self._orders.count_orders(status)
        )

    async def active_queue_count(self) -> int:
        return await self._memoized(("active_queue",), self._queue.current_queue_length)

    async def low_stock_count(self) -> int:
        async def compute() -> int:
            return len(await self._inventory.query_low_stock())

        return await self._memoized(("low_stock",), compute)

    async def expiring_soon_count(
        self, days: int | None = None, today: date | None = None
    ) -> int:
        """Items expiring within ``days`` (default from settings), not yet expired."""
        days = self._expiring_soon_days if days is None else days
        today = today or self._clock().date()

        async def compute() -> int:
            return len(await self._inventory.query_expiring_within(days, today=today))

        return await self._memoized(("expiring_soon", days, today), compute)

    async def dashboard(
        self, since: datetime | None = None, until: datetime | None = None
    ) -> DashboardStats:
        """All stat-grid figures in one snapshot."""
        stats = DashboardStats(
            total_sales=await self.total_sales(since, until),
            orders_count=await self.orders_count(),
            active_queue=await self.active_queue_count(),
            low_stock=await self.low_stock_count(),
            expiring_soon=await self.expiring_soon_count(),
            orders_by_status={
                status.value: await self.orders_count(status) for status in OrderStatus
            },
            generated_at=self._clock(),
        )
        logger.debug("dashboard_stats_computed", revisions=self.revisions())
        return stats

    def clear_cache(self) -> None:
        self._cache.clear()
        self._cache_revisions = None
