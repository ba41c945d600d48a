"""
Order Lifecycle Manager.

Owns orders and their status progression. Creating an order reserves stock
for every line in the inventory ledger; either all lines are reserved or none
are. Lock order is always: order id, then SKUs in sorted order.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime

from src.config import get_logger
from src.core.concurrency import KeyedLock, RevisionCounter, SequenceGenerator
from src.core.entities.inventory import InventoryItem
from src.core.entities.order import (
    ORDER_TRANSITIONS,
    Order,
    OrderLine,
    OrderStatus,
    StatusChange,
)
from src.core.exceptions import (
    InsufficientStockError,
    InvalidTransitionError,
    NotFoundError,
    OrderNotFoundError,
    ValidationError,
)
from src.core.interfaces.order_reader import IOrderReader
from src.core.interfaces.queue_reader import IQueueReader
from src.core.services.inventory_ledger import InventoryLedger

logger = get_logger(__name__)


def _snapshot_line(item: InventoryItem, quantity: int) -> OrderLine:
    return OrderLine(
        sku=item.sku,
        name=item.name,
        quantity=quantity,
        unit_price=item.price,
        gst_rate=item.gst_rate,
        schedule=item.schedule,
        batch_no=item.batch_no,
    )


class OrderManager(IOrderReader):
    """In-memory order table with per-order mutual exclusion."""

    def __init__(
        self,
        ledger: InventoryLedger,
        queue: IQueueReader | None = None,
        id_prefix: str = "ORD",
        amount_precision: int = 2,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._ledger = ledger
        self._queue = queue
        self._precision = amount_precision
        self._clock = clock or datetime.now
        self._ids = SequenceGenerator(id_prefix)

        self._orders: dict[str, Order] = {}
        self._locks = KeyedLock()
        self._revision = RevisionCounter()

    @property
    def revision(self) -> int:
        return self._revision.value

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def create_order(
        self,
        patient_ref: str,
        line_items: Mapping[str, int],
        queue_entry_id: str | None = None,
    ) -> Order:
        """
        Place an order and reserve stock for all of its lines.

        Args:
            patient_ref: Patient the order is for.
            line_items: SKU -> quantity.
            queue_entry_id: Queue entry the order originates from, if any.

        Raises:
            ValidationError: blank patient, no lines, or a non-positive quantity.
            NotFoundError: unknown SKU or queue entry.
            InsufficientStockError: a line cannot be filled; no stock is taken.
        """
        if not patient_ref or not patient_ref.strip():
            raise ValidationError("patient_ref", "must not be blank", patient_ref)
        if not line_items:
            raise ValidationError("line_items", "order needs at least one line")
        for sku, quantity in line_items.items():
            if quantity <= 0:
                raise ValidationError(f"line_items.{sku}", "quantity must be positive", quantity)
        if queue_entry_id is not None and self._queue is not None:
            await self._queue.get_entry(queue_entry_id)

        order_id = self._ids.next_id()
        logger.info(
            "create_order_started",
            order_id=order_id,
            patient_ref=patient_ref,
            lines=len(line_items),
        )

        async with self._ledger.hold(line_items) as held:
            reserved: list[tuple[str, int]] = []
            try:
                for sku in sorted(line_items):
                    held.reserve_and_decrement(sku, line_items[sku], reference=order_id)
                    reserved.append((sku, line_items[sku]))
            except (InsufficientStockError, NotFoundError):
                for sku, quantity in reversed(reserved):
                    held.restore(sku, quantity, reference=order_id)
                logger.warning(
                    "create_order_rolled_back",
                    order_id=order_id,
                    restored_lines=len(reserved),
                )
                raise
            lines = [_snapshot_line(held.get_item(sku), qty) for sku, qty in reserved]

        now = self._clock()
        order = Order(
            id=order_id,
            patient_ref=patient_ref.strip(),
            lines=lines,
            amount=round(sum(line.line_total for line in lines), self._precision),
            status=OrderStatus.PENDING,
            queue_entry_id=queue_entry_id,
            status_history=[StatusChange(status=OrderStatus.PENDING, changed_at=now)],
            created_at=now,
            updated_at=now,
        )
        self._orders[order_id] = order
        self._revision.bump()

        logger.info("create_order_complete", order_id=order_id, amount=order.amount)
        return order.model_copy(deep=True)

    async def advance_status(
        self, order_id: str, target_status: OrderStatus | str
    ) -> Order:
        """
        Move an order to the immediate successor of its current status.

        Raises:
            OrderNotFoundError: unknown order id.
            InvalidTransitionError: skip, regression, repeat, or terminal order.
        """
        try:
            target = OrderStatus(target_status)
        except ValueError:
            raise ValidationError(
                "target_status", "unknown order status", target_status
            ) from None

        async with self._locks.acquire(order_id):
            order = self._require(order_id)
            if ORDER_TRANSITIONS[order.status] != target:
                logger.warning(
                    "order_transition_rejected",
                    order_id=order_id,
                    current=order.status.value,
                    target=target.value,
                )
                raise InvalidTransitionError(
                    "order", order_id, order.status.value, target.value
                )
            self._set_status(order, target)

        logger.info("order_advanced", order_id=order_id, status=target.value)
        return order.model_copy(deep=True)

    async def cancel_order(self, order_id: str) -> Order:
        """
        Cancel a PENDING order and return its stock to the ledger.

        Raises:
            OrderNotFoundError: unknown order id.
            InvalidTransitionError: the order has progressed past PENDING.
        """
        async with self._locks.acquire(order_id):
            order = self._require(order_id)
            if order.status != OrderStatus.PENDING:
                raise InvalidTransitionError(
                    "order", order_id, order.status.value, OrderStatus.CANCELLED.value
                )
            for line in order.lines:
                await self._ledger.adjust_stock(
                    line.sku,
                    line.quantity,
                    reason="order cancelled",
                    reference=order_id,
                )
            self._set_status(order, OrderStatus.CANCELLED)

        logger.info("order_cancelled", order_id=order_id, lines=len(order.lines))
        return order.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_order(self, order_id: str) -> Order:
        return self._require(order_id).model_copy(deep=True)

    async def list_orders(
        self,
        status: OrderStatus | None = None,
        since: datetime | None = None,
        until: datetime | None = None,
        patient_ref: str | None = None,
    ) -> list[Order]:
        """Orders matching the filters, newest first (insertion order breaks ties)."""
        matches = [
            (seq, order)
            for seq, order in enumerate(self._orders.values())
            if (status is None or order.status == status)
            and (since is None or order.created_at >= since)
            and (until is None or order.created_at <= until)
            and (patient_ref is None or order.patient_ref == patient_ref)
        ]
        matches.sort(key=lambda pair: (pair[1].created_at, pair[0]), reverse=True)
        return [order.model_copy(deep=True) for _, order in matches]

    async def count_orders(self, status: OrderStatus | None = None) -> int:
        if status is None:
            return len(self._orders)
        return sum(1 for order in self._orders.values() if order.status == status)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require(self, order_id: str) -> Order:
        order = self._orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def _set_status(self, order: Order, status: OrderStatus) -> None:
        now = self._clock()
        order.status = status
        order.updated_at = now
        order.status_history.append(StatusChange(status=status, changed_at=now))
        if status == OrderStatus.DELIVERED:
            order.fulfilled_at = now
        self._revision.bump()
