"""
Inventory Ledger.

Owns every stock-keeping unit: stock levels, pricing, batch/expiry history
and reorder state. All mutations of one SKU are serialized by a per-SKU lock;
different SKUs never contend. Records handed to callers are copies.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Iterable
from contextlib import asynccontextmanager
from datetime import date, datetime, timedelta

from src.config import get_logger
from src.core.concurrency import KeyedLock, RevisionCounter
from src.core.entities.inventory import (
    DEFAULT_GST_RATE,
    DEFAULT_REORDER_LEVEL,
    BatchInfo,
    InventoryItem,
    MovementType,
    ScheduleCode,
    StockBatch,
    StockMovement,
    StockReceipt,
)
from src.core.exceptions import (
    InsufficientStockError,
    ItemNotFoundError,
    ValidationError,
)
from src.core.interfaces.inventory_reader import IInventoryReader

logger = get_logger(__name__)

# BatchInfo fields that overwrite catalog data on a repeat receipt
_CATALOG_FIELDS = (
    "name",
    "category",
    "reorder_level",
    "price",
    "mrp",
    "manufacturer",
    "shelf",
    "salt",
    "hsn_code",
    "gst_rate",
    "schedule",
)


def _validate_item(item: InventoryItem) -> None:
    """Check pricing and threshold invariants of an item."""
    if item.price < 0:
        raise ValidationError("price", "must not be negative", item.price)
    if item.mrp is not None and item.mrp < item.price:
        raise ValidationError("mrp", f"must be at least the price ({item.price})", item.mrp)
    if not 0 <= item.gst_rate <= 100:
        raise ValidationError("gst_rate", "must be between 0 and 100", item.gst_rate)
    if item.reorder_level < 0:
        raise ValidationError("reorder_level", "must not be negative", item.reorder_level)


class LedgerHold:
    """
    Handle over a set of SKUs whose locks are held by the caller.

    Obtained from ``InventoryLedger.hold``; only valid inside that block.
    """

    def __init__(self, ledger: InventoryLedger, skus: frozenset[str]):
        self._ledger = ledger
        self._skus = skus

    def _check(self, sku: str) -> None:
        if sku not in self._skus:
            raise ValueError(f"SKU {sku} is not held by this block")

    def get_item(self, sku: str) -> InventoryItem:
        self._check(sku)
        return self._ledger._require(sku).model_copy(deep=True)

    def reserve_and_decrement(
        self, sku: str, quantity: int, reference: str | None = None
    ) -> int:
        """Decrement a held SKU; same contract as the ledger method."""
        self._check(sku)
        return self._ledger._decrement_locked(sku, quantity, reference)

    def restore(self, sku: str, quantity: int, reference: str | None = None) -> int:
        """Give back stock taken earlier in this block."""
        self._check(sku)
        return self._ledger._adjust_locked(
            sku, quantity, reference=reference, notes="reservation rollback"
        )


class InventoryLedger(IInventoryReader):
    """In-memory ledger of inventory items with per-SKU mutual exclusion."""

    def __init__(
        self,
        default_reorder_level: int = DEFAULT_REORDER_LEVEL,
        default_gst_rate: float = DEFAULT_GST_RATE,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._default_reorder_level = default_reorder_level
        self._default_gst_rate = default_gst_rate
        self._clock = clock or datetime.now

        self._items: dict[str, InventoryItem] = {}
        self._movements: dict[str, list[StockMovement]] = {}
        self._locks = KeyedLock()
        self._revision = RevisionCounter()

    @property
    def revision(self) -> int:
        return self._revision.value

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def receive_stock(
        self, sku: str, batch: BatchInfo, quantity: int
    ) -> StockReceipt:
        """
        Receive a batch of stock.

        Adds to an existing SKU or creates the item on first receipt. A new
        SKU needs at least ``batch.name`` and ``batch.price``.

        Returns:
            The updated item and whether this receipt created it.

        Raises:
            ValidationError: quantity is not positive, required catalog data
                is missing, or the resulting pricing is invalid.
        """
        logger.info(
            "receive_stock_started",
            sku=sku,
            batch_no=batch.batch_no,
            quantity=quantity,
        )
        if quantity <= 0:
            raise ValidationError("quantity", "must be positive", quantity)

        async with self._locks.acquire(sku):
            now = self._clock()
            current = self._items.get(sku)

            if current is None:
                item = self._new_item(sku, batch, now)
                created = True
            else:
                updates = {
                    field: getattr(batch, field)
                    for field in _CATALOG_FIELDS
                    if getattr(batch, field) is not None
                }
                item = current.model_copy(deep=True, update=updates)
                created = False
            _validate_item(item)

            # Expiry tracks the earliest batch still possibly on the shelf;
            # a receipt into an empty SKU starts afresh.
            if item.expiry_date is None or item.stock == 0:
                item.expiry_date = batch.expiry_date
            else:
                item.expiry_date = min(item.expiry_date, batch.expiry_date)

            item.stock += quantity
            item.batch_no = batch.batch_no
            item.batches.append(
                StockBatch(
                    batch_no=batch.batch_no,
                    expiry_date=batch.expiry_date,
                    quantity_received=quantity,
                    received_at=now,
                )
            )
            item.active = True
            item.updated_at = now

            self._items[sku] = item
            self._record(sku, MovementType.IN, quantity, item.stock, batch.batch_no, None)

        if created:
            logger.info("inventory_item_created", sku=sku, name=item.name)
        logger.info(
            "receive_stock_complete",
            sku=sku,
            created=created,
            new_stock=item.stock,
        )
        return StockReceipt(item=item.model_copy(deep=True), created=created)

    async def reserve_and_decrement(
        self, sku: str, quantity: int, reference: str | None = None
    ) -> int:
        """
        Atomically check and decrement stock.

        Returns:
            Stock level after the decrement.

        Raises:
            ValidationError: quantity is not positive.
            ItemNotFoundError: SKU is unknown.
            InsufficientStockError: not enough stock; nothing is changed.
        """
        async with self._locks.acquire(sku):
            return self._decrement_locked(sku, quantity, reference)

    async def adjust_stock(
        self,
        sku: str,
        delta: int,
        reason: str | None = None,
        reference: str | None = None,
    ) -> int:
        """
        Administrative stock correction by a signed delta.

        Returns:
            Stock level after the adjustment.

        Raises:
            ValidationError: delta is zero or would leave stock negative.
            ItemNotFoundError: SKU is unknown.
        """
        async with self._locks.acquire(sku):
            return self._adjust_locked(sku, delta, reference=reference, notes=reason)

    @asynccontextmanager
    async def hold(self, skus: Iterable[str]) -> AsyncIterator[LedgerHold]:
        """
        Lock several SKUs (sorted order) for a multi-line reservation.

        Usage:
            async with ledger.hold(["AMOX500", "PARA500"]) as held:
                held.reserve_and_decrement("AMOX500", 2)
        """
        async with self._locks.acquire_many(skus) as ordered:
            yield LedgerHold(self, frozenset(ordered))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_item(self, sku: str) -> InventoryItem:
        return self._require(sku).model_copy(deep=True)

    async def list_items(
        self, category: str | None = None, include_inactive: bool = True
    ) -> list[InventoryItem]:
        items = [
            item
            for item in self._items.values()
            if (category is None or item.category == category)
            and (include_inactive or item.active)
        ]
        return [item.model_copy(deep=True) for item in sorted(items, key=lambda i: i.sku)]

    async def query_low_stock(self) -> list[InventoryItem]:
        low = [item for item in self._items.values() if item.is_low_stock]
        low.sort(key=lambda i: (i.stock, i.sku))
        return [item.model_copy(deep=True) for item in low]

    async def query_expiring_before(self, cutoff: date) -> list[InventoryItem]:
        expiring = [
            item
            for item in self._items.values()
            if item.expiry_date is not None and item.expiry_date <= cutoff
        ]
        expiring.sort(key=lambda i: (i.expiry_date, i.sku))
        return [item.model_copy(deep=True) for item in expiring]

    async def query_expiring_within(
        self, days: int, today: date | None = None
    ) -> list[InventoryItem]:
        if days < 0:
            raise ValidationError("days", "must not be negative", days)
        today = today or self._clock().date()
        horizon = today + timedelta(days=days)
        return [
            item
            for item in await self.query_expiring_before(horizon)
            if item.expiry_date > today  # type: ignore[operator]
        ]

    async def find_substitutes(
        self,
        salt: str,
        exclude_sku: str | None = None,
        in_stock_only: bool = True,
    ) -> list[InventoryItem]:
        """
        Items sharing an active ingredient, cheapest first.

        Matching is a case-insensitive substring match on the salt name.
        """
        needle = salt.strip().lower()
        if not needle:
            raise ValidationError("salt", "must not be blank", salt)
        matches = [
            item
            for item in self._items.values()
            if item.salt
            and needle in item.salt.lower()
            and item.sku != exclude_sku
            and (item.stock > 0 or not in_stock_only)
        ]
        matches.sort(key=lambda i: (i.price, i.sku))
        return [item.model_copy(deep=True) for item in matches]

    async def get_movements(self, sku: str) -> list[StockMovement]:
        self._require(sku)
        return [m.model_copy() for m in self._movements.get(sku, [])]

    # ------------------------------------------------------------------
    # Internals (caller holds the SKU lock)
    # ------------------------------------------------------------------

    def _require(self, sku: str) -> InventoryItem:
        item = self._items.get(sku)
        if item is None:
            raise ItemNotFoundError(sku)
        return item

    def _new_item(self, sku: str, batch: BatchInfo, now: datetime) -> InventoryItem:
        if not batch.name:
            raise ValidationError("name", "required when receiving a new SKU", sku)
        if batch.price is None:
            raise ValidationError("price", "required when receiving a new SKU", sku)
        return InventoryItem(
            sku=sku,
            name=batch.name,
            category=batch.category or "General",
            reorder_level=(
                batch.reorder_level
                if batch.reorder_level is not None
                else self._default_reorder_level
            ),
            price=batch.price,
            mrp=batch.mrp,
            manufacturer=batch.manufacturer,
            shelf=batch.shelf,
            salt=batch.salt,
            hsn_code=batch.hsn_code,
            gst_rate=(
                batch.gst_rate if batch.gst_rate is not None else self._default_gst_rate
            ),
            schedule=batch.schedule or ScheduleCode.UNSCHEDULED,
            created_at=now,
            updated_at=now,
        )

    def _decrement_locked(
        self, sku: str, quantity: int, reference: str | None
    ) -> int:
        if quantity <= 0:
            raise ValidationError("quantity", "must be positive", quantity)
        item = self._require(sku)
        if item.stock < quantity:
            logger.warning(
                "insufficient_stock",
                sku=sku,
                requested=quantity,
                available=item.stock,
            )
            raise InsufficientStockError(sku=sku, requested=quantity, available=item.stock)

        item.stock -= quantity
        if item.stock == 0:
            item.active = False
            logger.info("inventory_item_retired", sku=sku)
        item.updated_at = self._clock()
        self._record(sku, MovementType.OUT, quantity, item.stock, reference, None)
        return item.stock

    def _adjust_locked(
        self,
        sku: str,
        delta: int,
        reference: str | None = None,
        notes: str | None = None,
    ) -> int:
        if delta == 0:
            raise ValidationError("delta", "must be non-zero", delta)
        item = self._require(sku)
        new_stock = item.stock + delta
        if new_stock < 0:
            raise ValidationError(
                "delta",
                f"would leave stock at {new_stock} (current {item.stock})",
                delta,
            )

        item.stock = new_stock
        item.active = new_stock > 0
        item.updated_at = self._clock()
        self._record(sku, MovementType.ADJUST, delta, new_stock, reference, notes)
        logger.info("stock_adjusted", sku=sku, delta=delta, new_stock=new_stock, reason=notes)
        return new_stock

    def _record(
        self,
        sku: str,
        movement_type: MovementType,
        quantity: int,
        stock_after: int,
        reference: str | None,
        notes: str | None,
    ) -> None:
        self._movements.setdefault(sku, []).append(
            StockMovement(
                sku=sku,
                movement_type=movement_type,
                quantity=quantity,
                stock_after=stock_after,
                reference=reference,
                notes=notes,
                created_at=self._clock(),
            )
        )
        self._revision.bump()
