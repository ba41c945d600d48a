"""
Order domain entities.

Orders move along a fixed chain of statuses; the transition table below is
the single source of truth for what an advance may do.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from src.core.entities.inventory import ScheduleCode


class OrderStatus(str, Enum):
    """Order fulfillment status."""

    PENDING = "PENDING"  # accepted, stock reserved
    READY = "READY"  # prepared, awaiting dispatch
    DISPATCHED = "DISPATCHED"  # handed to delivery
    DELIVERED = "DELIVERED"  # terminal success
    CANCELLED = "CANCELLED"  # terminal, reservations released


# Status -> the only status an advance may move to
ORDER_TRANSITIONS: dict[OrderStatus, OrderStatus | None] = {
    OrderStatus.PENDING: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.DISPATCHED,
    OrderStatus.DISPATCHED: OrderStatus.DELIVERED,
    OrderStatus.DELIVERED: None,
    OrderStatus.CANCELLED: None,
}

# Statuses whose amount counts as a sale
SALE_STATUSES = frozenset(
    {OrderStatus.READY, OrderStatus.DISPATCHED, OrderStatus.DELIVERED}
)


class OrderLine(BaseModel):
    """Snapshot of one ordered SKU at the time the order was placed."""

    sku: str
    name: str
    quantity: int
    unit_price: float
    gst_rate: float = 0.0
    schedule: ScheduleCode = ScheduleCode.UNSCHEDULED
    batch_no: str | None = None

    @property
    def line_total(self) -> float:
        """Quantity x price, GST inclusive."""
        return self.quantity * self.unit_price * (1 + self.gst_rate / 100)


class StatusChange(BaseModel):
    """Audit record of a status change."""

    status: OrderStatus
    changed_at: datetime


class Order(BaseModel):
    """A patient order placed against the inventory ledger."""

    id: str
    patient_ref: str
    lines: list[OrderLine]
    amount: float
    status: OrderStatus = OrderStatus.PENDING
    queue_entry_id: str | None = None
    status_history: list[StatusChange] = Field(default_factory=list)

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    fulfilled_at: datetime | None = None

    @property
    def line_items(self) -> dict[str, int]:
        """SKU -> quantity mapping of the order."""
        return {line.sku: line.quantity for line in self.lines}

    @property
    def is_terminal(self) -> bool:
        return ORDER_TRANSITIONS[self.status] is None

    @property
    def has_controlled_items(self) -> bool:
        """True if any line is a narcotic-controlled (Schedule X) drug."""
        return any(line.schedule == ScheduleCode.X for line in self.lines)
