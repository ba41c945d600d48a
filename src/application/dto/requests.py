"""Request DTOs for engine commands.

Pydantic v2 models validating caller input.
These are the ONLY contracts between presentation callers and use cases.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from src.core.entities.inventory import ScheduleCode
from src.core.entities.order import OrderStatus
from src.core.entities.queue import QueueStatus, QueueType

# --- Inventory ---


class ReceiveStockRequest(BaseModel):
    """Request to receive a batch of stock (IN movement)."""

    sku: str = Field(..., min_length=1, description="Stock-keeping unit id")
    quantity: int = Field(..., gt=0, description="Units received")
    batch_no: str = Field(..., min_length=1, description="Manufacturer batch number")
    expiry_date: date = Field(..., description="Batch expiry date")

    # Catalog data; required for a SKU's first receipt
    name: str | None = Field(default=None, description="Brand name")
    category: str | None = Field(default=None, description="Therapeutic class")
    reorder_level: int | None = Field(default=None, ge=0, description="Reorder threshold")
    price: float | None = Field(default=None, ge=0, description="Selling price per unit")
    mrp: float | None = Field(default=None, ge=0, description="Maximum retail price")
    manufacturer: str | None = Field(default=None, description="Pharmaceutical company")
    shelf: str | None = Field(default=None, description="Shelf location, e.g. 'A-2'")
    salt: str | None = Field(default=None, description="Active ingredient")
    hsn_code: str | None = Field(default=None, description="HSN tax code")
    gst_rate: float | None = Field(default=None, ge=0, le=100, description="GST rate in %")
    schedule: ScheduleCode | None = Field(default=None, description="Regulatory schedule")


class AdjustStockRequest(BaseModel):
    """Administrative stock correction."""

    sku: str = Field(..., min_length=1, description="Stock-keeping unit id")
    delta: int = Field(..., description="Signed change in units")
    reason: str | None = Field(default=None, description="Why the count changed")


# --- Orders ---


class CreateOrderRequest(BaseModel):
    """Request to place an order."""

    patient_ref: str = Field(..., min_length=1, description="Patient reference (PRN)")
    items: dict[str, int] = Field(
        ...,
        min_length=1,
        description="SKU -> quantity",
    )
    queue_entry_id: str | None = Field(
        default=None,
        description="Queue entry the order originates from",
    )


class AdvanceOrderStatusRequest(BaseModel):
    """Request to move an order to its next status."""

    order_id: str = Field(..., description="Order id")
    target_status: OrderStatus = Field(..., description="Next status")


class CancelOrderRequest(BaseModel):
    """Request to cancel a pending order."""

    order_id: str = Field(..., description="Order id")


# --- Queue ---


class CheckInRequest(BaseModel):
    """Request to check a patient into the counter queue."""

    patient_ref: str = Field(..., min_length=1, description="Patient reference")
    type: QueueType = Field(default=QueueType.OTC, description="Visit type")


class AdvanceQueueEntryRequest(BaseModel):
    """Request to move a queue entry to its next status."""

    entry_id: str = Field(..., description="Queue entry id")
    target_status: QueueStatus = Field(..., description="Next status")


# --- Dashboard ---


class DashboardStatsRequest(BaseModel):
    """Time range for the sales figure of the dashboard."""

    since: datetime | None = Field(default=None, description="Range start (inclusive)")
    until: datetime | None = Field(default=None, description="Range end (inclusive)")
