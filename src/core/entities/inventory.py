"""Inventory domain entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


# Catalog defaults for a SKU received without them
DEFAULT_REORDER_LEVEL = 10
DEFAULT_GST_RATE = 12.0


class ScheduleCode(str, Enum):
    """Regulatory schedule of a drug."""

    UNSCHEDULED = "UNSCHEDULED"
    OTC = "OTC"
    H = "H"  # prescription only
    H1 = "H1"  # prescription only, separate register
    X = "X"  # narcotic / psychotropic controlled
    G = "G"  # under medical supervision


class MovementType(str, Enum):
    """Types of stock movements."""

    IN = "in"
    OUT = "out"
    ADJUST = "adjust"


class BatchInfo(BaseModel):
    """
    Batch and catalog data accompanying a stock receipt.

    ``batch_no`` and ``expiry_date`` describe the physical batch. The catalog
    attributes are required only when the SKU is seen for the first time;
    on later receipts any non-None value overwrites the stored one.
    """

    batch_no: str
    expiry_date: date

    name: str | None = None
    category: str | None = None
    reorder_level: int | None = None
    price: float | None = None
    mrp: float | None = None
    manufacturer: str | None = None
    shelf: str | None = None
    salt: str | None = None
    hsn_code: str | None = None
    gst_rate: float | None = None
    schedule: ScheduleCode | None = None


class StockBatch(BaseModel):
    """One received batch of a SKU, kept for expiry/batch audits."""

    batch_no: str
    expiry_date: date
    quantity_received: int
    received_at: datetime = Field(default_factory=datetime.now)


class InventoryItem(BaseModel):
    """A stock-keeping unit with its stock level, pricing and regulatory data."""

    sku: str
    name: str
    category: str = "General"
    stock: int = 0
    reorder_level: int = 0
    price: float = 0.0
    mrp: float | None = None
    expiry_date: date | None = None  # earliest expiry across batches
    manufacturer: str | None = None
    shelf: str | None = None
    batch_no: str | None = None  # most recently received batch
    salt: str | None = None
    hsn_code: str | None = None
    gst_rate: float = 0.0
    schedule: ScheduleCode = ScheduleCode.UNSCHEDULED

    # Soft retirement: False once stock hits zero, until restocked
    active: bool = True
    batches: list[StockBatch] = Field(default_factory=list)

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_low_stock(self) -> bool:
        """Stock at or below the reorder threshold."""
        return self.stock <= self.reorder_level

    @property
    def stock_value(self) -> float:
        """Stock value at selling price."""
        return self.stock * self.price


class StockMovement(BaseModel):
    """Records a single stock movement (in, out, or adjustment)."""

    sku: str
    movement_type: MovementType
    quantity: int  # signed for ADJUST, positive otherwise
    stock_after: int
    reference: str | None = None  # e.g. order id, batch number
    notes: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)


class StockReceipt(BaseModel):
    """Outcome of receiving a batch into the ledger."""

    item: InventoryItem
    created: bool = False  # first receipt of the SKU
