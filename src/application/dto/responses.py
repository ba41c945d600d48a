"""Response DTOs for engine commands and queries.

Pydantic v2 models for serialization towards presentation callers.
These are the ONLY contracts between use cases and the presentation layer.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standardized failure result.

    Every failure includes:
    - error_code: machine-readable code (e.g. INSUFFICIENT_STOCK)
    - message: human-readable description
    - hint: suggested recovery action
    - command: command that failed
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    details: dict[str, Any] = Field(default_factory=dict, description="Error details")
    command: str | None = Field(default=None, description="Command name")
    timestamp: datetime = Field(default_factory=datetime.now)


class CommandResult(BaseModel):
    """Explicit success/failure wrapper returned at the command boundary."""

    ok: bool
    value: Any = None
    error: ErrorResponse | None = None


# --- Inventory ---


class InventoryItemResponse(BaseModel):
    """Inventory item response DTO."""

    sku: str
    name: str
    category: str
    stock: int
    reorder_level: int
    price: float
    mrp: float | None = None
    expiry_date: date | None = None
    batch_no: str | None = None
    salt: str | None = None
    shelf: str | None = None
    gst_rate: float
    schedule: str
    active: bool
    low_stock: bool
    updated_at: datetime


class ReceiveStockResponse(BaseModel):
    """Response for stock receive operation."""

    item: InventoryItemResponse
    received: int
    created: bool = False


class StockLevelResponse(BaseModel):
    """Stock level after an adjustment."""

    sku: str
    stock: int
    low_stock: bool


# --- Orders ---


class OrderLineResponse(BaseModel):
    """Order line response DTO."""

    sku: str
    name: str
    quantity: int
    unit_price: float
    gst_rate: float
    line_total: float
    schedule: str


class OrderResponse(BaseModel):
    """Order response DTO."""

    id: str
    patient_ref: str
    status: str
    amount: float
    lines: list[OrderLineResponse]
    queue_entry_id: str | None = None
    created_at: datetime
    updated_at: datetime
    fulfilled_at: datetime | None = None


# --- Queue ---


class QueueEntryResponse(BaseModel):
    """Queue entry response DTO."""

    id: str
    patient_ref: str
    token: str
    token_number: int
    type: str
    status: str
    checked_in_at: datetime


# --- Dashboard ---


class DashboardStatsResponse(BaseModel):
    """Dashboard stat-grid response."""

    total_sales: str = Field(..., description="Formatted sales total, e.g. '1,234.50'")
    total_sales_value: float
    orders_count: int
    active_queue: int
    low_stock: int
    expiring_soon: int
    orders_by_status: dict[str, int] = Field(default_factory=dict)
    generated_at: datetime
