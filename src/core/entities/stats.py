"""Dashboard summary entities."""

from datetime import datetime

from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    """Figures shown on the dashboard stat grid."""

    total_sales: float = 0.0
    orders_count: int = 0
    active_queue: int = 0
    low_stock: int = 0
    expiring_soon: int = 0

    # Order counts keyed by status value
    orders_by_status: dict[str, int] = Field(default_factory=dict)

    generated_at: datetime = Field(default_factory=datetime.now)
