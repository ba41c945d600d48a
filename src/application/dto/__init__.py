"""Data Transfer Objects for the command/query boundary."""

from src.application.dto.requests import (
    AdjustStockRequest,
    AdvanceOrderStatusRequest,
    AdvanceQueueEntryRequest,
    CancelOrderRequest,
    CheckInRequest,
    CreateOrderRequest,
    DashboardStatsRequest,
    ReceiveStockRequest,
)
from src.application.dto.responses import (
    CommandResult,
    DashboardStatsResponse,
    ErrorResponse,
    InventoryItemResponse,
    OrderLineResponse,
    OrderResponse,
    QueueEntryResponse,
    ReceiveStockResponse,
    StockLevelResponse,
)

__all__ = [
    # Requests
    "ReceiveStockRequest",
    "AdjustStockRequest",
    "CreateOrderRequest",
    "AdvanceOrderStatusRequest",
    "CancelOrderRequest",
    "CheckInRequest",
    "AdvanceQueueEntryRequest",
    "DashboardStatsRequest",
    # Responses
    "CommandResult",
    "ErrorResponse",
    "InventoryItemResponse",
    "ReceiveStockResponse",
    "StockLevelResponse",
    "OrderLineResponse",
    "OrderResponse",
    "QueueEntryResponse",
    "DashboardStatsResponse",
]
