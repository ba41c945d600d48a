"""Application use cases."""

from src.application.use_cases.adjust_stock import AdjustStockUseCase
from src.application.use_cases.create_order import CreateOrderUseCase
from src.application.use_cases.get_dashboard_stats import GetDashboardStatsUseCase
from src.application.use_cases.manage_queue import (
    AdvanceQueueEntryUseCase,
    CheckInPatientUseCase,
)
from src.application.use_cases.receive_stock import (
    ReceiveStockResult,
    ReceiveStockUseCase,
)
from src.application.use_cases.update_order_status import (
    AdvanceOrderStatusUseCase,
    CancelOrderUseCase,
)

__all__ = [
    # Inventory
    "ReceiveStockUseCase",
    "ReceiveStockResult",
    "AdjustStockUseCase",
    # Orders
    "CreateOrderUseCase",
    "AdvanceOrderStatusUseCase",
    "CancelOrderUseCase",
    # Queue
    "CheckInPatientUseCase",
    "AdvanceQueueEntryUseCase",
    # Dashboard
    "GetDashboardStatsUseCase",
]
