"""Order status use cases: advance along the chain, or cancel while pending."""

from src.application.dto.requests import AdvanceOrderStatusRequest, CancelOrderRequest
from src.application.dto.responses import OrderResponse
from src.application.use_cases.create_order import order_to_response
from src.core.entities.order import Order
from src.core.services.order_manager import OrderManager


class _OrderUseCase:
    def __init__(self, order_manager: OrderManager | None = None):
        self._order_manager = order_manager

    def _get_order_manager(self) -> OrderManager:
        if self._order_manager is None:
            from src.application.services import get_order_manager

            self._order_manager = get_order_manager()
        return self._order_manager

    def to_response(self, order: Order) -> OrderResponse:
        return order_to_response(order)


class AdvanceOrderStatusUseCase(_OrderUseCase):
    """Move an order to its next status (dispatch desk, delivery app)."""

    async def execute(self, request: AdvanceOrderStatusRequest) -> Order:
        return await self._get_order_manager().advance_status(
            request.order_id, request.target_status
        )


class CancelOrderUseCase(_OrderUseCase):
    """Cancel a pending order and release its stock."""

    async def execute(self, request: CancelOrderRequest) -> Order:
        return await self._get_order_manager().cancel_order(request.order_id)
