"""Create Order Use Case: reserves stock for every line, all or nothing."""

from src.application.dto.requests import CreateOrderRequest
from src.application.dto.responses import OrderLineResponse, OrderResponse
from src.config import get_logger
from src.core.entities.order import Order
from src.core.services.order_manager import OrderManager

logger = get_logger(__name__)


def order_to_response(order: Order) -> OrderResponse:
    """Convert an order to its response DTO."""
    return OrderResponse(
        id=order.id,
        patient_ref=order.patient_ref,
        status=order.status.value,
        amount=order.amount,
        lines=[
            OrderLineResponse(
                sku=line.sku,
                name=line.name,
                quantity=line.quantity,
                unit_price=line.unit_price,
                gst_rate=line.gst_rate,
                line_total=round(line.line_total, 2),
                schedule=line.schedule.value,
            )
            for line in order.lines
        ],
        queue_entry_id=order.queue_entry_id,
        created_at=order.created_at,
        updated_at=order.updated_at,
        fulfilled_at=order.fulfilled_at,
    )


class CreateOrderUseCase:
    """Place an order from a counter or POS terminal."""

    def __init__(self, order_manager: OrderManager | None = None):
        self._order_manager = order_manager

    def _get_order_manager(self) -> OrderManager:
        if self._order_manager is None:
            from src.application.services import get_order_manager

            self._order_manager = get_order_manager()
        return self._order_manager

    async def execute(self, request: CreateOrderRequest) -> Order:
        """Execute create order use case."""
        manager = self._get_order_manager()
        order = await manager.create_order(
            patient_ref=request.patient_ref,
            line_items=request.items,
            queue_entry_id=request.queue_entry_id,
        )
        if order.has_controlled_items:
            logger.info("controlled_items_dispensed", order_id=order.id)
        return order

    def to_response(self, order: Order) -> OrderResponse:
        return order_to_response(order)
