"""End-to-end flow through the use cases and the command boundary."""

from datetime import date, timedelta

import pytest

from src.application import run_command
from src.application.dto.requests import (
    AdvanceOrderStatusRequest,
    AdvanceQueueEntryRequest,
    CheckInRequest,
    CreateOrderRequest,
    ReceiveStockRequest,
)
from src.application.services import get_inventory_ledger
from src.application.use_cases import (
    AdvanceOrderStatusUseCase,
    AdvanceQueueEntryUseCase,
    CheckInPatientUseCase,
    CreateOrderUseCase,
    GetDashboardStatsUseCase,
    ReceiveStockUseCase,
)
from src.core.entities.order import OrderStatus
from src.core.entities.queue import QueueStatus, QueueType


async def _receive_paracetamol(quantity: int = 100):
    return await ReceiveStockUseCase().execute(
        ReceiveStockRequest(
            sku="PARA500",
            quantity=quantity,
            batch_no="BN-PCM-01",
            expiry_date=date.today() + timedelta(days=365),
            name="Paracetamol 500mg",
            salt="Paracetamol",
            reorder_level=20,
            price=2.5,
            gst_rate=0.0,
        )
    )


async def test_order_drains_stock_into_low_stock():
    await _receive_paracetamol()
    entry = await CheckInPatientUseCase().execute(
        CheckInRequest(patient_ref="PRN-1001", type=QueueType.PRN)
    )

    order = await CreateOrderUseCase().execute(
        CreateOrderRequest(patient_ref="PRN-1001", items={"PARA500": 95}, queue_entry_id=entry.id)
    )

    ledger = get_inventory_ledger()
    assert (await ledger.get_item("PARA500")).stock == 5
    assert [i.sku for i in await ledger.query_low_stock()] == ["PARA500"]

    dashboard = GetDashboardStatsUseCase()
    stats = await dashboard.execute()
    assert stats.low_stock == 1
    assert stats.active_queue == 1
    assert stats.total_sales == 0  # still PENDING

    advance = AdvanceOrderStatusUseCase()
    for status in (OrderStatus.READY, OrderStatus.DISPATCHED, OrderStatus.DELIVERED):
        order = await advance.execute(
            AdvanceOrderStatusRequest(order_id=order.id, target_status=status)
        )
    assert order.status == OrderStatus.DELIVERED

    replay = await run_command(
        "advance_order",
        advance.execute(
            AdvanceOrderStatusRequest(order_id=order.id, target_status=OrderStatus.DELIVERED)
        ),
    )
    assert replay.ok is False
    assert replay.error.error_code == "INVALID_TRANSITION"

    queue_uc = AdvanceQueueEntryUseCase()
    for status in (QueueStatus.SERVICING, QueueStatus.COMPLETED):
        await queue_uc.execute(AdvanceQueueEntryRequest(entry_id=entry.id, target_status=status))

    final = dashboard.to_response(await dashboard.execute())
    assert final.total_sales == "237.50"
    assert final.orders_count == 1
    assert final.active_queue == 0
    assert final.orders_by_status["DELIVERED"] == 1


async def test_oversized_order_is_a_failure_result():
    await _receive_paracetamol(quantity=10)

    result = await run_command(
        "create_order",
        CreateOrderUseCase().execute(
            CreateOrderRequest(patient_ref="PRN-1002", items={"PARA500": 11})
        ),
    )

    assert result.ok is False
    assert result.error.error_code == "INSUFFICIENT_STOCK"
    assert (await get_inventory_ledger().get_item("PARA500")).stock == 10


@pytest.mark.parametrize("quantity", [1, 50, 100])
async def test_exact_and_partial_orders_succeed(quantity):
    await _receive_paracetamol()
    result = await run_command(
        "create_order",
        CreateOrderUseCase().execute(
            CreateOrderRequest(patient_ref="PRN-1003", items={"PARA500": quantity})
        ),
    )
    assert result.ok is True
    assert (await get_inventory_ledger().get_item("PARA500")).stock == 100 - quantity
