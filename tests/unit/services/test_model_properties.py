"""Randomized operation sequences checked against a simple reference model."""

import random

import pytest

from src.core.entities.order import OrderStatus
from src.core.exceptions import (
    InsufficientStockError,
    InvalidTransitionError,
    ValidationError,
)

SKUS = {"PARA500": 20, "AMOX500": 50, "ATOR10": 40, "CETZ10": 15}


async def _seed(ledger, batch_factory, model):
    for sku, reorder in SKUS.items():
        await ledger.receive_stock(sku, batch_factory(name=sku, reorder_level=reorder), 60)
        model[sku] = 60


@pytest.mark.parametrize("seed", range(8))
async def test_stock_matches_reference_model(ledger, orders, stats, batch_factory, seed):
    rng = random.Random(seed)
    model: dict[str, int] = {}
    await _seed(ledger, batch_factory, model)
    placed: list[str] = []

    actions = ["order", "order", "cancel", "advance", "restock", "decrement", "adjust"]
    for _ in range(80):
        action = rng.choice(actions)
        if action == "order":
            picked = rng.sample(sorted(SKUS), rng.randint(1, 3))
            lines = {sku: rng.randint(1, 25) for sku in picked}
            fits = all(model[sku] >= qty for sku, qty in lines.items())
            try:
                order = await orders.create_order("PRN-1", lines)
            except InsufficientStockError:
                assert not fits
                continue
            assert fits
            for sku, qty in lines.items():
                model[sku] -= qty
            placed.append(order.id)
        elif action == "cancel" and placed:
            order_id = rng.choice(placed)
            current = await orders.get_order(order_id)
            try:
                await orders.cancel_order(order_id)
            except InvalidTransitionError:
                assert current.status != OrderStatus.PENDING
                continue
            assert current.status == OrderStatus.PENDING
            for sku, qty in current.line_items.items():
                model[sku] += qty
        elif action == "advance" and placed:
            order_id = rng.choice(placed)
            current = await orders.get_order(order_id)
            if current.is_terminal:
                continue
            successor = {
                OrderStatus.PENDING: OrderStatus.READY,
                OrderStatus.READY: OrderStatus.DISPATCHED,
                OrderStatus.DISPATCHED: OrderStatus.DELIVERED,
            }[current.status]
            await orders.advance_status(order_id, successor)
        elif action == "restock":
            sku = rng.choice(sorted(SKUS))
            qty = rng.randint(1, 30)
            await ledger.receive_stock(
                sku, batch_factory(name=sku, reorder_level=SKUS[sku]), qty
            )
            model[sku] += qty
        elif action == "decrement":
            sku = rng.choice(sorted(SKUS))
            qty = rng.randint(1, 40)
            try:
                remaining = await ledger.reserve_and_decrement(sku, qty)
            except InsufficientStockError:
                assert model[sku] < qty
                continue
            assert model[sku] >= qty
            model[sku] -= qty
            assert remaining == model[sku]
        elif action == "adjust":
            sku = rng.choice(sorted(SKUS))
            delta = rng.randint(-30, 20)
            try:
                await ledger.adjust_stock(sku, delta, reason="cycle count")
            except ValidationError:
                assert delta == 0 or model[sku] + delta < 0
                continue
            assert delta != 0 and model[sku] + delta >= 0
            model[sku] += delta

        for sku, expected in model.items():
            assert (await ledger.get_item(sku)).stock == expected
        expected_low = sum(1 for sku, stock in model.items() if stock <= SKUS[sku])
        assert await stats.low_stock_count() == expected_low


@pytest.mark.parametrize("seed", range(4))
async def test_status_history_is_monotonic(ledger, orders, batch_factory, seed):
    rng = random.Random(seed)
    await _seed(ledger, batch_factory, {})
    order = await orders.create_order("PRN-1", {"PARA500": 1})
    chain = [
        OrderStatus.PENDING,
        OrderStatus.READY,
        OrderStatus.DISPATCHED,
        OrderStatus.DELIVERED,
    ]

    for _ in range(20):
        target = rng.choice(list(OrderStatus))
        try:
            await orders.advance_status(order.id, target)
        except InvalidTransitionError:
            pass

    history = [c.status for c in (await orders.get_order(order.id)).status_history]
    assert history == chain[: len(history)]
