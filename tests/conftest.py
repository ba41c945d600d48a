"""Pytest configuration and fixtures."""

from collections.abc import Generator
from datetime import date, datetime, timedelta

import pytest

from src.application.services import reset_services
from src.config import reset_settings
from src.core.entities.inventory import BatchInfo, ScheduleCode
from src.core.services import (
    InventoryLedger,
    OrderManager,
    QueueManager,
    StatsAggregator,
)


class FakeClock:
    """Controllable clock; each call returns the current fake time."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


def make_batch(
    name: str = "Paracetamol 500mg",
    batch_no: str = "BN-PCM-01",
    expiry_date: date = date(2027, 12, 1),
    **catalog,
) -> BatchInfo:
    """BatchInfo with sensible catalog defaults for a first receipt."""
    catalog.setdefault("price", 2.5)
    catalog.setdefault("reorder_level", 20)
    catalog.setdefault("gst_rate", 0.0)
    return BatchInfo(name=name, batch_no=batch_no, expiry_date=expiry_date, **catalog)


@pytest.fixture(autouse=True)
def _reset_singletons() -> Generator[None, None, None]:
    """Isolate settings and service singletons between tests."""
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


@pytest.fixture
def batch_factory():
    """Factory for BatchInfo values (see make_batch)."""
    return make_batch


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 2, 10, 0, 0))


@pytest.fixture
def ledger(clock: FakeClock) -> InventoryLedger:
    return InventoryLedger(default_reorder_level=10, clock=clock)


@pytest.fixture
def queue(clock: FakeClock) -> QueueManager:
    return QueueManager(clock=clock)


@pytest.fixture
def orders(ledger: InventoryLedger, queue: QueueManager, clock: FakeClock) -> OrderManager:
    return OrderManager(ledger=ledger, queue=queue, clock=clock)


@pytest.fixture
def stats(
    ledger: InventoryLedger,
    orders: OrderManager,
    queue: QueueManager,
    clock: FakeClock,
) -> StatsAggregator:
    return StatsAggregator(inventory=ledger, orders=orders, queue=queue, clock=clock)


@pytest.fixture
async def stocked_ledger(ledger: InventoryLedger) -> InventoryLedger:
    """Ledger with three SKUs: PARA500 (100), AMOX500 (250), MORPH10 (10)."""
    await ledger.receive_stock("PARA500", make_batch(salt="Paracetamol"), 100)
    await ledger.receive_stock(
        "AMOX500",
        make_batch(
            name="Amoxicillin 500mg",
            batch_no="BN-AMX-01",
            expiry_date=date(2027, 6, 15),
            price=7.0,
            gst_rate=12.0,
            reorder_level=50,
            salt="Amoxicillin Trihydrate",
        ),
        250,
    )
    await ledger.receive_stock(
        "MORPH10",
        make_batch(
            name="Morphine 10mg",
            batch_no="BN-MOR-01",
            price=40.0,
            reorder_level=5,
            schedule=ScheduleCode.X,
        ),
        10,
    )
    return ledger
