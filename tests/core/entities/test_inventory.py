"""Tests for inventory entities."""

from datetime import date

from src.core.entities.inventory import (
    BatchInfo,
    InventoryItem,
    MovementType,
    ScheduleCode,
    StockMovement,
)


class TestInventoryItem:
    """Tests for InventoryItem entity."""

    def test_defaults(self):
        """Test default values."""
        item = InventoryItem(sku="PARA500", name="Paracetamol 500mg")
        assert item.stock == 0
        assert item.reorder_level == 0
        assert item.mrp is None
        assert item.schedule == ScheduleCode.UNSCHEDULED
        assert item.active is True
        assert item.batches == []

    def test_is_low_stock_at_threshold(self):
        item = InventoryItem(sku="A", name="A", stock=20, reorder_level=20)
        assert item.is_low_stock is True

    def test_is_low_stock_above_threshold(self):
        item = InventoryItem(sku="A", name="A", stock=21, reorder_level=20)
        assert item.is_low_stock is False

    def test_stock_value(self):
        item = InventoryItem(sku="A", name="A", stock=40, price=2.5)
        assert item.stock_value == 100.0


class TestBatchInfo:
    def test_catalog_fields_optional(self):
        """A repeat receipt only needs batch number and expiry."""
        batch = BatchInfo(batch_no="BN-1", expiry_date=date(2027, 1, 1))
        assert batch.name is None
        assert batch.price is None
        assert batch.schedule is None

    def test_schedule_from_string(self):
        batch = BatchInfo(batch_no="BN-1", expiry_date=date(2027, 1, 1), schedule="H1")
        assert batch.schedule == ScheduleCode.H1


class TestStockMovement:
    def test_movement_types(self):
        """Test all movement types."""
        assert MovementType.IN == "in"
        assert MovementType.OUT == "out"
        assert MovementType.ADJUST == "adjust"

    def test_defaults(self):
        mvmt = StockMovement(
            sku="PARA500", movement_type=MovementType.OUT, quantity=5, stock_after=95
        )
        assert mvmt.reference is None
        assert mvmt.notes is None
