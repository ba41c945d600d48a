"""Receive Stock Use Case: IN movement for a SKU batch."""

from dataclasses import dataclass

from src.application.dto.requests import ReceiveStockRequest
from src.application.dto.responses import InventoryItemResponse, ReceiveStockResponse
from src.core.entities.inventory import BatchInfo, InventoryItem
from src.core.services.inventory_ledger import InventoryLedger


def item_to_response(item: InventoryItem) -> InventoryItemResponse:
    """Convert an inventory item to its response DTO."""
    return InventoryItemResponse(
        sku=item.sku,
        name=item.name,
        category=item.category,
        stock=item.stock,
        reorder_level=item.reorder_level,
        price=item.price,
        mrp=item.mrp,
        expiry_date=item.expiry_date,
        batch_no=item.batch_no,
        salt=item.salt,
        shelf=item.shelf,
        gst_rate=item.gst_rate,
        schedule=item.schedule.value,
        active=item.active,
        low_stock=item.is_low_stock,
        updated_at=item.updated_at,
    )


@dataclass
class ReceiveStockResult:
    """Result of receiving stock."""

    item: InventoryItem
    received: int
    created: bool = False  # True if the SKU was seen for the first time


class ReceiveStockUseCase:
    """Receive a batch of stock into the ledger."""

    def __init__(self, ledger: InventoryLedger | None = None):
        self._ledger = ledger

    def _get_ledger(self) -> InventoryLedger:
        if self._ledger is None:
            from src.application.services import get_inventory_ledger

            self._ledger = get_inventory_ledger()
        return self._ledger

    async def execute(self, request: ReceiveStockRequest) -> ReceiveStockResult:
        """Execute receive stock use case."""
        batch = BatchInfo(**request.model_dump(exclude={"sku", "quantity"}))
        receipt = await self._get_ledger().receive_stock(request.sku, batch, request.quantity)
        return ReceiveStockResult(
            item=receipt.item, received=request.quantity, created=receipt.created
        )

    def to_response(self, result: ReceiveStockResult) -> ReceiveStockResponse:
        """Convert result to response DTO."""
        return ReceiveStockResponse(
            item=item_to_response(result.item),
            received=result.received,
            created=result.created,
        )
