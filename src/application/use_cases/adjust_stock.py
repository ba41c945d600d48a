"""Adjust Stock Use Case: administrative count correction."""

from src.application.dto.requests import AdjustStockRequest
from src.application.dto.responses import StockLevelResponse
from src.config import get_logger
from src.core.entities.inventory import InventoryItem
from src.core.services.inventory_ledger import InventoryLedger

logger = get_logger(__name__)


class AdjustStockUseCase:
    """Apply a signed stock correction to a SKU."""

    def __init__(self, ledger: InventoryLedger | None = None):
        self._ledger = ledger

    def _get_ledger(self) -> InventoryLedger:
        if self._ledger is None:
            from src.application.services import get_inventory_ledger

            self._ledger = get_inventory_ledger()
        return self._ledger

    async def execute(self, request: AdjustStockRequest) -> InventoryItem:
        """Execute adjust stock use case."""
        logger.info("adjust_stock_started", sku=request.sku, delta=request.delta)

        ledger = self._get_ledger()
        await ledger.adjust_stock(request.sku, request.delta, reason=request.reason)
        return await ledger.get_item(request.sku)

    def to_response(self, item: InventoryItem) -> StockLevelResponse:
        return StockLevelResponse(
            sku=item.sku,
            stock=item.stock,
            low_stock=item.is_low_stock,
        )
