"""Abstract read capability into the inventory ledger."""

from abc import ABC, abstractmethod
from datetime import date

from src.core.entities.inventory import InventoryItem, StockMovement


class IInventoryReader(ABC):
    """Read-only view of the inventory ledger."""

    @property
    @abstractmethod
    def revision(self) -> int:
        """Current ledger revision; changes on every mutation."""
        pass

    @abstractmethod
    async def get_item(self, sku: str) -> InventoryItem:
        """Get inventory item by SKU, raising ItemNotFoundError if unknown."""
        pass

    @abstractmethod
    async def list_items(
        self, category: str | None = None, include_inactive: bool = True
    ) -> list[InventoryItem]:
        """List inventory items ordered by SKU."""
        pass

    @abstractmethod
    async def query_low_stock(self) -> list[InventoryItem]:
        """Items with stock at or below the reorder level, (stock, sku) ascending."""
        pass

    @abstractmethod
    async def query_expiring_before(self, cutoff: date) -> list[InventoryItem]:
        """Items whose expiry date is on or before the cutoff."""
        pass

    @abstractmethod
    async def query_expiring_within(
        self, days: int, today: date | None = None
    ) -> list[InventoryItem]:
        """Items not yet expired that expire within the given number of days."""
        pass

    @abstractmethod
    async def get_movements(self, sku: str) -> list[StockMovement]:
        """Stock movements for a SKU, oldest first."""
        pass
