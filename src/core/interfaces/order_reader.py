"""Abstract read capability into the order lifecycle manager."""

from abc import ABC, abstractmethod
from datetime import datetime

from src.core.entities.order import Order, OrderStatus


class IOrderReader(ABC):
    """Read-only view of placed orders."""

    @property
    @abstractmethod
    def revision(self) -> int:
        """Current order-table revision; changes on every mutation."""
        pass

    @abstractmethod
    async def get_order(self, order_id: str) -> Order:
        """Get order by id, raising OrderNotFoundError if unknown."""
        pass

    @abstractmethod
    async def list_orders(
        self,
        status: OrderStatus | None = None,
        since: datetime | None = None,
        until: datetime | None = None,
        patient_ref: str | None = None,
    ) -> list[Order]:
        """List orders, newest first."""
        pass

    @abstractmethod
    async def count_orders(self, status: OrderStatus | None = None) -> int:
        """Count orders, optionally by status."""
        pass
