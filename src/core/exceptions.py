"""
Domain exceptions for the PharmaDesk engine.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class PharmaError(Exception):
    """Base exception for all engine errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for caller-facing failure results."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(PharmaError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


# Lookup Exceptions
class NotFoundError(PharmaError):
    """Base exception for unknown entity ids."""

    pass


class ItemNotFoundError(NotFoundError):
    """Inventory item not found in the ledger."""

    def __init__(self, sku: str):
        super().__init__(
            f"Inventory item not found: {sku}",
            code="ITEM_NOT_FOUND",
            details={"sku": sku},
        )


class OrderNotFoundError(NotFoundError):
    """Order not found."""

    def __init__(self, order_id: str):
        super().__init__(
            f"Order not found: {order_id}",
            code="ORDER_NOT_FOUND",
            details={"order_id": order_id},
        )


class QueueEntryNotFoundError(NotFoundError):
    """Queue entry not found, active or archived."""

    def __init__(self, entry_id: str):
        super().__init__(
            f"Queue entry not found: {entry_id}",
            code="QUEUE_ENTRY_NOT_FOUND",
            details={"entry_id": entry_id},
        )


# Stock Exceptions
class InsufficientStockError(PharmaError):
    """Decrement would drive stock below zero."""

    def __init__(self, sku: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for {sku}: requested {requested}, available {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "sku": sku,
                "requested": requested,
                "available": available,
            },
        )


# Lifecycle Exceptions
class InvalidTransitionError(PharmaError):
    """Status advance skips, regresses or repeats a stage."""

    def __init__(self, entity: str, entity_id: str, current: str, target: str):
        super().__init__(
            f"Cannot move {entity} {entity_id} from {current} to {target}",
            code="INVALID_TRANSITION",
            details={
                "entity": entity,
                "entity_id": entity_id,
                "current": current,
                "target": target,
            },
        )


class ConfigurationError(PharmaError):
    """Settings could not be loaded from the environment."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(
            message,
            code="CONFIGURATION_ERROR",
            details={"errors": errors or []},
        )
