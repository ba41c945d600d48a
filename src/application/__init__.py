"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for caller contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection
4. Wrapping outcomes as explicit success/failure results

Use cases are the only entry point for presentation callers.
"""

from src.application.commands import run_command
from src.application.services import (
    get_inventory_ledger,
    get_order_manager,
    get_queue_manager,
    get_stats_aggregator,
    reset_services,
)

__all__ = [
    "run_command",
    "get_inventory_ledger",
    "get_order_manager",
    "get_queue_manager",
    "get_stats_aggregator",
    "reset_services",
]
