"""
Command boundary.

Runs a command or query and standardizes its outcome as a CommandResult:
- ok/value on success
- error_code, message, hint and details on a domain failure

Only domain errors (PharmaError) become failure results. Anything else is a
bug and propagates.
"""

from collections.abc import Awaitable
from typing import Any

from src.application.dto.responses import CommandResult, ErrorResponse
from src.config import get_logger
from src.core.exceptions import PharmaError

logger = get_logger(__name__)


# Hint messages per error code
HINT_MAP: dict[str, str] = {
    "VALIDATION_ERROR": "Check the command arguments; quantities must be positive.",
    "ITEM_NOT_FOUND": "Receive stock for the SKU first, or check the SKU id.",
    "ORDER_NOT_FOUND": "Check the order id against the order list.",
    "QUEUE_ENTRY_NOT_FOUND": "Check the queue entry id; the patient may not be checked in.",
    "INSUFFICIENT_STOCK": "Reduce the quantity, offer a substitute, or restock the SKU.",
    "INVALID_TRANSITION": "Refresh the record; statuses only move one step forward.",
    "CONFIGURATION_ERROR": "Fix the offending environment variable and restart.",
}


def error_to_response(exc: PharmaError, command: str | None = None) -> ErrorResponse:
    """Convert a domain error to the standardized failure DTO."""
    return ErrorResponse(
        error_code=exc.code,
        message=exc.message,
        hint=HINT_MAP.get(exc.code),
        details=exc.details,
        command=command,
    )


async def run_command(command: str, operation: Awaitable[Any]) -> CommandResult:
    """
    Await a command and wrap its outcome.

    Usage:
        result = await run_command(
            "create_order", use_case.execute(request)
        )
        if not result.ok:
            show(result.error.hint)
    """
    try:
        value = await operation
    except PharmaError as e:
        logger.warning(
            "command_failed",
            command=command,
            error_code=e.code,
            error=e.message,
        )
        return CommandResult(ok=False, error=error_to_response(e, command))

    return CommandResult(ok=True, value=value)
