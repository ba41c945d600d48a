"""Queue use cases: patient check-in and service progression."""

from src.application.dto.requests import AdvanceQueueEntryRequest, CheckInRequest
from src.application.dto.responses import QueueEntryResponse
from src.core.entities.queue import QueueEntry
from src.core.services.queue_manager import QueueManager


def entry_to_response(entry: QueueEntry) -> QueueEntryResponse:
    """Convert a queue entry to its response DTO."""
    return QueueEntryResponse(
        id=entry.id,
        patient_ref=entry.patient_ref,
        token=entry.token,
        token_number=entry.token_number,
        type=entry.type.value,
        status=entry.status.value,
        checked_in_at=entry.checked_in_at,
    )


class _QueueUseCase:
    def __init__(self, queue_manager: QueueManager | None = None):
        self._queue_manager = queue_manager

    def _get_queue_manager(self) -> QueueManager:
        if self._queue_manager is None:
            from src.application.services import get_queue_manager

            self._queue_manager = get_queue_manager()
        return self._queue_manager

    def to_response(self, entry: QueueEntry) -> QueueEntryResponse:
        return entry_to_response(entry)


class CheckInPatientUseCase(_QueueUseCase):
    """Check a patient in at the counter."""

    async def execute(self, request: CheckInRequest) -> QueueEntry:
        return await self._get_queue_manager().check_in(request.patient_ref, request.type)


class AdvanceQueueEntryUseCase(_QueueUseCase):
    """Call a patient to the counter or mark them served."""

    async def execute(self, request: AdvanceQueueEntryRequest) -> QueueEntry:
        return await self._get_queue_manager().advance_status(
            request.entry_id, request.target_status
        )
