"""
Queue Manager.

Owns the patient service queue. Token numbers run per service day and restart
at a configurable hour; entries are archived once completed.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import date, datetime, timedelta

from src.config import get_logger
from src.core.concurrency import KeyedLock, RevisionCounter, SequenceGenerator
from src.core.entities.queue import (
    QUEUE_TRANSITIONS,
    QueueEntry,
    QueueStatus,
    QueueType,
)
from src.core.exceptions import (
    InvalidTransitionError,
    QueueEntryNotFoundError,
    ValidationError,
)
from src.core.interfaces.queue_reader import IQueueReader

logger = get_logger(__name__)


def _service_order(entry: QueueEntry) -> tuple[datetime, int]:
    return (entry.checked_in_at, entry.token_number)


class QueueManager(IQueueReader):
    """In-memory patient queue with per-entry mutual exclusion."""

    def __init__(
        self,
        day_boundary_hour: int = 0,
        id_prefix: str = "Q",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not 0 <= day_boundary_hour <= 23:
            raise ValidationError(
                "day_boundary_hour", "must be between 0 and 23", day_boundary_hour
            )
        self._boundary = timedelta(hours=day_boundary_hour)
        self._clock = clock or datetime.now
        self._ids = SequenceGenerator(id_prefix)

        self._active: dict[str, QueueEntry] = {}
        self._archive: dict[str, QueueEntry] = {}
        self._locks = KeyedLock()
        self._token_lock = asyncio.Lock()
        self._token_day: date | None = None
        self._last_token = 0
        self._revision = RevisionCounter()

    @property
    def revision(self) -> int:
        return self._revision.value

    def service_day(self, moment: datetime) -> date:
        """Service day a moment belongs to, given the day boundary."""
        return (moment - self._boundary).date()

    async def check_in(self, patient_ref: str, type: QueueType | str) -> QueueEntry:
        """Add a patient to the queue as WAITING with the next token number."""
        if not patient_ref or not patient_ref.strip():
            raise ValidationError("patient_ref", "must not be blank", patient_ref)
        try:
            queue_type = QueueType(type)
        except ValueError:
            raise ValidationError("type", "unknown queue type", type) from None

        async with self._token_lock:
            now = self._clock()
            day = self.service_day(now)
            if day != self._token_day:
                self._token_day = day
                self._last_token = 0
            self._last_token += 1

            entry = QueueEntry(
                id=self._ids.next_id(),
                patient_ref=patient_ref.strip(),
                token_number=self._last_token,
                type=queue_type,
                service_day=day,
                checked_in_at=now,
                updated_at=now,
            )
            self._active[entry.id] = entry
            self._revision.bump()

        logger.info(
            "patient_checked_in",
            entry_id=entry.id,
            token=entry.token,
            type=queue_type.value,
        )
        return entry.model_copy()

    async def advance_status(
        self, entry_id: str, target_status: QueueStatus | str
    ) -> QueueEntry:
        """
        Move an entry to the next status of WAITING -> SERVICING -> COMPLETED.

        Raises:
            QueueEntryNotFoundError: unknown entry id.
            InvalidTransitionError: target is not the immediate successor.
        """
        try:
            target = QueueStatus(target_status)
        except ValueError:
            raise ValidationError(
                "target_status", "unknown queue status", target_status
            ) from None

        async with self._locks.acquire(entry_id):
            entry = self._lookup(entry_id)
            if QUEUE_TRANSITIONS[entry.status] != target:
                logger.warning(
                    "queue_transition_rejected",
                    entry_id=entry_id,
                    current=entry.status.value,
                    target=target.value,
                )
                raise InvalidTransitionError(
                    "queue entry", entry_id, entry.status.value, target.value
                )

            entry.status = target
            entry.updated_at = self._clock()
            if target == QueueStatus.COMPLETED:
                self._archive[entry_id] = self._active.pop(entry_id)
            self._revision.bump()

        logger.info("queue_entry_advanced", entry_id=entry_id, status=target.value)
        return entry.model_copy()

    async def get_entry(self, entry_id: str) -> QueueEntry:
        return self._lookup(entry_id).model_copy()

    async def list_active(self, type: QueueType | None = None) -> list[QueueEntry]:
        entries = [e for e in self._active.values() if type is None or e.type == type]
        entries.sort(key=_service_order)
        return [e.model_copy() for e in entries]

    async def current_queue_length(self) -> int:
        return len(self._active)

    async def next_to_serve(self) -> QueueEntry | None:
        waiting = [e for e in self._active.values() if e.status == QueueStatus.WAITING]
        if not waiting:
            return None
        return min(waiting, key=_service_order).model_copy()

    def _lookup(self, entry_id: str) -> QueueEntry:
        entry = self._active.get(entry_id) or self._archive.get(entry_id)
        if entry is None:
            raise QueueEntryNotFoundError(entry_id)
        return entry
