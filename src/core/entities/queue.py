"""Patient service queue entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class QueueStatus(str, Enum):
    """Service status of a queued patient."""

    WAITING = "WAITING"
    SERVICING = "SERVICING"
    COMPLETED = "COMPLETED"


class QueueType(str, Enum):
    """Kind of counter visit."""

    PRN = "PRN"  # ad-hoc, by patient registration number
    OTC = "OTC"  # over-the-counter
    INSURANCE = "INSURANCE"  # insurance-backed


QUEUE_TRANSITIONS: dict[QueueStatus, QueueStatus | None] = {
    QueueStatus.WAITING: QueueStatus.SERVICING,
    QueueStatus.SERVICING: QueueStatus.COMPLETED,
    QueueStatus.COMPLETED: None,
}


class QueueEntry(BaseModel):
    """A patient checked in at the counter."""

    id: str
    patient_ref: str
    token_number: int
    type: QueueType
    status: QueueStatus = QueueStatus.WAITING
    service_day: date
    checked_in_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def token(self) -> str:
        """Display token, e.g. ``INSURANCE-007``."""
        return f"{self.type.value}-{self.token_number:03d}"
