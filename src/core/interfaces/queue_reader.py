"""Abstract read capability into the patient queue."""

from abc import ABC, abstractmethod

from src.core.entities.queue import QueueEntry, QueueType


class IQueueReader(ABC):
    """Read-only view of the patient service queue."""

    @property
    @abstractmethod
    def revision(self) -> int:
        """Current queue revision; changes on every mutation."""
        pass

    @abstractmethod
    async def get_entry(self, entry_id: str) -> QueueEntry:
        """Get an active or archived entry, raising QueueEntryNotFoundError."""
        pass

    @abstractmethod
    async def list_active(self, type: QueueType | None = None) -> list[QueueEntry]:
        """Entries not yet completed, in service order."""
        pass

    @abstractmethod
    async def current_queue_length(self) -> int:
        """Number of entries not yet completed."""
        pass

    @abstractmethod
    async def next_to_serve(self) -> QueueEntry | None:
        """Oldest waiting entry, or None if nobody is waiting."""
        pass
