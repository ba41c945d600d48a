"""Tests for QueueManager."""

from datetime import date, datetime

import pytest

from src.core.entities.queue import QueueStatus, QueueType
from src.core.exceptions import (
    InvalidTransitionError,
    QueueEntryNotFoundError,
    ValidationError,
)
from src.core.services import QueueManager


class TestCheckIn:
    async def test_tokens_increase(self, queue):
        first = await queue.check_in("PRN-1", QueueType.PRN)
        second = await queue.check_in("PRN-2", QueueType.OTC)
        third = await queue.check_in("PRN-3", "INSURANCE")

        assert [e.token_number for e in (first, second, third)] == [1, 2, 3]
        assert third.type == QueueType.INSURANCE
        assert third.token == "INSURANCE-003"
        assert first.status == QueueStatus.WAITING
        assert first.id == "Q-000001"

    async def test_tokens_reset_next_day(self, queue, clock):
        await queue.check_in("PRN-1", QueueType.PRN)
        await queue.check_in("PRN-2", QueueType.PRN)
        clock.advance(days=1)

        entry = await queue.check_in("PRN-3", QueueType.PRN)

        assert entry.token_number == 1
        assert entry.service_day == date(2026, 3, 3)

    async def test_day_boundary_hour(self, clock):
        clock.now = datetime(2026, 3, 2, 22, 0)
        queue = QueueManager(day_boundary_hour=6, clock=clock)
        await queue.check_in("PRN-1", QueueType.PRN)

        # 02:00 next morning still belongs to the 2 March service day
        clock.now = datetime(2026, 3, 3, 2, 0)
        late = await queue.check_in("PRN-2", QueueType.PRN)
        assert late.token_number == 2
        assert late.service_day == date(2026, 3, 2)

        clock.now = datetime(2026, 3, 3, 6, 0)
        fresh = await queue.check_in("PRN-3", QueueType.PRN)
        assert fresh.token_number == 1
        assert fresh.service_day == date(2026, 3, 3)

    def test_invalid_day_boundary(self):
        with pytest.raises(ValidationError):
            QueueManager(day_boundary_hour=24)

    async def test_validation(self, queue):
        with pytest.raises(ValidationError):
            await queue.check_in("", QueueType.PRN)
        with pytest.raises(ValidationError):
            await queue.check_in("PRN-1", "WALK_IN")
        assert await queue.current_queue_length() == 0


class TestAdvanceStatus:
    async def test_waiting_to_completed_archives(self, queue):
        entry = await queue.check_in("PRN-1", QueueType.PRN)

        servicing = await queue.advance_status(entry.id, QueueStatus.SERVICING)
        assert servicing.status == QueueStatus.SERVICING
        assert await queue.current_queue_length() == 1

        done = await queue.advance_status(entry.id, "COMPLETED")
        assert done.status == QueueStatus.COMPLETED
        assert await queue.current_queue_length() == 0
        assert await queue.list_active() == []
        assert (await queue.get_entry(entry.id)).status == QueueStatus.COMPLETED

    async def test_skip_rejected(self, queue):
        entry = await queue.check_in("PRN-1", QueueType.PRN)
        with pytest.raises(InvalidTransitionError):
            await queue.advance_status(entry.id, QueueStatus.COMPLETED)
        assert (await queue.get_entry(entry.id)).status == QueueStatus.WAITING

    async def test_completed_is_final(self, queue):
        entry = await queue.check_in("PRN-1", QueueType.PRN)
        await queue.advance_status(entry.id, QueueStatus.SERVICING)
        await queue.advance_status(entry.id, QueueStatus.COMPLETED)
        for target in QueueStatus:
            with pytest.raises(InvalidTransitionError):
                await queue.advance_status(entry.id, target)

    async def test_unknown_entry(self, queue):
        with pytest.raises(QueueEntryNotFoundError):
            await queue.advance_status("Q-404", QueueStatus.SERVICING)
        with pytest.raises(QueueEntryNotFoundError):
            await queue.get_entry("Q-404")

    async def test_unknown_status(self, queue):
        entry = await queue.check_in("PRN-1", QueueType.PRN)
        with pytest.raises(ValidationError):
            await queue.advance_status(entry.id, "PAUSED")


class TestQueries:
    async def test_next_to_serve_is_fifo(self, queue, clock):
        first = await queue.check_in("PRN-1", QueueType.OTC)
        clock.advance(minutes=1)
        second = await queue.check_in("PRN-2", QueueType.PRN)

        assert (await queue.next_to_serve()).id == first.id
        await queue.advance_status(first.id, QueueStatus.SERVICING)
        assert (await queue.next_to_serve()).id == second.id

    async def test_next_to_serve_same_instant_uses_token(self, queue):
        first = await queue.check_in("PRN-1", QueueType.OTC)
        await queue.check_in("PRN-2", QueueType.OTC)
        assert (await queue.next_to_serve()).id == first.id

    async def test_next_to_serve_empty(self, queue):
        assert await queue.next_to_serve() is None
        entry = await queue.check_in("PRN-1", QueueType.OTC)
        await queue.advance_status(entry.id, QueueStatus.SERVICING)
        assert await queue.next_to_serve() is None

    async def test_list_active_by_type(self, queue, clock):
        await queue.check_in("PRN-1", QueueType.OTC)
        clock.advance(minutes=1)
        prn = await queue.check_in("PRN-2", QueueType.PRN)

        assert [e.id for e in await queue.list_active(QueueType.PRN)] == [prn.id]
        assert len(await queue.list_active()) == 2

    async def test_revision_moves_on_change(self, queue):
        assert queue.revision == 0
        entry = await queue.check_in("PRN-1", QueueType.OTC)
        assert queue.revision == 1
        with pytest.raises(InvalidTransitionError):
            await queue.advance_status(entry.id, QueueStatus.COMPLETED)
        assert queue.revision == 1
