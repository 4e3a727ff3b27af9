"""
In-memory occupancy store.

reserve() runs its overlap check and insert under one anyio.Lock per
(seat_id, run_id), so concurrent reservations of one seat are serialised
while different seats proceed independently. seat_lock() hands out the same
lock so reconciliation of a seat queues behind its reservations.
"""

from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Dict, List, Set, Tuple

import anyio
from uuid_utils import UUID, uuid7

from src.service.segment_booking.app.interface.i_occupancy_interval_repo import (
    IOccupancyIntervalRepo,
)
from src.service.segment_booking.domain.entity.occupancy_interval_entity import OccupancyInterval
from src.service.segment_booking.domain.seat_occupancy import ranges_overlap
from src.service.segment_booking.domain.segment_errors import SeatNoLongerAvailableError
from src.service.segment_booking.domain.value_object.station_range import StationRange


SeatKey = Tuple[int, int]  # (seat_id, run_id)


class InMemoryOccupancyIntervalRepo(IOccupancyIntervalRepo):
    def __init__(self) -> None:
        self._intervals: Dict[SeatKey, List[OccupancyInterval]] = defaultdict(list)
        self._locks: Dict[SeatKey, anyio.Lock] = {}

    def _lock_for(self, key: SeatKey) -> anyio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = anyio.Lock()
        return lock

    def _has_overlap(self, key: SeatKey, start_order: int, end_order: int) -> bool:
        return any(
            ranges_overlap(
                interval.boarding_order, interval.alighting_order, start_order, end_order
            )
            for interval in self._intervals.get(key, [])
        )

    async def is_range_free(
        self, *, seat_id: int, run_id: int, start_order: int, end_order: int
    ) -> bool:
        return not self._has_overlap((seat_id, run_id), start_order, end_order)

    async def list_occupied_seat_ids(
        self, *, run_id: int, start_order: int, end_order: int
    ) -> Set[int]:
        return {
            seat_id
            for (seat_id, interval_run_id) in list(self._intervals)
            if interval_run_id == run_id
            and self._has_overlap((seat_id, run_id), start_order, end_order)
        }

    async def reserve(
        self,
        *,
        seat_id: int,
        run_id: int,
        start_order: int,
        end_order: int,
        booking_id: UUID,
    ) -> OccupancyInterval:
        StationRange(start_order=start_order, end_order=end_order)  # MalformedRangeError

        key = (seat_id, run_id)
        async with self._lock_for(key):
            if self._has_overlap(key, start_order, end_order):
                raise SeatNoLongerAvailableError(seat_id=seat_id, run_id=run_id)
            # Checkpoint while holding the lock; competing reserves queue behind it
            await anyio.sleep(0)
            interval = OccupancyInterval(
                id=uuid7(),
                seat_id=seat_id,
                run_id=run_id,
                boarding_order=start_order,
                alighting_order=end_order,
                booking_id=booking_id,
                created_at=datetime.now(timezone.utc),
            )
            self._intervals[key].append(interval)
            return interval

    async def release(self, *, booking_id: UUID, seat_id: int, run_id: int) -> int:
        key = (seat_id, run_id)
        if key not in self._intervals:
            return 0
        async with self._lock_for(key):
            kept = [i for i in self._intervals.get(key, []) if i.booking_id != booking_id]
            released = len(self._intervals.get(key, [])) - len(kept)
            self._intervals[key] = kept
            return released

    @asynccontextmanager
    async def seat_lock(self, *, seat_id: int, run_id: int) -> AsyncIterator[None]:
        async with self._lock_for((seat_id, run_id)):
            yield

    async def list_by_seat(self, *, seat_id: int, run_id: int) -> List[OccupancyInterval]:
        return sorted(
            self._intervals.get((seat_id, run_id), []), key=lambda i: i.boarding_order
        )

    async def list_by_run(self, *, run_id: int) -> List[OccupancyInterval]:
        return [
            interval
            for (_, interval_run_id), intervals in sorted(self._intervals.items())
            if interval_run_id == run_id
            for interval in sorted(intervals, key=lambda i: i.boarding_order)
        ]
