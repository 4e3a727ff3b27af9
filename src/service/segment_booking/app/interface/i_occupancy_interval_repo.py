"""
Occupancy Interval Repository Interface

Authoritative store of seat occupancy. A seat on a run is free for [s, e)
iff no stored interval [b, a) on it satisfies b < e and s < a.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import List, Set

from uuid_utils import UUID

from src.service.segment_booking.domain.entity.occupancy_interval_entity import OccupancyInterval


class IOccupancyIntervalRepo(ABC):
    @abstractmethod
    async def is_range_free(
        self, *, seat_id: int, run_id: int, start_order: int, end_order: int
    ) -> bool:
        pass

    @abstractmethod
    async def list_occupied_seat_ids(
        self, *, run_id: int, start_order: int, end_order: int
    ) -> Set[int]:
        """Seats of the run holding at least one interval overlapping [start_order, end_order)."""
        pass

    @abstractmethod
    async def reserve(
        self,
        *,
        seat_id: int,
        run_id: int,
        start_order: int,
        end_order: int,
        booking_id: UUID,
    ) -> OccupancyInterval:
        """
        Insert an interval iff it overlaps no existing interval on the same seat and run.

        The overlap check and the insert are one atomic step: of two concurrent
        reservations of overlapping ranges on one seat, exactly one succeeds.

        Raises:
            SeatNoLongerAvailableError: an overlapping interval exists
            MalformedRangeError: start_order >= end_order
        """
        pass

    @abstractmethod
    async def release(self, *, booking_id: UUID, seat_id: int, run_id: int) -> int:
        """
        Delete every interval of the booking on the seat and run.

        Returns:
            Number of intervals removed (0 when already released)
        """
        pass

    @abstractmethod
    def seat_lock(self, *, seat_id: int, run_id: int) -> AbstractAsyncContextManager[None]:
        """
        Exclusive section for one seat on one run.

        Holders of the same (seat_id, run_id) run one at a time. Used to keep the
        read-intervals / write-status step of reconciliation from interleaving.
        """
        pass

    @abstractmethod
    async def list_by_seat(self, *, seat_id: int, run_id: int) -> List[OccupancyInterval]:
        pass

    @abstractmethod
    async def list_by_run(self, *, run_id: int) -> List[OccupancyInterval]:
        pass
