"""
Physical Seat Repository Interface
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.segment_booking.domain.entity.physical_seat_entity import PhysicalSeat
from src.service.segment_booking.domain.enum.seat_class import SeatClass
from src.service.segment_booking.domain.enum.seat_status import SeatStatus


class IPhysicalSeatRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, seat_id: int) -> Optional[PhysicalSeat]:
        pass

    @abstractmethod
    async def list_by_run(
        self, *, run_id: int, seat_class: Optional[SeatClass] = None
    ) -> List[PhysicalSeat]:
        """
        List the seats of a run

        Args:
            run_id: Scheduled run ID
            seat_class: Restrict to one class when given

        Returns:
            Seats ordered by coach_code, seat_number
        """
        pass

    @abstractmethod
    async def update_status(self, *, seat_id: int, status: SeatStatus) -> PhysicalSeat:
        """
        Overwrite the cached status of a seat

        Raises:
            SeatNotFoundError: seat does not exist
        """
        pass
