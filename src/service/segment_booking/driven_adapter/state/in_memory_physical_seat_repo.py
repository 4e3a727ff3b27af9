from typing import Dict, Iterable, List, Optional

import attrs

from src.service.segment_booking.app.interface.i_physical_seat_repo import IPhysicalSeatRepo
from src.service.segment_booking.domain.entity.physical_seat_entity import PhysicalSeat
from src.service.segment_booking.domain.enum.seat_class import SeatClass
from src.service.segment_booking.domain.enum.seat_status import SeatStatus
from src.service.segment_booking.domain.segment_errors import SeatNotFoundError


class InMemoryPhysicalSeatRepo(IPhysicalSeatRepo):
    def __init__(self) -> None:
        self._seats: Dict[int, PhysicalSeat] = {}

    def add_seats(self, seats: Iterable[PhysicalSeat]) -> None:
        for seat in seats:
            self._seats[seat.id] = seat

    async def get_by_id(self, *, seat_id: int) -> Optional[PhysicalSeat]:
        seat = self._seats.get(seat_id)
        # Copies, so callers never mutate stored state
        return attrs.evolve(seat) if seat else None

    async def list_by_run(
        self, *, run_id: int, seat_class: Optional[SeatClass] = None
    ) -> List[PhysicalSeat]:
        seats = [
            attrs.evolve(seat)
            for seat in self._seats.values()
            if seat.run_id == run_id and (seat_class is None or seat.seat_class == seat_class)
        ]
        return sorted(seats, key=lambda seat: (seat.coach_code, seat.seat_number))

    async def update_status(self, *, seat_id: int, status: SeatStatus) -> PhysicalSeat:
        seat = self._seats.get(seat_id)
        if seat is None:
            raise SeatNotFoundError(seat_id=seat_id)
        self._seats[seat_id] = attrs.evolve(seat, status=status)
        return attrs.evolve(self._seats[seat_id])
