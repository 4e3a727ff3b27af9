import attrs

from src.service.segment_booking.domain.enum.seat_class import SeatClass
from src.service.segment_booking.domain.enum.seat_status import SeatStatus


@attrs.define
class PhysicalSeat:
    """
    A concrete seat on a scheduled run.

    `status` is a cache derived from the seat's occupancy intervals; only the
    status reconciler (and operations blocking a seat) writes it.
    """

    id: int
    run_id: int
    coach_code: str
    seat_number: str
    seat_class: SeatClass
    status: SeatStatus = SeatStatus.AVAILABLE

    @property
    def seat_key(self) -> str:
        return f'{self.coach_code}-{self.seat_number}'

    @property
    def is_blocked(self) -> bool:
        return self.status == SeatStatus.BLOCKED
