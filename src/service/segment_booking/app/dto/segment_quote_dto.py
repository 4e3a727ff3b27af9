"""
Segment Quote DTOs

What a quote returns: the resolved station range and the seats free for it,
each priced for that range.
"""

from typing import List, Optional

import attrs

from src.service.segment_booking.domain.enum.booking_attempt_state import BookingAttemptState
from src.service.segment_booking.domain.enum.seat_class import SeatClass
from src.service.segment_booking.domain.value_object.station_range import StationRange


@attrs.define(frozen=True)
class CandidateSeat:
    seat_id: int
    coach_code: str
    seat_number: str
    seat_class: SeatClass
    price: Optional[int] = None


@attrs.define(frozen=True)
class AvailabilityCheckResult:
    station_range: StationRange
    candidates: List[CandidateSeat] = attrs.field(factory=list)

    @property
    def has_candidates(self) -> bool:
        return bool(self.candidates)


@attrs.define(frozen=True)
class SegmentQuote:
    """
    `partial` is True when fewer seats than passengers qualify; the caller
    decides whether to proceed. `state` is ABORTED when none qualify.
    """

    run_id: int
    boarding_code: str
    alighting_code: str
    station_range: StationRange
    passenger_count: int
    seats: List[CandidateSeat]
    state: BookingAttemptState

    @property
    def partial(self) -> bool:
        return 0 < len(self.seats) < self.passenger_count
