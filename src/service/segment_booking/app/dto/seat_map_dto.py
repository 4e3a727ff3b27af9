"""Seat map and route views served to booking front ends."""

from datetime import datetime
from typing import List, Optional

import attrs

from src.service.segment_booking.domain.enum.seat_class import SeatClass
from src.service.segment_booking.domain.enum.seat_status import SeatStatus


@attrs.define(frozen=True)
class SeatMapEntry:
    seat_id: int
    seat_number: str
    seat_class: SeatClass
    status: SeatStatus
    # Free for the requested range; equals status == available when no range was given
    is_available: bool
    # Bookings currently holding a range of this seat
    passenger_count: int = 0

    @property
    def can_be_reused(self) -> bool:
        """Already carries a passenger and can still take another."""
        return self.passenger_count > 0 and self.is_available


@attrs.define(frozen=True)
class CoachSeatMap:
    coach_code: str
    seats: List[SeatMapEntry] = attrs.field(factory=list)

    @property
    def seat_class(self) -> Optional[SeatClass]:
        return self.seats[0].seat_class if self.seats else None

    @property
    def total_seats(self) -> int:
        return len(self.seats)

    @property
    def available_count(self) -> int:
        return sum(1 for seat in self.seats if seat.is_available)


@attrs.define(frozen=True)
class SeatReuseStatistics:
    total_seats: int
    available_seats: int
    reused_seats: int
    occupied_seats: int
    reuse_rate: int  # percent of all seats, rounded half up


@attrs.define(frozen=True)
class StopView:
    route_order: int
    station_code: str
    station_name: str
    city: Optional[str]
    arrival_time: Optional[datetime]
    departure_time: Optional[datetime]


@attrs.define(frozen=True)
class TransitStop:
    """An intermediate stop of a journey, with how long the train waits there."""

    route_order: int
    station_code: str
    station_name: str
    arrival_time: Optional[datetime]
    departure_time: Optional[datetime]
    waiting_minutes: Optional[int]
    # Minutes travelled from the boarding station's departure to arrival here
    minutes_from_boarding: Optional[int]
    minutes_from_previous: Optional[int]
    previous_station_name: str
    next_station_name: str
