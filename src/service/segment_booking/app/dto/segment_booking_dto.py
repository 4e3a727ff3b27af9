"""
Segment Booking DTOs

Request/Result DTOs for booking and cancelling one seat over one station range.
"""

from typing import Optional

import attrs
from uuid_utils import UUID

from src.service.segment_booking.domain.entity.occupancy_interval_entity import OccupancyInterval
from src.service.segment_booking.domain.enum.booking_attempt_state import BookingAttemptState
from src.service.segment_booking.domain.enum.seat_status import SeatStatus


@attrs.define
class SegmentBookingRequest:
    booking_id: UUID  # Caller-assigned; one booking may hold several seats
    run_id: int
    seat_id: int
    boarding_code: str
    alighting_code: str


@attrs.define
class SegmentBookingResult:
    booking_id: UUID
    interval: OccupancyInterval
    price: int
    seat_status: SeatStatus
    state: BookingAttemptState = BookingAttemptState.CONFIRMED


@attrs.define
class SegmentCancellationResult:
    """Cancellation always succeeds; released_count is 0 on a repeated cancel."""

    booking_id: UUID
    seat_id: int
    run_id: int
    released_count: int
    seat_status: Optional[SeatStatus] = None  # None when the seat no longer exists
