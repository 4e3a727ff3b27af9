"""Segment Booking Domain Enums"""

from src.service.segment_booking.domain.enum.booking_attempt_state import BookingAttemptState
from src.service.segment_booking.domain.enum.run_status import RunStatus
from src.service.segment_booking.domain.enum.seat_class import SeatClass
from src.service.segment_booking.domain.enum.seat_status import SeatStatus


__all__ = ['BookingAttemptState', 'RunStatus', 'SeatClass', 'SeatStatus']
