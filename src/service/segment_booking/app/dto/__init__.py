"""Segment Booking Application DTOs"""

from src.service.segment_booking.app.dto.seat_map_dto import (
    CoachSeatMap,
    SeatMapEntry,
    SeatReuseStatistics,
    StopView,
    TransitStop,
)
from src.service.segment_booking.app.dto.segment_booking_dto import (
    SegmentBookingRequest,
    SegmentBookingResult,
    SegmentCancellationResult,
)
from src.service.segment_booking.app.dto.segment_quote_dto import (
    AvailabilityCheckResult,
    CandidateSeat,
    SegmentQuote,
)


__all__ = [
    'AvailabilityCheckResult',
    'CandidateSeat',
    'CoachSeatMap',
    'SeatMapEntry',
    'SeatReuseStatistics',
    'SegmentBookingRequest',
    'SegmentBookingResult',
    'SegmentCancellationResult',
    'SegmentQuote',
    'StopView',
    'TransitStop',
]
