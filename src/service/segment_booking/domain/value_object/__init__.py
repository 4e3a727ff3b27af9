"""Segment Booking Value Objects"""

from src.service.segment_booking.domain.value_object.station_range import StationRange


__all__ = ['StationRange']
