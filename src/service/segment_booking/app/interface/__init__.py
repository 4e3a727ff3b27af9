"""Segment Booking Ports"""

from src.service.segment_booking.app.interface.i_occupancy_interval_repo import (
    IOccupancyIntervalRepo,
)
from src.service.segment_booking.app.interface.i_physical_seat_repo import IPhysicalSeatRepo
from src.service.segment_booking.app.interface.i_route_stop_query_repo import (
    IRouteStopQueryRepo,
)


__all__ = ['IOccupancyIntervalRepo', 'IPhysicalSeatRepo', 'IRouteStopQueryRepo']
