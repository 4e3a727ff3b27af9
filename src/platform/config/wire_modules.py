"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.segment_booking.app.command import segment_booking_service
from src.service.segment_booking.app.query import route_view_use_case, seat_map_use_case


WIRE_MODULES: list[ModuleType] = [
    segment_booking_service,
    seat_map_use_case,
    route_view_use_case,
]
