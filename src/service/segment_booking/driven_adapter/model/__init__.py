"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.segment_booking.driven_adapter.model.occupancy_interval_model import (
    OccupancyIntervalModel,
)
from src.service.segment_booking.driven_adapter.model.physical_seat_model import (
    PhysicalSeatModel,
)
from src.service.segment_booking.driven_adapter.model.route_stop_model import RouteStopModel
from src.service.segment_booking.driven_adapter.model.scheduled_run_model import (
    ScheduledRunModel,
)
from src.service.segment_booking.driven_adapter.model.station_model import StationModel

__all__ = [
    'OccupancyIntervalModel',
    'PhysicalSeatModel',
    'RouteStopModel',
    'ScheduledRunModel',
    'StationModel',
]
