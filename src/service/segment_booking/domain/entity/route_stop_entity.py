from datetime import datetime
from typing import Optional

import attrs

from src.service.segment_booking.domain.entity.station_entity import Station


@attrs.define(frozen=True)
class RouteStop:
    run_id: int
    station: Station
    route_order: int = attrs.field(validator=attrs.validators.ge(0))
    arrival_time: Optional[datetime] = None  # None at the origin
    departure_time: Optional[datetime] = None  # None at the terminus

    @property
    def station_code(self) -> str:
        return self.station.code

    @property
    def dwell_minutes(self) -> Optional[int]:
        if self.arrival_time is None or self.departure_time is None:
            return None
        return int((self.departure_time - self.arrival_time).total_seconds() // 60)
