from datetime import datetime
from typing import Optional

import attrs
from uuid_utils import UUID

from src.service.segment_booking.domain.segment_errors import MalformedRangeError
from src.service.segment_booking.domain.value_object.station_range import StationRange


def _validate_alighting_after_boarding(
    instance: 'OccupancyInterval', attribute: attrs.Attribute, value: int
) -> None:
    if instance.boarding_order >= value:
        raise MalformedRangeError(
            f'boarding_order ({instance.boarding_order}) must be less than '
            f'alighting_order ({value})'
        )


@attrs.define
class OccupancyInterval:
    """
    A claim on one seat of one run for the half-open range
    [boarding_order, alighting_order). The authoritative record of occupancy.
    """

    id: UUID
    seat_id: int
    run_id: int
    boarding_order: int
    alighting_order: int = attrs.field(validator=_validate_alighting_after_boarding)
    booking_id: UUID
    created_at: Optional[datetime] = None

    @property
    def station_range(self) -> StationRange:
        return StationRange(start_order=self.boarding_order, end_order=self.alighting_order)

    def conflicts_with(self, station_range: StationRange) -> bool:
        return self.station_range.overlaps(station_range)
