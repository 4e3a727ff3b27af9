"""
Route Sequence Aggregate

The ordered station list of one scheduled run. Route orders must form the
contiguous sequence 0..N-1; every other component reasons about ranges of
these orders, never about station codes.
"""

from typing import Dict, Iterator, List

import attrs

from src.service.segment_booking.domain.entity.route_stop_entity import RouteStop
from src.service.segment_booking.domain.segment_errors import (
    InvalidRouteError,
    RouteSequenceCorruptedError,
    StationNotOnRouteError,
)
from src.service.segment_booking.domain.value_object.station_range import StationRange


@attrs.define
class RouteSequence:
    run_id: int
    stops: List[RouteStop] = attrs.field(factory=list)
    _order_by_code: Dict[str, int] = attrs.field(init=False, factory=dict, repr=False)

    def __attrs_post_init__(self) -> None:
        self.stops = sorted(self.stops, key=lambda stop: stop.route_order)
        orders = [stop.route_order for stop in self.stops]
        if orders != list(range(len(orders))):
            raise RouteSequenceCorruptedError(run_id=self.run_id, orders=orders)
        self._order_by_code = {stop.station_code: stop.route_order for stop in self.stops}

    @property
    def stop_count(self) -> int:
        return len(self.stops)

    def station_order(self, station_code: str) -> int:
        try:
            return self._order_by_code[station_code]
        except KeyError:
            raise StationNotOnRouteError(run_id=self.run_id, station_code=station_code) from None

    def resolve_range(self, *, boarding_code: str, alighting_code: str) -> StationRange:
        start_order = self.station_order(boarding_code)
        end_order = self.station_order(alighting_code)
        if end_order <= start_order:
            raise InvalidRouteError(boarding_code=boarding_code, alighting_code=alighting_code)
        return StationRange(start_order=start_order, end_order=end_order)

    def all_ranges(self) -> Iterator[StationRange]:
        """Every sellable range [i, j) with 0 <= i < j <= N-1."""
        last = self.stop_count - 1
        for start_order in range(last):
            for end_order in range(start_order + 1, last + 1):
                yield StationRange(start_order=start_order, end_order=end_order)

    def stop_at(self, route_order: int) -> RouteStop:
        return self.stops[route_order]

    def stops_within(self, station_range: StationRange) -> List[RouteStop]:
        """Stops from boarding to alighting, both included."""
        return self.stops[station_range.start_order : station_range.end_order + 1]
