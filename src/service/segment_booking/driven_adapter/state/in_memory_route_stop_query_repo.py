"""
In-memory route stop reference data, for the `memory` backend and tests.
"""

from typing import Dict, Iterable, List, Optional

from src.service.segment_booking.app.interface.i_route_stop_query_repo import (
    IRouteStopQueryRepo,
)
from src.service.segment_booking.domain.entity.route_stop_entity import RouteStop
from src.service.segment_booking.domain.entity.scheduled_run_entity import ScheduledRun


class InMemoryRouteStopQueryRepo(IRouteStopQueryRepo):
    def __init__(self) -> None:
        self._runs: Dict[int, ScheduledRun] = {}
        self._stops: Dict[int, List[RouteStop]] = {}

    def add_run(self, run: ScheduledRun, stops: Iterable[RouteStop] = ()) -> None:
        self._runs[run.id] = run
        self._stops[run.id] = list(stops)

    async def get_scheduled_run(self, *, run_id: int) -> Optional[ScheduledRun]:
        return self._runs.get(run_id)

    async def list_route_stops(self, *, run_id: int) -> List[RouteStop]:
        return sorted(self._stops.get(run_id, []), key=lambda stop: stop.route_order)
