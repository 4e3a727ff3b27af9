"""
Route Sequence Reader

Turns a run's route stops into a RouteSequence so callers work with route
orders. Read failures from the repository propagate unchanged.
"""

from src.platform.logging.loguru_io import Logger
from src.service.segment_booking.app.interface.i_route_stop_query_repo import (
    IRouteStopQueryRepo,
)
from src.service.segment_booking.domain.aggregate.route_sequence import RouteSequence
from src.service.segment_booking.domain.entity.scheduled_run_entity import ScheduledRun
from src.service.segment_booking.domain.segment_errors import ScheduledRunNotFoundError
from src.service.segment_booking.domain.value_object.station_range import StationRange


class RouteSequenceReader:
    def __init__(self, *, route_stop_query_repo: IRouteStopQueryRepo) -> None:
        self.route_stop_query_repo = route_stop_query_repo

    @Logger.io
    async def get_run(self, *, run_id: int) -> ScheduledRun:
        run = await self.route_stop_query_repo.get_scheduled_run(run_id=run_id)
        if run is None:
            raise ScheduledRunNotFoundError(run_id=run_id)
        return run

    @Logger.io
    async def full_sequence(self, *, run_id: int) -> RouteSequence:
        stops = await self.route_stop_query_repo.list_route_stops(run_id=run_id)
        if not stops:
            # Distinguish an unknown run from a run whose route is not published yet
            await self.get_run(run_id=run_id)
        return RouteSequence(run_id=run_id, stops=stops)

    async def station_order(self, *, run_id: int, station_code: str) -> int:
        """
        Raises:
            StationNotOnRouteError: station is not a stop of this run
        """
        sequence = await self.full_sequence(run_id=run_id)
        return sequence.station_order(station_code)

    async def resolve_range(
        self, *, run_id: int, boarding_code: str, alighting_code: str
    ) -> StationRange:
        """
        Raises:
            StationNotOnRouteError: either station is not a stop of this run
            InvalidRouteError: alighting does not come after boarding
        """
        sequence = await self.full_sequence(run_id=run_id)
        return sequence.resolve_range(boarding_code=boarding_code, alighting_code=alighting_code)
