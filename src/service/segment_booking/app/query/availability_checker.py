"""
Availability Checker

Finds the seats of a run that are free for a station range. The cached seat
status is never trusted for this: a `booked` seat may still have free
sub-ranges, so every non-blocked seat is checked against its intervals.
"""

from typing import Optional

from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.segment_booking.app.dto import AvailabilityCheckResult, CandidateSeat
from src.service.segment_booking.app.interface.i_occupancy_interval_repo import (
    IOccupancyIntervalRepo,
)
from src.service.segment_booking.app.interface.i_physical_seat_repo import IPhysicalSeatRepo
from src.service.segment_booking.app.query.route_sequence_reader import RouteSequenceReader
from src.service.segment_booking.domain.enum.seat_class import SeatClass


class AvailabilityChecker:
    def __init__(
        self,
        *,
        route_sequence_reader: RouteSequenceReader,
        physical_seat_repo: IPhysicalSeatRepo,
        occupancy_interval_repo: IOccupancyIntervalRepo,
    ) -> None:
        self.route_sequence_reader = route_sequence_reader
        self.physical_seat_repo = physical_seat_repo
        self.occupancy_interval_repo = occupancy_interval_repo
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def find_available_seats(
        self,
        *,
        run_id: int,
        boarding_code: str,
        alighting_code: str,
        seat_class: Optional[SeatClass] = None,
    ) -> AvailabilityCheckResult:
        """
        Find seats free for [boarding, alighting)

        Args:
            run_id: Scheduled run ID
            boarding_code: Station code where the passenger boards
            alighting_code: Station code where the passenger alights
            seat_class: Restrict to one class when given

        Returns:
            The resolved range and the qualifying seats, in seat-repo order.
            An empty candidate list is a normal outcome, not an error.

        Raises:
            StationNotOnRouteError, InvalidRouteError: bad stations, nothing is read beyond the route
        """
        with self.tracer.start_as_current_span(
            'use_case.find_available_seats',
            attributes={
                'run.id': run_id,
                'route.boarding': boarding_code,
                'route.alighting': alighting_code,
                'seat.class': seat_class or '',
            },
        ) as span:
            station_range = await self.route_sequence_reader.resolve_range(
                run_id=run_id, boarding_code=boarding_code, alighting_code=alighting_code
            )

            seats = await self.physical_seat_repo.list_by_run(run_id=run_id, seat_class=seat_class)
            occupied = await self.occupancy_interval_repo.list_occupied_seat_ids(
                run_id=run_id,
                start_order=station_range.start_order,
                end_order=station_range.end_order,
            )

            candidates = [
                CandidateSeat(
                    seat_id=seat.id,
                    coach_code=seat.coach_code,
                    seat_number=seat.seat_number,
                    seat_class=seat.seat_class,
                )
                for seat in seats
                if not seat.is_blocked and seat.id not in occupied
            ]
            span.set_attribute('seat.candidates', len(candidates))

            Logger.base.info(
                f'🔍 [AVAILABILITY] run {run_id} {boarding_code}->{alighting_code} '
                f'{station_range}: {len(candidates)}/{len(seats)} seats free'
            )
            return AvailabilityCheckResult(station_range=station_range, candidates=candidates)
