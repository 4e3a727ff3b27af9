"""
Seat Map Use Case

Seat views for booking front ends: a coach-by-coach seat map (optionally for a
station range), seat reuse statistics, and the per-seat availability matrix
over every range.
Occupancy for the whole run is read once and evaluated in memory.
"""

from collections import defaultdict
from typing import Dict, List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.segment_booking.app.dto import CoachSeatMap, SeatMapEntry, SeatReuseStatistics
from src.service.segment_booking.app.interface.i_occupancy_interval_repo import (
    IOccupancyIntervalRepo,
)
from src.service.segment_booking.app.interface.i_physical_seat_repo import IPhysicalSeatRepo
from src.service.segment_booking.app.query.route_sequence_reader import RouteSequenceReader
from src.service.segment_booking.domain.entity.occupancy_interval_entity import OccupancyInterval
from src.service.segment_booking.domain.enum.seat_class import SeatClass
from src.service.segment_booking.domain.enum.seat_status import SeatStatus
from src.service.segment_booking.domain.seat_occupancy import is_range_free
from src.service.segment_booking.domain.segment_errors import IncompleteStationPairError
from src.service.segment_booking.domain.value_object.station_range import StationRange


# matrix[i][j] answers "is [i, j) free"; cells with j <= i are None
AvailabilityMatrix = List[List[Optional[bool]]]


class SeatMapUseCase:
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

    @classmethod
    @inject
    def depends(
        cls,
        route_sequence_reader: RouteSequenceReader = Depends(
            Provide[Container.route_sequence_reader]
        ),
        physical_seat_repo: IPhysicalSeatRepo = Depends(Provide[Container.physical_seat_repo]),
        occupancy_interval_repo: IOccupancyIntervalRepo = Depends(
            Provide[Container.occupancy_interval_repo]
        ),
    ) -> Self:
        return cls(
            route_sequence_reader=route_sequence_reader,
            physical_seat_repo=physical_seat_repo,
            occupancy_interval_repo=occupancy_interval_repo,
        )

    async def _intervals_by_seat(self, *, run_id: int) -> Dict[int, List[OccupancyInterval]]:
        by_seat: Dict[int, List[OccupancyInterval]] = defaultdict(list)
        for interval in await self.occupancy_interval_repo.list_by_run(run_id=run_id):
            by_seat[interval.seat_id].append(interval)
        return by_seat

    @Logger.io
    async def coach_seat_map(
        self,
        *,
        run_id: int,
        boarding_code: Optional[str] = None,
        alighting_code: Optional[str] = None,
        seat_class: Optional[SeatClass] = None,
    ) -> List[CoachSeatMap]:
        """
        Seats grouped by coach. With both stations given, `is_available` means
        free for that range; otherwise it mirrors the cached status.

        Raises:
            IncompleteStationPairError: only one of the two stations was given
        """
        if bool(boarding_code) != bool(alighting_code):
            raise IncompleteStationPairError(
                boarding_code=boarding_code, alighting_code=alighting_code
            )

        station_range: Optional[StationRange] = None
        if boarding_code and alighting_code:
            station_range = await self.route_sequence_reader.resolve_range(
                run_id=run_id, boarding_code=boarding_code, alighting_code=alighting_code
            )
        else:
            await self.route_sequence_reader.get_run(run_id=run_id)

        seats = await self.physical_seat_repo.list_by_run(run_id=run_id, seat_class=seat_class)
        intervals_by_seat = await self._intervals_by_seat(run_id=run_id)

        coaches: Dict[str, List[SeatMapEntry]] = defaultdict(list)
        for seat in seats:
            intervals = intervals_by_seat.get(seat.id, [])
            if station_range is None:
                is_available = seat.status == SeatStatus.AVAILABLE
            else:
                is_available = not seat.is_blocked and is_range_free(
                    station_range, [interval.station_range for interval in intervals]
                )
            coaches[seat.coach_code].append(
                SeatMapEntry(
                    seat_id=seat.id,
                    seat_number=seat.seat_number,
                    seat_class=seat.seat_class,
                    status=seat.status,
                    is_available=is_available,
                    passenger_count=len({interval.booking_id for interval in intervals}),
                )
            )

        return [
            CoachSeatMap(coach_code=coach_code, seats=entries)
            for coach_code, entries in sorted(coaches.items())
        ]

    @Logger.io
    async def reuse_statistics(
        self,
        *,
        run_id: int,
        boarding_code: Optional[str] = None,
        alighting_code: Optional[str] = None,
    ) -> SeatReuseStatistics:
        """
        How far seats of the run are shared between passengers on disjoint legs.

        A seat is occupied when any booking holds part of it, and reused when it
        is occupied yet still available (for the given range, or for some range
        when no stations are given).
        """
        coaches = await self.coach_seat_map(
            run_id=run_id, boarding_code=boarding_code, alighting_code=alighting_code
        )
        entries = [seat for coach in coaches for seat in coach.seats]

        total_seats = len(entries)
        reused_seats = sum(1 for seat in entries if seat.can_be_reused)
        reuse_rate = int(reused_seats * 100 / total_seats + 0.5) if total_seats else 0

        return SeatReuseStatistics(
            total_seats=total_seats,
            available_seats=sum(1 for seat in entries if seat.is_available),
            reused_seats=reused_seats,
            occupied_seats=sum(1 for seat in entries if seat.passenger_count),
            reuse_rate=reuse_rate,
        )

    @Logger.io(truncate_content=True)
    async def availability_matrix(self, *, run_id: int) -> Dict[str, AvailabilityMatrix]:
        """
        For every seat (keyed "coach-seat"), whether each range [i, j) is free.

        Blocked seats report every range as not free.
        """
        sequence = await self.route_sequence_reader.full_sequence(run_id=run_id)
        seats = await self.physical_seat_repo.list_by_run(run_id=run_id)
        intervals_by_seat = await self._intervals_by_seat(run_id=run_id)

        last = sequence.stop_count - 1
        seat_matrices: Dict[str, AvailabilityMatrix] = {}
        for seat in seats:
            taken = [interval.station_range for interval in intervals_by_seat.get(seat.id, [])]
            matrix: AvailabilityMatrix = [[None] * sequence.stop_count for _ in range(max(last, 0))]
            for station_range in sequence.all_ranges():
                matrix[station_range.start_order][station_range.end_order] = (
                    not seat.is_blocked and is_range_free(station_range, taken)
                )
            seat_matrices[seat.seat_key] = matrix

        Logger.base.info(
            f'🗺️ [SEAT_MAP] run {run_id}: matrix for {len(seat_matrices)} seats over '
            f'{sequence.stop_count} stops'
        )
        return seat_matrices
