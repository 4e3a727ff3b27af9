from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError
from uuid_utils import uuid7

from src.service.segment_booking.app.command.seat_status_reconciler import SeatStatusReconciler
from src.service.segment_booking.app.command.segment_booking_service import (
    SegmentBookingService,
)
from src.service.segment_booking.app.interface.i_occupancy_interval_repo import (
    IOccupancyIntervalRepo,
)
from src.service.segment_booking.app.interface.i_physical_seat_repo import IPhysicalSeatRepo
from src.service.segment_booking.app.interface.i_route_stop_query_repo import (
    IRouteStopQueryRepo,
)
from src.service.segment_booking.app.query.availability_checker import AvailabilityChecker
from src.service.segment_booking.app.query.route_sequence_reader import RouteSequenceReader
from src.service.segment_booking.domain.enum.seat_class import SeatClass
from src.service.segment_booking.domain.enum.seat_status import SeatStatus
from src.service.segment_booking.domain.fare_policy import FareCalculator
from src.service.segment_booking.domain.segment_errors import (
    InvalidRouteError,
    StationNotOnRouteError,
)
from src.service.segment_booking.domain.value_object.station_range import StationRange
from src.service.segment_booking.driven_adapter.state.in_memory_occupancy_interval_repo import (
    InMemoryOccupancyIntervalRepo,
)
from src.service.segment_booking.driven_adapter.state.in_memory_physical_seat_repo import (
    InMemoryPhysicalSeatRepo,
)
from test.service.segment_booking.segment_test_data import (
    ECO_5C,
    ECO_5D_BLOCKED,
    EXEC_1A,
    EXEC_1B,
    RUN_ID,
)


@pytest.mark.unit
class TestAvailabilityChecker:
    @pytest.mark.asyncio
    async def test_all_unblocked_seats_free_on_empty_run(
        self, availability_checker: AvailabilityChecker
    ) -> None:
        result = await availability_checker.find_available_seats(
            run_id=RUN_ID, boarding_code='GMR', alighting_code='YK'
        )

        assert result.station_range == StationRange(start_order=0, end_order=3)
        assert {seat.seat_id for seat in result.candidates} == {EXEC_1A, EXEC_1B, ECO_5C}
        assert ECO_5D_BLOCKED not in {seat.seat_id for seat in result.candidates}

    @pytest.mark.asyncio
    async def test_overlapping_occupancy_excludes_seat(
        self,
        availability_checker: AvailabilityChecker,
        occupancy_interval_repo: InMemoryOccupancyIntervalRepo,
    ) -> None:
        # Given: 1A taken GMR->BD [0,2)
        await occupancy_interval_repo.reserve(
            seat_id=EXEC_1A, run_id=RUN_ID, start_order=0, end_order=2, booking_id=uuid7()
        )

        # When: CKP->YK [1,3) and BD->YK [2,3)
        overlapping = await availability_checker.find_available_seats(
            run_id=RUN_ID, boarding_code='CKP', alighting_code='YK'
        )
        adjacent = await availability_checker.find_available_seats(
            run_id=RUN_ID, boarding_code='BD', alighting_code='YK'
        )

        # Then
        assert EXEC_1A not in {seat.seat_id for seat in overlapping.candidates}
        assert EXEC_1A in {seat.seat_id for seat in adjacent.candidates}

    @pytest.mark.asyncio
    async def test_cached_booked_status_is_not_trusted(
        self,
        availability_checker: AvailabilityChecker,
        physical_seat_repo: InMemoryPhysicalSeatRepo,
    ) -> None:
        # Given: a stale `booked` status with no intervals behind it
        await physical_seat_repo.update_status(seat_id=EXEC_1B, status=SeatStatus.BOOKED)

        result = await availability_checker.find_available_seats(
            run_id=RUN_ID, boarding_code='GMR', alighting_code='CKP'
        )

        assert EXEC_1B in {seat.seat_id for seat in result.candidates}

    @pytest.mark.asyncio
    async def test_seat_class_filter(self, availability_checker: AvailabilityChecker) -> None:
        result = await availability_checker.find_available_seats(
            run_id=RUN_ID, boarding_code='GMR', alighting_code='BD', seat_class=SeatClass.ECONOMY
        )

        assert [seat.seat_id for seat in result.candidates] == [ECO_5C]

    @pytest.mark.asyncio
    async def test_no_candidates_is_not_an_error(
        self,
        availability_checker: AvailabilityChecker,
        occupancy_interval_repo: InMemoryOccupancyIntervalRepo,
    ) -> None:
        for seat_id in (EXEC_1A, EXEC_1B, ECO_5C):
            await occupancy_interval_repo.reserve(
                seat_id=seat_id, run_id=RUN_ID, start_order=0, end_order=3, booking_id=uuid7()
            )

        result = await availability_checker.find_available_seats(
            run_id=RUN_ID, boarding_code='CKP', alighting_code='BD'
        )

        assert result.candidates == []
        assert result.has_candidates is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'boarding,alighting,error',
        [
            ('BD', 'CKP', InvalidRouteError),
            ('GMR', 'SBY', StationNotOnRouteError),
        ],
    )
    async def test_bad_stations_fail_before_reading_seats(
        self,
        route_sequence_reader: RouteSequenceReader,
        occupancy_interval_repo: InMemoryOccupancyIntervalRepo,
        boarding: str,
        alighting: str,
        error: type[Exception],
    ) -> None:
        # Given: a seat repo that records any access
        seat_repo = AsyncMock(spec=IPhysicalSeatRepo)
        checker = AvailabilityChecker(
            route_sequence_reader=route_sequence_reader,
            physical_seat_repo=seat_repo,
            occupancy_interval_repo=occupancy_interval_repo,
        )

        with pytest.raises(error):
            await checker.find_available_seats(
                run_id=RUN_ID, boarding_code=boarding, alighting_code=alighting
            )

        seat_repo.list_by_run.assert_not_awaited()


def _storage_down() -> OperationalError:
    return OperationalError('SELECT ...', {}, ConnectionRefusedError('connection refused'))


@pytest.mark.unit
class TestStorageFailuresSurface:
    @pytest.mark.asyncio
    async def test_seat_read_failure_is_not_reported_as_no_seats(
        self,
        route_sequence_reader: RouteSequenceReader,
        occupancy_interval_repo: InMemoryOccupancyIntervalRepo,
        seat_status_reconciler: SeatStatusReconciler,
    ) -> None:
        # Given: seat storage is unreachable
        seat_repo = AsyncMock(spec=IPhysicalSeatRepo)
        seat_repo.list_by_run.side_effect = _storage_down()
        checker = AvailabilityChecker(
            route_sequence_reader=route_sequence_reader,
            physical_seat_repo=seat_repo,
            occupancy_interval_repo=occupancy_interval_repo,
        )
        service = SegmentBookingService(
            route_sequence_reader=route_sequence_reader,
            availability_checker=checker,
            physical_seat_repo=seat_repo,
            occupancy_interval_repo=occupancy_interval_repo,
            seat_status_reconciler=seat_status_reconciler,
            fare_calculator=FareCalculator(),
            max_passengers_per_quote=4,
        )

        # When / Then: the storage error reaches the caller untouched
        with pytest.raises(OperationalError):
            await checker.find_available_seats(
                run_id=RUN_ID, boarding_code='GMR', alighting_code='BD'
            )
        with pytest.raises(OperationalError):
            await service.quote(run_id=RUN_ID, boarding_code='GMR', alighting_code='BD')

    @pytest.mark.asyncio
    async def test_route_read_failure_propagates(
        self,
        physical_seat_repo: InMemoryPhysicalSeatRepo,
        occupancy_interval_repo: InMemoryOccupancyIntervalRepo,
    ) -> None:
        route_repo = AsyncMock(spec=IRouteStopQueryRepo)
        route_repo.list_route_stops.side_effect = _storage_down()
        checker = AvailabilityChecker(
            route_sequence_reader=RouteSequenceReader(route_stop_query_repo=route_repo),
            physical_seat_repo=physical_seat_repo,
            occupancy_interval_repo=occupancy_interval_repo,
        )

        with pytest.raises(OperationalError):
            await checker.find_available_seats(
                run_id=RUN_ID, boarding_code='GMR', alighting_code='BD'
            )

    @pytest.mark.asyncio
    async def test_occupancy_read_failure_propagates(
        self,
        route_sequence_reader: RouteSequenceReader,
        physical_seat_repo: InMemoryPhysicalSeatRepo,
    ) -> None:
        occupancy_repo = AsyncMock(spec=IOccupancyIntervalRepo)
        occupancy_repo.list_occupied_seat_ids.side_effect = _storage_down()
        checker = AvailabilityChecker(
            route_sequence_reader=route_sequence_reader,
            physical_seat_repo=physical_seat_repo,
            occupancy_interval_repo=occupancy_repo,
        )

        with pytest.raises(OperationalError):
            await checker.find_available_seats(
                run_id=RUN_ID, boarding_code='GMR', alighting_code='BD'
            )
