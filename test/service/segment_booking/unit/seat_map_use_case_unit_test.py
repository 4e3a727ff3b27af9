import pytest
from uuid_utils import uuid7

from src.service.segment_booking.app.dto import SeatReuseStatistics
from src.service.segment_booking.app.query.route_sequence_reader import RouteSequenceReader
from src.service.segment_booking.app.query.seat_map_use_case import SeatMapUseCase
from src.service.segment_booking.domain.enum.seat_class import SeatClass
from src.service.segment_booking.domain.enum.seat_status import SeatStatus
from src.service.segment_booking.domain.segment_errors import (
    IncompleteStationPairError,
    ScheduledRunNotFoundError,
)
from src.service.segment_booking.driven_adapter.state.in_memory_occupancy_interval_repo import (
    InMemoryOccupancyIntervalRepo,
)
from src.service.segment_booking.driven_adapter.state.in_memory_physical_seat_repo import (
    InMemoryPhysicalSeatRepo,
)
from test.service.segment_booking.segment_test_data import ECO_5D_BLOCKED, EXEC_1A, EXEC_1B, RUN_ID


@pytest.fixture
def seat_map_use_case(
    route_sequence_reader: RouteSequenceReader,
    physical_seat_repo: InMemoryPhysicalSeatRepo,
    occupancy_interval_repo: InMemoryOccupancyIntervalRepo,
) -> SeatMapUseCase:
    return SeatMapUseCase(
        route_sequence_reader=route_sequence_reader,
        physical_seat_repo=physical_seat_repo,
        occupancy_interval_repo=occupancy_interval_repo,
    )


@pytest.mark.unit
class TestCoachSeatMap:
    @pytest.mark.asyncio
    async def test_groups_seats_by_coach(self, seat_map_use_case: SeatMapUseCase) -> None:
        coaches = await seat_map_use_case.coach_seat_map(run_id=RUN_ID)

        assert [coach.coach_code for coach in coaches] == ['EKO-1', 'EKS-1']
        assert [seat.seat_number for seat in coaches[1].seats] == ['1A', '1B']
        # Without a range, availability mirrors the cached status
        assert coaches[0].available_count == 1
        assert coaches[0].total_seats == 2
        assert coaches[1].seat_class == SeatClass.EXECUTIVE

    @pytest.mark.asyncio
    async def test_range_availability_uses_intervals(
        self,
        seat_map_use_case: SeatMapUseCase,
        occupancy_interval_repo: InMemoryOccupancyIntervalRepo,
    ) -> None:
        # Given: 1A taken GMR -> BD
        await occupancy_interval_repo.reserve(
            seat_id=EXEC_1A, run_id=RUN_ID, start_order=0, end_order=2, booking_id=uuid7()
        )

        # When
        overlapping = await seat_map_use_case.coach_seat_map(
            run_id=RUN_ID, boarding_code='CKP', alighting_code='BD'
        )
        adjacent = await seat_map_use_case.coach_seat_map(
            run_id=RUN_ID, boarding_code='BD', alighting_code='YK'
        )

        # Then
        def seat_1a(coaches: list) -> bool:
            executive = next(coach for coach in coaches if coach.coach_code == 'EKS-1')
            return next(seat for seat in executive.seats if seat.seat_id == EXEC_1A).is_available

        assert seat_1a(overlapping) is False
        assert seat_1a(adjacent) is True

    @pytest.mark.asyncio
    async def test_unknown_run(self, seat_map_use_case: SeatMapUseCase) -> None:
        with pytest.raises(ScheduledRunNotFoundError):
            await seat_map_use_case.coach_seat_map(run_id=404)

    @pytest.mark.parametrize(
        'boarding_code,alighting_code', [('CKP', None), (None, 'BD'), ('CKP', '')]
    )
    @pytest.mark.asyncio
    async def test_single_station_is_rejected(
        self, seat_map_use_case: SeatMapUseCase, boarding_code, alighting_code
    ) -> None:
        with pytest.raises(IncompleteStationPairError) as exc_info:
            await seat_map_use_case.coach_seat_map(
                run_id=RUN_ID, boarding_code=boarding_code, alighting_code=alighting_code
            )

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_passenger_count_per_seat(
        self,
        seat_map_use_case: SeatMapUseCase,
        occupancy_interval_repo: InMemoryOccupancyIntervalRepo,
    ) -> None:
        # Given: two passengers share 1A on disjoint legs, one holds 1B over two reservations
        await occupancy_interval_repo.reserve(
            seat_id=EXEC_1A, run_id=RUN_ID, start_order=0, end_order=1, booking_id=uuid7()
        )
        await occupancy_interval_repo.reserve(
            seat_id=EXEC_1A, run_id=RUN_ID, start_order=2, end_order=3, booking_id=uuid7()
        )
        booking_id = uuid7()
        await occupancy_interval_repo.reserve(
            seat_id=EXEC_1B, run_id=RUN_ID, start_order=0, end_order=1, booking_id=booking_id
        )
        await occupancy_interval_repo.reserve(
            seat_id=EXEC_1B, run_id=RUN_ID, start_order=1, end_order=2, booking_id=booking_id
        )

        # When: the middle leg CKP -> BD
        coaches = await seat_map_use_case.coach_seat_map(
            run_id=RUN_ID, boarding_code='CKP', alighting_code='BD'
        )

        # Then
        seats = {seat.seat_id: seat for coach in coaches for seat in coach.seats}
        assert seats[EXEC_1A].passenger_count == 2
        assert seats[EXEC_1A].can_be_reused is True
        assert seats[EXEC_1B].passenger_count == 1
        assert seats[EXEC_1B].can_be_reused is False
        assert seats[ECO_5D_BLOCKED].passenger_count == 0


@pytest.mark.unit
class TestReuseStatistics:
    @pytest.mark.asyncio
    async def test_empty_run_has_nothing_reused(self, seat_map_use_case: SeatMapUseCase) -> None:
        stats = await seat_map_use_case.reuse_statistics(run_id=RUN_ID)

        assert stats == SeatReuseStatistics(
            total_seats=4, available_seats=3, reused_seats=0, occupied_seats=0, reuse_rate=0
        )

    @pytest.mark.asyncio
    async def test_partly_booked_seat_counts_as_reused(
        self,
        seat_map_use_case: SeatMapUseCase,
        occupancy_interval_repo: InMemoryOccupancyIntervalRepo,
    ) -> None:
        # Given: 1A taken GMR -> BD, 1B taken over the whole route
        await occupancy_interval_repo.reserve(
            seat_id=EXEC_1A, run_id=RUN_ID, start_order=0, end_order=2, booking_id=uuid7()
        )
        await occupancy_interval_repo.reserve(
            seat_id=EXEC_1B, run_id=RUN_ID, start_order=0, end_order=3, booking_id=uuid7()
        )

        # When
        onward = await seat_map_use_case.reuse_statistics(
            run_id=RUN_ID, boarding_code='BD', alighting_code='YK'
        )
        overlapping = await seat_map_use_case.reuse_statistics(
            run_id=RUN_ID, boarding_code='GMR', alighting_code='CKP'
        )

        # Then: 1A can take a second passenger BD -> YK, not GMR -> CKP
        assert onward == SeatReuseStatistics(
            total_seats=4, available_seats=2, reused_seats=1, occupied_seats=2, reuse_rate=25
        )
        assert overlapping.reused_seats == 0
        assert overlapping.available_seats == 1
        assert overlapping.occupied_seats == 2


@pytest.mark.unit
class TestAvailabilityMatrix:
    @pytest.mark.asyncio
    async def test_matrix_marks_each_range(
        self,
        seat_map_use_case: SeatMapUseCase,
        occupancy_interval_repo: InMemoryOccupancyIntervalRepo,
    ) -> None:
        # Given: 1A taken CKP -> BD [1,2)
        await occupancy_interval_repo.reserve(
            seat_id=EXEC_1A, run_id=RUN_ID, start_order=1, end_order=2, booking_id=uuid7()
        )

        # When
        matrices = await seat_map_use_case.availability_matrix(run_id=RUN_ID)

        # Then
        matrix = matrices['EKS-1-1A']
        assert matrix == [
            [None, True, False, False],
            [None, None, False, False],
            [None, None, None, True],
        ]
        assert all(
            cell is None or cell is True for row in matrices['EKS-1-1B'] for cell in row
        )

    @pytest.mark.asyncio
    async def test_blocked_seat_has_no_free_range(
        self, seat_map_use_case: SeatMapUseCase, physical_seat_repo: InMemoryPhysicalSeatRepo
    ) -> None:
        seat = await physical_seat_repo.get_by_id(seat_id=ECO_5D_BLOCKED)
        assert seat is not None and seat.status == SeatStatus.BLOCKED

        matrices = await seat_map_use_case.availability_matrix(run_id=RUN_ID)

        assert not any(cell for row in matrices['EKO-1-5D'] for cell in row)
