"""
Conftest for segment booking unit tests - in-memory adapters only.
"""

import pytest

from src.service.segment_booking.app.command.seat_status_reconciler import SeatStatusReconciler
from src.service.segment_booking.app.command.segment_booking_service import (
    SegmentBookingService,
)
from src.service.segment_booking.app.query.availability_checker import AvailabilityChecker
from src.service.segment_booking.app.query.route_sequence_reader import RouteSequenceReader
from src.service.segment_booking.domain.fare_policy import FareCalculator
from src.service.segment_booking.driven_adapter.state.in_memory_occupancy_interval_repo import (
    InMemoryOccupancyIntervalRepo,
)
from src.service.segment_booking.driven_adapter.state.in_memory_physical_seat_repo import (
    InMemoryPhysicalSeatRepo,
)
from src.service.segment_booking.driven_adapter.state.in_memory_route_stop_query_repo import (
    InMemoryRouteStopQueryRepo,
)
from test.service.segment_booking.segment_test_data import (
    build_route_stops,
    build_run,
    build_seats,
)


@pytest.fixture
def route_stop_query_repo() -> InMemoryRouteStopQueryRepo:
    repo = InMemoryRouteStopQueryRepo()
    repo.add_run(build_run(), build_route_stops())
    return repo


@pytest.fixture
def physical_seat_repo() -> InMemoryPhysicalSeatRepo:
    repo = InMemoryPhysicalSeatRepo()
    repo.add_seats(build_seats())
    return repo


@pytest.fixture
def occupancy_interval_repo() -> InMemoryOccupancyIntervalRepo:
    return InMemoryOccupancyIntervalRepo()


@pytest.fixture
def route_sequence_reader(
    route_stop_query_repo: InMemoryRouteStopQueryRepo,
) -> RouteSequenceReader:
    return RouteSequenceReader(route_stop_query_repo=route_stop_query_repo)


@pytest.fixture
def availability_checker(
    route_sequence_reader: RouteSequenceReader,
    physical_seat_repo: InMemoryPhysicalSeatRepo,
    occupancy_interval_repo: InMemoryOccupancyIntervalRepo,
) -> AvailabilityChecker:
    return AvailabilityChecker(
        route_sequence_reader=route_sequence_reader,
        physical_seat_repo=physical_seat_repo,
        occupancy_interval_repo=occupancy_interval_repo,
    )


@pytest.fixture
def seat_status_reconciler(
    route_sequence_reader: RouteSequenceReader,
    physical_seat_repo: InMemoryPhysicalSeatRepo,
    occupancy_interval_repo: InMemoryOccupancyIntervalRepo,
) -> SeatStatusReconciler:
    return SeatStatusReconciler(
        route_sequence_reader=route_sequence_reader,
        physical_seat_repo=physical_seat_repo,
        occupancy_interval_repo=occupancy_interval_repo,
    )


@pytest.fixture
def segment_booking_service(
    route_sequence_reader: RouteSequenceReader,
    availability_checker: AvailabilityChecker,
    physical_seat_repo: InMemoryPhysicalSeatRepo,
    occupancy_interval_repo: InMemoryOccupancyIntervalRepo,
    seat_status_reconciler: SeatStatusReconciler,
) -> SegmentBookingService:
    return SegmentBookingService(
        route_sequence_reader=route_sequence_reader,
        availability_checker=availability_checker,
        physical_seat_repo=physical_seat_repo,
        occupancy_interval_repo=occupancy_interval_repo,
        seat_status_reconciler=seat_status_reconciler,
        fare_calculator=FareCalculator(),
        max_passengers_per_quote=4,
    )
