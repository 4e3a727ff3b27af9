import pytest

from src.service.segment_booking.app.query.route_sequence_reader import RouteSequenceReader
from src.service.segment_booking.domain.aggregate.route_sequence import RouteSequence
from src.service.segment_booking.domain.segment_errors import (
    InvalidRouteError,
    RouteSequenceCorruptedError,
    ScheduledRunNotFoundError,
    StationNotOnRouteError,
)
from src.service.segment_booking.domain.value_object.station_range import StationRange
from src.service.segment_booking.driven_adapter.state.in_memory_route_stop_query_repo import (
    InMemoryRouteStopQueryRepo,
)
from test.service.segment_booking.segment_test_data import (
    OTHER_RUN_ID,
    RUN_ID,
    build_route_stops,
    build_run,
)


@pytest.mark.unit
class TestRouteSequence:
    @pytest.fixture
    def sequence(self) -> RouteSequence:
        return RouteSequence(run_id=RUN_ID, stops=list(reversed(build_route_stops())))

    def test_stops_sorted_by_route_order(self, sequence: RouteSequence) -> None:
        assert [stop.station_code for stop in sequence.stops] == ['GMR', 'CKP', 'BD', 'YK']

    def test_station_order(self, sequence: RouteSequence) -> None:
        assert sequence.station_order('GMR') == 0
        assert sequence.station_order('YK') == 3

    def test_unknown_station(self, sequence: RouteSequence) -> None:
        with pytest.raises(StationNotOnRouteError) as exc_info:
            sequence.station_order('SBY')

        assert exc_info.value.status_code == 400
        assert exc_info.value.station_code == 'SBY'

    def test_resolve_range(self, sequence: RouteSequence) -> None:
        assert sequence.resolve_range(boarding_code='CKP', alighting_code='YK') == StationRange(
            start_order=1, end_order=3
        )

    @pytest.mark.parametrize('boarding,alighting', [('YK', 'CKP'), ('BD', 'BD')])
    def test_alighting_must_follow_boarding(
        self, sequence: RouteSequence, boarding: str, alighting: str
    ) -> None:
        with pytest.raises(InvalidRouteError):
            sequence.resolve_range(boarding_code=boarding, alighting_code=alighting)

    def test_all_ranges_enumerates_every_forward_pair(self, sequence: RouteSequence) -> None:
        ranges = [(r.start_order, r.end_order) for r in sequence.all_ranges()]

        assert ranges == [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]

    def test_non_contiguous_orders_are_rejected(self) -> None:
        stops = build_route_stops()
        del stops[1]

        with pytest.raises(RouteSequenceCorruptedError) as exc_info:
            RouteSequence(run_id=RUN_ID, stops=stops)

        assert exc_info.value.orders == [0, 2, 3]

    def test_stops_within_range_include_both_ends(self, sequence: RouteSequence) -> None:
        stops = sequence.stops_within(StationRange(start_order=1, end_order=3))

        assert [stop.station_code for stop in stops] == ['CKP', 'BD', 'YK']


@pytest.mark.unit
class TestRouteSequenceReader:
    @pytest.mark.asyncio
    async def test_station_order_by_run(self, route_sequence_reader: RouteSequenceReader) -> None:
        assert await route_sequence_reader.station_order(run_id=RUN_ID, station_code='BD') == 2

    @pytest.mark.asyncio
    async def test_unknown_run(self, route_sequence_reader: RouteSequenceReader) -> None:
        with pytest.raises(ScheduledRunNotFoundError):
            await route_sequence_reader.full_sequence(run_id=999)

    @pytest.mark.asyncio
    async def test_run_without_published_route_has_empty_sequence(
        self, route_stop_query_repo: InMemoryRouteStopQueryRepo
    ) -> None:
        # Given: a run with no stops yet
        route_stop_query_repo.add_run(build_run(OTHER_RUN_ID))
        reader = RouteSequenceReader(route_stop_query_repo=route_stop_query_repo)

        # When
        sequence = await reader.full_sequence(run_id=OTHER_RUN_ID)

        # Then
        assert sequence.stop_count == 0
        assert list(sequence.all_ranges()) == []
