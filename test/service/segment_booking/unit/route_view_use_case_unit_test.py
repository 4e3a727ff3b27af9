import pytest

from src.service.segment_booking.app.query.route_sequence_reader import RouteSequenceReader
from src.service.segment_booking.app.query.route_view_use_case import RouteViewUseCase
from src.service.segment_booking.domain.segment_errors import InvalidRouteError
from test.service.segment_booking.segment_test_data import (
    DWELL_MINUTES,
    LEG_MINUTES,
    RUN_ID,
)


@pytest.fixture
def route_view_use_case(route_sequence_reader: RouteSequenceReader) -> RouteViewUseCase:
    return RouteViewUseCase(route_sequence_reader=route_sequence_reader)


@pytest.mark.unit
class TestRouteViewUseCase:
    @pytest.mark.asyncio
    async def test_list_stops_in_route_order(self, route_view_use_case: RouteViewUseCase) -> None:
        stops = await route_view_use_case.list_stops(run_id=RUN_ID)

        assert [(stop.route_order, stop.station_code) for stop in stops] == [
            (0, 'GMR'),
            (1, 'CKP'),
            (2, 'BD'),
            (3, 'YK'),
        ]
        assert stops[0].arrival_time is None
        assert stops[-1].departure_time is None

    @pytest.mark.asyncio
    async def test_transit_stops_between_boarding_and_alighting(
        self, route_view_use_case: RouteViewUseCase
    ) -> None:
        transit = await route_view_use_case.list_transit_stops(
            run_id=RUN_ID, boarding_code='GMR', alighting_code='YK'
        )

        assert [stop.station_code for stop in transit] == ['CKP', 'BD']
        assert [stop.waiting_minutes for stop in transit] == [DWELL_MINUTES, DWELL_MINUTES]
        assert [stop.minutes_from_boarding for stop in transit] == [
            LEG_MINUTES,
            2 * LEG_MINUTES + DWELL_MINUTES,
        ]
        assert [stop.minutes_from_previous for stop in transit] == [LEG_MINUTES, LEG_MINUTES]
        assert [(stop.previous_station_name, stop.next_station_name) for stop in transit] == [
            ('Gambir', 'Bandung'),
            ('Cikampek', 'Yogyakarta'),
        ]

    @pytest.mark.asyncio
    async def test_single_hop_has_no_transit(self, route_view_use_case: RouteViewUseCase) -> None:
        transit = await route_view_use_case.list_transit_stops(
            run_id=RUN_ID, boarding_code='CKP', alighting_code='BD'
        )

        assert transit == []

    @pytest.mark.asyncio
    async def test_reversed_direction(self, route_view_use_case: RouteViewUseCase) -> None:
        with pytest.raises(InvalidRouteError):
            await route_view_use_case.list_transit_stops(
                run_id=RUN_ID, boarding_code='YK', alighting_code='GMR'
            )
