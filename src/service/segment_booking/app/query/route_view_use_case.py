"""
Route View Use Case

Read-only views of a run's route: the full stop list, and the transit stops a
passenger passes between boarding and alighting with dwell and travel times.
"""

from datetime import datetime
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.segment_booking.app.dto import StopView, TransitStop
from src.service.segment_booking.app.query.route_sequence_reader import RouteSequenceReader


def _minutes_between(start: Optional[datetime], end: Optional[datetime]) -> Optional[int]:
    if start is None or end is None:
        return None
    return int((end - start).total_seconds() // 60)


class RouteViewUseCase:
    def __init__(self, *, route_sequence_reader: RouteSequenceReader) -> None:
        self.route_sequence_reader = route_sequence_reader

    @classmethod
    @inject
    def depends(
        cls,
        route_sequence_reader: RouteSequenceReader = Depends(
            Provide[Container.route_sequence_reader]
        ),
    ) -> Self:
        return cls(route_sequence_reader=route_sequence_reader)

    @Logger.io
    async def list_stops(self, *, run_id: int) -> List[StopView]:
        sequence = await self.route_sequence_reader.full_sequence(run_id=run_id)
        return [
            StopView(
                route_order=stop.route_order,
                station_code=stop.station.code,
                station_name=stop.station.name,
                city=stop.station.city,
                arrival_time=stop.arrival_time,
                departure_time=stop.departure_time,
            )
            for stop in sequence.stops
        ]

    @Logger.io
    async def list_transit_stops(
        self, *, run_id: int, boarding_code: str, alighting_code: str
    ) -> List[TransitStop]:
        """Stops strictly between boarding and alighting (empty for a single hop)."""
        sequence = await self.route_sequence_reader.full_sequence(run_id=run_id)
        station_range = sequence.resolve_range(
            boarding_code=boarding_code, alighting_code=alighting_code
        )
        journey = sequence.stops_within(station_range)
        boarding_departure = journey[0].departure_time

        transit_stops = []
        for previous, stop, following in zip(journey, journey[1:-1], journey[2:]):
            transit_stops.append(
                TransitStop(
                    route_order=stop.route_order,
                    station_code=stop.station.code,
                    station_name=stop.station.name,
                    arrival_time=stop.arrival_time,
                    departure_time=stop.departure_time,
                    waiting_minutes=stop.dwell_minutes,
                    minutes_from_boarding=_minutes_between(boarding_departure, stop.arrival_time),
                    minutes_from_previous=_minutes_between(
                        previous.departure_time, stop.arrival_time
                    ),
                    previous_station_name=previous.station.name,
                    next_station_name=following.station.name,
                )
            )
        return transit_stops
