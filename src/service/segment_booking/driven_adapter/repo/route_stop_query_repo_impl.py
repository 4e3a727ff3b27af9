"""
Route Stop Query Repository Implementation - PostgreSQL
"""

from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.segment_booking.app.interface.i_route_stop_query_repo import (
    IRouteStopQueryRepo,
)
from src.service.segment_booking.domain.entity.route_stop_entity import RouteStop
from src.service.segment_booking.domain.entity.scheduled_run_entity import ScheduledRun
from src.service.segment_booking.domain.entity.station_entity import Station
from src.service.segment_booking.domain.enum.run_status import RunStatus
from src.service.segment_booking.driven_adapter.model.route_stop_model import RouteStopModel
from src.service.segment_booking.driven_adapter.model.scheduled_run_model import (
    ScheduledRunModel,
)


class RouteStopQueryRepoImpl(IRouteStopQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @staticmethod
    def _model_to_run(model: ScheduledRunModel) -> ScheduledRun:
        return ScheduledRun(
            id=model.id,
            train_id=model.train_id,
            train_name=model.train_name,
            travel_date=model.travel_date,
            status=RunStatus(model.status),
        )

    @staticmethod
    def _model_to_stop(model: RouteStopModel) -> RouteStop:
        return RouteStop(
            run_id=model.run_id,
            station=Station(
                id=model.station.id,
                code=model.station.code,
                name=model.station.name,
                city=model.station.city,
            ),
            route_order=model.route_order,
            arrival_time=model.arrival_time,
            departure_time=model.departure_time,
        )

    @Logger.io
    async def get_scheduled_run(self, *, run_id: int) -> Optional[ScheduledRun]:
        async with self.session_factory() as session:
            model = await session.get(ScheduledRunModel, run_id)
            return self._model_to_run(model) if model else None

    @Logger.io
    async def list_route_stops(self, *, run_id: int) -> List[RouteStop]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(RouteStopModel)
                .where(RouteStopModel.run_id == run_id)
                .order_by(RouteStopModel.route_order)
            )
            return [self._model_to_stop(model) for model in result.scalars().all()]
