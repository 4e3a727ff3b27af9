"""
Occupancy Interval Repository Implementation - PostgreSQL

reserve() serialises writers per seat with SELECT ... FOR UPDATE on the seat
row, then checks for overlap and inserts in the same transaction. The
exclusion constraint on occupancy_interval backs this up; its violation is
reported as the same SeatNoLongerAvailableError.

seat_lock() holds a PostgreSQL advisory lock for the duration of a
reconciliation so two reconciliations of one seat never interleave.
"""

import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import AsyncContextManager, Callable, List, Set

from sqlalchemy import Select, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID, uuid7

from src.platform.logging.loguru_io import Logger
from src.service.segment_booking.app.interface.i_occupancy_interval_repo import (
    IOccupancyIntervalRepo,
)
from src.service.segment_booking.domain.entity.occupancy_interval_entity import OccupancyInterval
from src.service.segment_booking.domain.segment_errors import (
    SeatNoLongerAvailableError,
    SeatNotFoundError,
)
from src.service.segment_booking.domain.value_object.station_range import StationRange
from src.service.segment_booking.driven_adapter.model.occupancy_interval_model import (
    OccupancyIntervalModel,
)
from src.service.segment_booking.driven_adapter.model.physical_seat_model import (
    PhysicalSeatModel,
)


def _to_pg_uuid(value: UUID) -> uuid.UUID:
    return uuid.UUID(str(value))


def overlapping_intervals_stmt(
    *, seat_id: int, run_id: int, start_order: int, end_order: int
) -> Select:
    """Intervals on the seat and run that overlap [start_order, end_order)."""
    return select(OccupancyIntervalModel.id).where(
        OccupancyIntervalModel.seat_id == seat_id,
        OccupancyIntervalModel.run_id == run_id,
        OccupancyIntervalModel.boarding_order < end_order,
        OccupancyIntervalModel.alighting_order > start_order,
    )


def lock_seat_stmt(*, seat_id: int, run_id: int) -> Select:
    return (
        select(PhysicalSeatModel.id)
        .where(PhysicalSeatModel.id == seat_id, PhysicalSeatModel.run_id == run_id)
        .with_for_update()
    )


def seat_advisory_lock_stmt(*, seat_id: int, run_id: int) -> Select:
    """Transaction-scoped advisory lock keyed on (seat_id, run_id); released on commit."""
    return select(func.pg_advisory_xact_lock(seat_id, run_id))


class OccupancyIntervalRepoImpl(IOccupancyIntervalRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @staticmethod
    def _model_to_entity(model: OccupancyIntervalModel) -> OccupancyInterval:
        return OccupancyInterval(
            id=UUID(str(model.id)),
            seat_id=model.seat_id,
            run_id=model.run_id,
            boarding_order=model.boarding_order,
            alighting_order=model.alighting_order,
            booking_id=UUID(str(model.booking_id)),
            created_at=model.created_at,
        )

    @Logger.io
    async def is_range_free(
        self, *, seat_id: int, run_id: int, start_order: int, end_order: int
    ) -> bool:
        overlap = overlapping_intervals_stmt(
            seat_id=seat_id, run_id=run_id, start_order=start_order, end_order=end_order
        )
        async with self.session_factory() as session:
            result = await session.execute(select(~overlap.exists()))
            return bool(result.scalar())

    @Logger.io
    async def list_occupied_seat_ids(
        self, *, run_id: int, start_order: int, end_order: int
    ) -> Set[int]:
        stmt = (
            select(OccupancyIntervalModel.seat_id)
            .where(
                OccupancyIntervalModel.run_id == run_id,
                OccupancyIntervalModel.boarding_order < end_order,
                OccupancyIntervalModel.alighting_order > start_order,
            )
            .distinct()
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return set(result.scalars().all())

    @Logger.io
    async def reserve(
        self,
        *,
        seat_id: int,
        run_id: int,
        start_order: int,
        end_order: int,
        booking_id: UUID,
    ) -> OccupancyInterval:
        StationRange(start_order=start_order, end_order=end_order)  # MalformedRangeError

        async with self.session_factory() as session:
            locked = await session.execute(lock_seat_stmt(seat_id=seat_id, run_id=run_id))
            if locked.scalar_one_or_none() is None:
                raise SeatNotFoundError(seat_id=seat_id, run_id=run_id)

            conflict = await session.execute(
                overlapping_intervals_stmt(
                    seat_id=seat_id, run_id=run_id, start_order=start_order, end_order=end_order
                ).limit(1)
            )
            if conflict.scalar_one_or_none() is not None:
                raise SeatNoLongerAvailableError(seat_id=seat_id, run_id=run_id)

            model = OccupancyIntervalModel(
                id=_to_pg_uuid(uuid7()),
                seat_id=seat_id,
                run_id=run_id,
                boarding_order=start_order,
                alighting_order=end_order,
                booking_id=_to_pg_uuid(booking_id),
            )
            session.add(model)
            try:
                await session.commit()
            except IntegrityError as e:
                if 'ex_occupancy_interval_no_overlap' in str(e.orig):
                    raise SeatNoLongerAvailableError(seat_id=seat_id, run_id=run_id) from e
                raise
            await session.refresh(model)

            Logger.base.info(
                f'🔒 [OCCUPANCY] seat {seat_id} run {run_id} [{start_order}, {end_order}) '
                f'-> booking {booking_id}'
            )
            return self._model_to_entity(model)

    @Logger.io
    async def release(self, *, booking_id: UUID, seat_id: int, run_id: int) -> int:
        async with self.session_factory() as session:
            result = await session.execute(
                delete(OccupancyIntervalModel)
                .where(
                    OccupancyIntervalModel.booking_id == _to_pg_uuid(booking_id),
                    OccupancyIntervalModel.seat_id == seat_id,
                    OccupancyIntervalModel.run_id == run_id,
                )
                .returning(OccupancyIntervalModel.id)
            )
            released = len(result.scalars().all())
            await session.commit()
            return released

    @asynccontextmanager
    async def seat_lock(self, *, seat_id: int, run_id: int) -> AsyncIterator[None]:
        # The status update runs in its own session; a row lock held here would block it
        async with self.session_factory() as session, session.begin():
            await session.execute(seat_advisory_lock_stmt(seat_id=seat_id, run_id=run_id))
            yield

    @Logger.io
    async def list_by_seat(self, *, seat_id: int, run_id: int) -> List[OccupancyInterval]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(OccupancyIntervalModel)
                .where(
                    OccupancyIntervalModel.seat_id == seat_id,
                    OccupancyIntervalModel.run_id == run_id,
                )
                .order_by(OccupancyIntervalModel.boarding_order)
            )
            return [self._model_to_entity(model) for model in result.scalars().all()]

    @Logger.io(truncate_content=True)
    async def list_by_run(self, *, run_id: int) -> List[OccupancyInterval]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(OccupancyIntervalModel)
                .where(OccupancyIntervalModel.run_id == run_id)
                .order_by(OccupancyIntervalModel.seat_id, OccupancyIntervalModel.boarding_order)
            )
            return [self._model_to_entity(model) for model in result.scalars().all()]
