"""
Physical Seat Repository Implementation - PostgreSQL
"""

from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.segment_booking.app.interface.i_physical_seat_repo import IPhysicalSeatRepo
from src.service.segment_booking.domain.entity.physical_seat_entity import PhysicalSeat
from src.service.segment_booking.domain.enum.seat_class import SeatClass
from src.service.segment_booking.domain.enum.seat_status import SeatStatus
from src.service.segment_booking.domain.segment_errors import SeatNotFoundError
from src.service.segment_booking.driven_adapter.model.physical_seat_model import (
    PhysicalSeatModel,
)


class PhysicalSeatRepoImpl(IPhysicalSeatRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @staticmethod
    def _model_to_entity(model: PhysicalSeatModel) -> PhysicalSeat:
        return PhysicalSeat(
            id=model.id,
            run_id=model.run_id,
            coach_code=model.coach_code,
            seat_number=model.seat_number,
            seat_class=SeatClass(model.seat_class),
            status=SeatStatus(model.status),
        )

    @Logger.io
    async def get_by_id(self, *, seat_id: int) -> Optional[PhysicalSeat]:
        async with self.session_factory() as session:
            model = await session.get(PhysicalSeatModel, seat_id)
            return self._model_to_entity(model) if model else None

    @Logger.io(truncate_content=True)
    async def list_by_run(
        self, *, run_id: int, seat_class: Optional[SeatClass] = None
    ) -> List[PhysicalSeat]:
        stmt = select(PhysicalSeatModel).where(PhysicalSeatModel.run_id == run_id)
        if seat_class is not None:
            stmt = stmt.where(PhysicalSeatModel.seat_class == seat_class.value)
        stmt = stmt.order_by(PhysicalSeatModel.coach_code, PhysicalSeatModel.seat_number)

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [self._model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def update_status(self, *, seat_id: int, status: SeatStatus) -> PhysicalSeat:
        async with self.session_factory() as session:
            result = await session.execute(
                update(PhysicalSeatModel)
                .where(PhysicalSeatModel.id == seat_id)
                .values(status=status.value)
                .returning(PhysicalSeatModel)
            )
            model = result.scalar_one_or_none()
            if model is None:
                raise SeatNotFoundError(seat_id=seat_id)
            await session.commit()
            return self._model_to_entity(model)
