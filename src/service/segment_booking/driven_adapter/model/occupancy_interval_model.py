import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, func
from sqlalchemy.dialects.postgresql import UUID as PG_UUID, ExcludeConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class OccupancyIntervalModel(Base):
    __tablename__ = 'occupancy_interval'

    id: Mapped[uuid.UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)  # UUID7
    seat_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('physical_seat.id', ondelete='CASCADE'), nullable=False
    )
    run_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('scheduled_run.id', ondelete='CASCADE'), nullable=False
    )
    boarding_order: Mapped[int] = mapped_column(Integer, nullable=False)
    alighting_order: Mapped[int] = mapped_column(Integer, nullable=False)
    booking_id: Mapped[uuid.UUID] = mapped_column(PG_UUID(as_uuid=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        CheckConstraint('boarding_order < alighting_order', name='ck_occupancy_interval_range'),
        Index('ix_occupancy_interval_seat_run', 'seat_id', 'run_id'),
        Index('ix_occupancy_interval_booking', 'booking_id'),
    )


# Last line of defence against double booking: no two intervals on one seat and
# run may overlap. int4range defaults to '[)' bounds, matching the half-open rule.
# Requires the btree_gist extension for the equality parts.
_table = OccupancyIntervalModel.__table__
_table.append_constraint(
    ExcludeConstraint(
        (_table.c.seat_id, '='),
        (_table.c.run_id, '='),
        (func.int4range(_table.c.boarding_order, _table.c.alighting_order), '&&'),
        name='ex_occupancy_interval_no_overlap',
        using='gist',
    )
)
