from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class PhysicalSeatModel(Base):
    __tablename__ = 'physical_seat'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    run_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('scheduled_run.id', ondelete='CASCADE'), nullable=False, index=True
    )
    coach_code: Mapped[str] = mapped_column(String(10), nullable=False)
    seat_number: Mapped[str] = mapped_column(String(10), nullable=False)
    seat_class: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='available', nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint('run_id', 'coach_code', 'seat_number', name='uq_physical_seat'),
    )
