from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.orm_db_setting import Base
from src.service.segment_booking.driven_adapter.model.station_model import StationModel


class RouteStopModel(Base):
    __tablename__ = 'route_stop'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    run_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('scheduled_run.id', ondelete='CASCADE'), nullable=False, index=True
    )
    station_id: Mapped[int] = mapped_column(Integer, ForeignKey('station.id'), nullable=False)
    route_order: Mapped[int] = mapped_column(Integer, nullable=False)
    arrival_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    departure_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    station: Mapped[StationModel] = relationship(lazy='joined')

    __table_args__ = (
        UniqueConstraint('run_id', 'route_order', name='uq_route_stop_order'),
        UniqueConstraint('run_id', 'station_id', name='uq_route_stop_station'),
    )
