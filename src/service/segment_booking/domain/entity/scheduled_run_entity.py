from datetime import date
from typing import Optional

import attrs

from src.service.segment_booking.domain.enum.run_status import RunStatus


@attrs.define
class ScheduledRun:
    """One train's run on one date. Seats and route stops hang off it."""

    id: int
    train_id: int
    travel_date: date
    status: RunStatus = RunStatus.SCHEDULED
    train_name: Optional[str] = None
