"""
Route Stop Query Repository Interface

Read side of the schedule reference data: scheduled runs and their ordered stops.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.segment_booking.domain.entity.route_stop_entity import RouteStop
from src.service.segment_booking.domain.entity.scheduled_run_entity import ScheduledRun


class IRouteStopQueryRepo(ABC):
    @abstractmethod
    async def get_scheduled_run(self, *, run_id: int) -> Optional[ScheduledRun]:
        pass

    @abstractmethod
    async def list_route_stops(self, *, run_id: int) -> List[RouteStop]:
        """
        List the stops of a run

        Args:
            run_id: Scheduled run ID

        Returns:
            Stops ordered by route_order ascending (empty if the run has none)
        """
        pass
