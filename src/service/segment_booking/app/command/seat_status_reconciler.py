"""
Seat Status Reconciler

Recomputes a seat's cached status from its occupancy intervals after every
booking or cancellation. A seat is `booked` only when no range [i, j) of the
route is free; otherwise it is `available`. `blocked` is never changed here.

Reconciliations of one seat are serialised through the occupancy store's
seat_lock, so the last one to finish has seen every committed interval.
Availability decisions never read the status apart from excluding blocked seats.
"""

from typing import Literal

from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.segment_booking_metrics import metrics
from src.service.segment_booking.app.interface.i_occupancy_interval_repo import (
    IOccupancyIntervalRepo,
)
from src.service.segment_booking.app.interface.i_physical_seat_repo import IPhysicalSeatRepo
from src.service.segment_booking.app.query.route_sequence_reader import RouteSequenceReader
from src.service.segment_booking.domain.enum.seat_status import SeatStatus
from src.service.segment_booking.domain.seat_occupancy import free_segments, is_fully_consumed
from src.service.segment_booking.domain.segment_errors import SeatNotFoundError


ReconcileStrategy = Literal['exhaustive', 'sweep']


class SeatStatusReconciler:
    def __init__(
        self,
        *,
        route_sequence_reader: RouteSequenceReader,
        physical_seat_repo: IPhysicalSeatRepo,
        occupancy_interval_repo: IOccupancyIntervalRepo,
        strategy: ReconcileStrategy = 'exhaustive',
    ) -> None:
        self.route_sequence_reader = route_sequence_reader
        self.physical_seat_repo = physical_seat_repo
        self.occupancy_interval_repo = occupancy_interval_repo
        self.strategy = strategy
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def reconcile(self, *, seat_id: int, run_id: int) -> SeatStatus:
        """
        Recompute and persist the cached status of one seat

        Returns:
            The status after reconciliation

        Raises:
            SeatNotFoundError: seat does not exist on this run
        """
        with self.tracer.start_as_current_span(
            'use_case.reconcile_seat_status',
            attributes={'seat.id': seat_id, 'run.id': run_id, 'reconcile.strategy': self.strategy},
        ):
            seat = await self.physical_seat_repo.get_by_id(seat_id=seat_id)
            if seat is None or seat.run_id != run_id:
                raise SeatNotFoundError(seat_id=seat_id, run_id=run_id)
            if seat.is_blocked:
                return seat.status

            sequence = await self.route_sequence_reader.full_sequence(run_id=run_id)

            async with self.occupancy_interval_repo.seat_lock(seat_id=seat_id, run_id=run_id):
                # Re-read under the lock; a concurrent reconciliation may have just written
                seat = await self.physical_seat_repo.get_by_id(seat_id=seat_id)
                if seat is None:
                    raise SeatNotFoundError(seat_id=seat_id, run_id=run_id)
                if seat.is_blocked:
                    return seat.status

                intervals = await self.occupancy_interval_repo.list_by_seat(
                    seat_id=seat_id, run_id=run_id
                )
                taken = [interval.station_range for interval in intervals]

                if self.strategy == 'sweep':
                    fully_consumed = not free_segments(sequence.stop_count, taken)
                else:
                    all_ranges = list(sequence.all_ranges())
                    metrics.record_range_checks(count=len(all_ranges))
                    fully_consumed = is_fully_consumed(all_ranges, taken)

                new_status = SeatStatus.BOOKED if fully_consumed else SeatStatus.AVAILABLE
                if new_status == seat.status:
                    return new_status

                await self.physical_seat_repo.update_status(seat_id=seat_id, status=new_status)

            metrics.record_status_transition(from_status=seat.status, to_status=new_status)
            Logger.base.info(
                f'🔄 [RECONCILE] seat {seat_id} run {run_id}: {seat.status} -> {new_status}'
            )
            return new_status
