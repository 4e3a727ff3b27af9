"""
Segment Booking Service

Quote -> book -> cancel for one seat over one station range.

Flow (book):
1. Resolve boarding/alighting codes to a range [start, end)
2. Load the seat, price the range
3. Reserve the range atomically (conflict -> SeatNoLongerAvailableError, caller re-quotes)
4. Reconcile the seat's cached status
"""

import time
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import CustomBaseError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.segment_booking_metrics import metrics
from src.service.segment_booking.app.command.seat_status_reconciler import SeatStatusReconciler
from src.service.segment_booking.app.dto import (
    CandidateSeat,
    SegmentBookingRequest,
    SegmentBookingResult,
    SegmentCancellationResult,
    SegmentQuote,
)
from src.service.segment_booking.app.interface.i_occupancy_interval_repo import (
    IOccupancyIntervalRepo,
)
from src.service.segment_booking.app.interface.i_physical_seat_repo import IPhysicalSeatRepo
from src.service.segment_booking.app.query.availability_checker import AvailabilityChecker
from src.service.segment_booking.app.query.route_sequence_reader import RouteSequenceReader
from src.service.segment_booking.domain.enum.booking_attempt_state import BookingAttemptState
from src.service.segment_booking.domain.enum.seat_class import SeatClass
from src.service.segment_booking.domain.fare_policy import FareCalculator
from src.service.segment_booking.domain.segment_errors import (
    InvalidPassengerCountError,
    SeatNoLongerAvailableError,
    SeatNotFoundError,
)


class SegmentBookingService:
    def __init__(
        self,
        *,
        route_sequence_reader: RouteSequenceReader,
        availability_checker: AvailabilityChecker,
        physical_seat_repo: IPhysicalSeatRepo,
        occupancy_interval_repo: IOccupancyIntervalRepo,
        seat_status_reconciler: SeatStatusReconciler,
        fare_calculator: FareCalculator,
        max_passengers_per_quote: int = settings.MAX_PASSENGERS_PER_QUOTE,
    ) -> None:
        self.route_sequence_reader = route_sequence_reader
        self.availability_checker = availability_checker
        self.physical_seat_repo = physical_seat_repo
        self.occupancy_interval_repo = occupancy_interval_repo
        self.seat_status_reconciler = seat_status_reconciler
        self.fare_calculator = fare_calculator
        self.max_passengers_per_quote = max_passengers_per_quote
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        route_sequence_reader: RouteSequenceReader = Depends(
            Provide[Container.route_sequence_reader]
        ),
        availability_checker: AvailabilityChecker = Depends(
            Provide[Container.availability_checker]
        ),
        physical_seat_repo: IPhysicalSeatRepo = Depends(Provide[Container.physical_seat_repo]),
        occupancy_interval_repo: IOccupancyIntervalRepo = Depends(
            Provide[Container.occupancy_interval_repo]
        ),
        seat_status_reconciler: SeatStatusReconciler = Depends(
            Provide[Container.seat_status_reconciler]
        ),
        fare_calculator: FareCalculator = Depends(Provide[Container.fare_calculator]),
    ) -> Self:
        return cls(
            route_sequence_reader=route_sequence_reader,
            availability_checker=availability_checker,
            physical_seat_repo=physical_seat_repo,
            occupancy_interval_repo=occupancy_interval_repo,
            seat_status_reconciler=seat_status_reconciler,
            fare_calculator=fare_calculator,
        )

    @Logger.io
    async def quote(
        self,
        *,
        run_id: int,
        boarding_code: str,
        alighting_code: str,
        seat_class: Optional[SeatClass] = None,
        passenger_count: int = 1,
    ) -> SegmentQuote:
        """
        Offer up to passenger_count seats free for [boarding, alighting), each priced
        for the range. Fewer free seats than passengers gives a partial quote.

        Raises:
            InvalidPassengerCountError: passenger_count outside 1..MAX_PASSENGERS_PER_QUOTE
            StationNotOnRouteError, InvalidRouteError: stations do not form a forward range
        """
        if not 1 <= passenger_count <= self.max_passengers_per_quote:
            raise InvalidPassengerCountError(
                passenger_count=passenger_count, maximum=self.max_passengers_per_quote
            )

        start = time.perf_counter()
        result = await self.availability_checker.find_available_seats(
            run_id=run_id,
            boarding_code=boarding_code,
            alighting_code=alighting_code,
            seat_class=seat_class,
        )
        seats = [
            CandidateSeat(
                seat_id=candidate.seat_id,
                coach_code=candidate.coach_code,
                seat_number=candidate.seat_number,
                seat_class=candidate.seat_class,
                price=self.fare_calculator.price_for_range(
                    seat_class=candidate.seat_class, station_range=result.station_range
                ),
            )
            for candidate in result.candidates[:passenger_count]
        ]

        quote = SegmentQuote(
            run_id=run_id,
            boarding_code=boarding_code,
            alighting_code=alighting_code,
            station_range=result.station_range,
            passenger_count=passenger_count,
            seats=seats,
            state=BookingAttemptState.QUOTING if seats else BookingAttemptState.ABORTED,
        )

        outcome = 'none' if not seats else 'partial' if quote.partial else 'full'
        metrics.record_quote(
            seat_class=seat_class or 'any', result=outcome, duration=time.perf_counter() - start
        )
        if quote.partial:
            Logger.base.warning(
                f'⚠️ [QUOTE] run {run_id}: only {len(seats)} seats free for '
                f'{passenger_count} passengers'
            )
        return quote

    @Logger.io
    async def book_segment(self, request: SegmentBookingRequest) -> SegmentBookingResult:
        """
        Claim one seat for one station range under a caller-supplied booking id.

        Raises:
            SeatNoLongerAvailableError: the range was taken since the quote (re-quote)
            SeatNotFoundError: seat is not part of the run
            StationNotOnRouteError, InvalidRouteError: stations do not form a forward range
        """
        start = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.book_segment',
            attributes={
                'booking.id': str(request.booking_id),
                'run.id': request.run_id,
                'seat.id': request.seat_id,
                'route.boarding': request.boarding_code,
                'route.alighting': request.alighting_code,
            },
        ) as span:
            try:
                Logger.base.info(
                    f'🎯 [BOOK] booking {request.booking_id}: seat {request.seat_id} '
                    f'run {request.run_id} {request.boarding_code}->{request.alighting_code}'
                )

                station_range = await self.route_sequence_reader.resolve_range(
                    run_id=request.run_id,
                    boarding_code=request.boarding_code,
                    alighting_code=request.alighting_code,
                )

                seat = await self.physical_seat_repo.get_by_id(seat_id=request.seat_id)
                if seat is None or seat.run_id != request.run_id:
                    raise SeatNotFoundError(seat_id=request.seat_id, run_id=request.run_id)
                if seat.is_blocked:
                    raise SeatNoLongerAvailableError(seat_id=seat.id, run_id=request.run_id)

                price = self.fare_calculator.price_for_range(
                    seat_class=seat.seat_class, station_range=station_range
                )
                span.set_attribute('booking.state', BookingAttemptState.RESERVING)

                # Cheap early exit; reserve() repeats the check atomically
                if not await self.occupancy_interval_repo.is_range_free(
                    seat_id=seat.id,
                    run_id=request.run_id,
                    start_order=station_range.start_order,
                    end_order=station_range.end_order,
                ):
                    raise SeatNoLongerAvailableError(seat_id=seat.id, run_id=request.run_id)

                interval = await self.occupancy_interval_repo.reserve(
                    seat_id=seat.id,
                    run_id=request.run_id,
                    start_order=station_range.start_order,
                    end_order=station_range.end_order,
                    booking_id=request.booking_id,
                )
                seat_status = await self.seat_status_reconciler.reconcile(
                    seat_id=seat.id, run_id=request.run_id
                )

                metrics.record_booking(result='confirmed', duration=time.perf_counter() - start)
                Logger.base.info(
                    f'✅ [BOOK] booking {request.booking_id}: seat {seat.seat_key} '
                    f'{station_range} confirmed, price {price}'
                )
                return SegmentBookingResult(
                    booking_id=request.booking_id,
                    interval=interval,
                    price=price,
                    seat_status=seat_status,
                    state=BookingAttemptState.CONFIRMED,
                )

            except SeatNoLongerAvailableError as e:
                metrics.record_booking(result='failed', duration=time.perf_counter() - start)
                span.set_attribute('booking.state', BookingAttemptState.FAILED)
                span.set_status(trace.Status(trace.StatusCode.ERROR, e.message))
                Logger.base.warning(f'⚠️ [BOOK] booking {request.booking_id}: {e.message}')
                raise

            except CustomBaseError as e:
                metrics.record_booking(result='rejected', duration=time.perf_counter() - start)
                span.set_status(trace.Status(trace.StatusCode.ERROR, e.message))
                raise

            except Exception as e:
                span.record_exception(e)
                span.set_status(trace.Status(trace.StatusCode.ERROR))
                raise

    @Logger.io
    async def cancel_segment(
        self, *, booking_id: UUID, seat_id: int, run_id: int
    ) -> SegmentCancellationResult:
        """
        Release the booking's intervals on a seat and reconcile its status.

        Idempotent: cancelling twice, or cancelling an unknown booking, succeeds
        with released_count 0. An unknown seat or run (or a seat of another run)
        also succeeds, with seat_status None.
        """
        with self.tracer.start_as_current_span(
            'use_case.cancel_segment',
            attributes={'booking.id': str(booking_id), 'seat.id': seat_id, 'run.id': run_id},
        ):
            released_count = await self.occupancy_interval_repo.release(
                booking_id=booking_id, seat_id=seat_id, run_id=run_id
            )
            metrics.record_cancellation(result='released' if released_count else 'noop')

            try:
                seat_status = await self.seat_status_reconciler.reconcile(
                    seat_id=seat_id, run_id=run_id
                )
            except NotFoundError as e:
                # Seat or run unknown: nothing to reconcile, the release still stands
                Logger.base.warning(
                    f'⚠️ [CANCEL] {e.message}, released {released_count} intervals'
                )
                seat_status = None

            Logger.base.info(
                f'🔓 [CANCEL] booking {booking_id}: released {released_count} intervals '
                f'on seat {seat_id} run {run_id}'
            )
            return SegmentCancellationResult(
                booking_id=booking_id,
                seat_id=seat_id,
                run_id=run_id,
                released_count=released_count,
                seat_status=seat_status,
            )
