from typing import List, Optional

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.segment_booking.app.command.segment_booking_service import (
    SegmentBookingService,
)
from src.service.segment_booking.app.dto import SegmentBookingRequest
from src.service.segment_booking.app.query.route_view_use_case import RouteViewUseCase
from src.service.segment_booking.app.query.seat_map_use_case import SeatMapUseCase
from src.service.segment_booking.domain.enum.seat_class import SeatClass
from src.service.segment_booking.domain.value_object.station_range import StationRange
from src.service.segment_booking.driving_adapter.http_controller.schema.segment_schema import (
    CandidateSeatResponse,
    CoachSeatMapResponse,
    RouteStopResponse,
    SeatAvailabilityMatrixResponse,
    SeatMapEntryResponse,
    SeatReuseStatisticsResponse,
    SegmentBookingCreateRequest,
    SegmentBookingResponse,
    SegmentCancellationResponse,
    SegmentQuoteResponse,
    StationRangeResponse,
    TransitStopResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


def _range_response(station_range: StationRange) -> StationRangeResponse:
    return StationRangeResponse(
        start_order=station_range.start_order, end_order=station_range.end_order
    )


@router.get('/runs/{run_id}/route', response_model=List[RouteStopResponse])
@Logger.io
async def get_route(
    run_id: int,
    use_case: RouteViewUseCase = Depends(RouteViewUseCase.depends),
) -> List[RouteStopResponse]:
    stops = await use_case.list_stops(run_id=run_id)
    return [
        RouteStopResponse(
            route_order=stop.route_order,
            station_code=stop.station_code,
            station_name=stop.station_name,
            city=stop.city,
            arrival_time=stop.arrival_time,
            departure_time=stop.departure_time,
        )
        for stop in stops
    ]


@router.get('/runs/{run_id}/quote', response_model=SegmentQuoteResponse)
@Logger.io
async def quote_segment(
    run_id: int,
    boarding: str,
    alighting: str,
    seat_class: Optional[SeatClass] = None,
    passenger_count: int = 1,
    service: SegmentBookingService = Depends(SegmentBookingService.depends),
) -> SegmentQuoteResponse:
    with tracer.start_as_current_span('controller.quote_segment') as span:
        span.set_attribute('run_id', run_id)
        span.set_attribute('passenger_count', passenger_count)

        quote = await service.quote(
            run_id=run_id,
            boarding_code=boarding,
            alighting_code=alighting,
            seat_class=seat_class,
            passenger_count=passenger_count,
        )
        return SegmentQuoteResponse(
            run_id=quote.run_id,
            boarding_code=quote.boarding_code,
            alighting_code=quote.alighting_code,
            station_range=_range_response(quote.station_range),
            passenger_count=quote.passenger_count,
            seats=[
                CandidateSeatResponse(
                    seat_id=seat.seat_id,
                    coach_code=seat.coach_code,
                    seat_number=seat.seat_number,
                    seat_class=seat.seat_class,
                    price=seat.price or 0,
                )
                for seat in quote.seats
            ],
            partial=quote.partial,
            state=quote.state,
        )


@router.post(
    '/runs/{run_id}/bookings',
    status_code=status.HTTP_201_CREATED,
    response_model=SegmentBookingResponse,
)
@Logger.io
async def book_segment(
    run_id: int,
    request: SegmentBookingCreateRequest,
    service: SegmentBookingService = Depends(SegmentBookingService.depends),
) -> SegmentBookingResponse:
    with tracer.start_as_current_span('controller.book_segment') as span:
        span.set_attribute('run_id', run_id)
        span.set_attribute('seat_id', request.seat_id)

        result = await service.book_segment(
            SegmentBookingRequest(
                booking_id=request.booking_id,
                run_id=run_id,
                seat_id=request.seat_id,
                boarding_code=request.boarding_code,
                alighting_code=request.alighting_code,
            )
        )
        return SegmentBookingResponse(
            booking_id=result.booking_id,
            interval_id=result.interval.id,
            run_id=result.interval.run_id,
            seat_id=result.interval.seat_id,
            station_range=_range_response(result.interval.station_range),
            price=result.price,
            seat_status=result.seat_status,
            state=result.state,
        )


@router.delete(
    '/runs/{run_id}/bookings/{booking_id}/seats/{seat_id}',
    response_model=SegmentCancellationResponse,
)
@Logger.io
async def cancel_segment(
    run_id: int,
    booking_id: UtilsUUID7,
    seat_id: int,
    service: SegmentBookingService = Depends(SegmentBookingService.depends),
) -> SegmentCancellationResponse:
    result = await service.cancel_segment(booking_id=booking_id, seat_id=seat_id, run_id=run_id)
    return SegmentCancellationResponse(
        booking_id=result.booking_id,
        run_id=result.run_id,
        seat_id=result.seat_id,
        released_count=result.released_count,
        seat_status=result.seat_status,
    )


@router.get('/runs/{run_id}/seats', response_model=List[CoachSeatMapResponse])
@Logger.io
async def get_coach_seat_map(
    run_id: int,
    boarding: Optional[str] = None,
    alighting: Optional[str] = None,
    seat_class: Optional[SeatClass] = None,
    use_case: SeatMapUseCase = Depends(SeatMapUseCase.depends),
) -> List[CoachSeatMapResponse]:
    """Seats per coach; pass boarding and alighting to see availability for that range."""
    coaches = await use_case.coach_seat_map(
        run_id=run_id, boarding_code=boarding, alighting_code=alighting, seat_class=seat_class
    )
    return [
        CoachSeatMapResponse(
            coach_code=coach.coach_code,
            seat_class=coach.seat_class,
            total_seats=coach.total_seats,
            available_count=coach.available_count,
            seats=[
                SeatMapEntryResponse(
                    seat_id=seat.seat_id,
                    seat_number=seat.seat_number,
                    seat_class=seat.seat_class,
                    status=seat.status,
                    is_available=seat.is_available,
                    passenger_count=seat.passenger_count,
                    can_be_reused=seat.can_be_reused,
                )
                for seat in coach.seats
            ],
        )
        for coach in coaches
    ]


@router.get('/runs/{run_id}/reuse-stats', response_model=SeatReuseStatisticsResponse)
@Logger.io
async def get_seat_reuse_statistics(
    run_id: int,
    boarding: Optional[str] = None,
    alighting: Optional[str] = None,
    use_case: SeatMapUseCase = Depends(SeatMapUseCase.depends),
) -> SeatReuseStatisticsResponse:
    stats = await use_case.reuse_statistics(
        run_id=run_id, boarding_code=boarding, alighting_code=alighting
    )
    return SeatReuseStatisticsResponse(
        run_id=run_id,
        total_seats=stats.total_seats,
        available_seats=stats.available_seats,
        reused_seats=stats.reused_seats,
        occupied_seats=stats.occupied_seats,
        reuse_rate=stats.reuse_rate,
    )


@router.get('/runs/{run_id}/seat-matrix', response_model=SeatAvailabilityMatrixResponse)
@Logger.io(truncate_content=True)
async def get_seat_availability_matrix(
    run_id: int,
    use_case: SeatMapUseCase = Depends(SeatMapUseCase.depends),
) -> SeatAvailabilityMatrixResponse:
    matrices = await use_case.availability_matrix(run_id=run_id)
    return SeatAvailabilityMatrixResponse(run_id=run_id, seats=matrices)


@router.get('/runs/{run_id}/transit', response_model=List[TransitStopResponse])
@Logger.io
async def list_transit_stops(
    run_id: int,
    boarding: str,
    alighting: str,
    use_case: RouteViewUseCase = Depends(RouteViewUseCase.depends),
) -> List[TransitStopResponse]:
    stops = await use_case.list_transit_stops(
        run_id=run_id, boarding_code=boarding, alighting_code=alighting
    )
    return [
        TransitStopResponse(
            route_order=stop.route_order,
            station_code=stop.station_code,
            station_name=stop.station_name,
            arrival_time=stop.arrival_time,
            departure_time=stop.departure_time,
            waiting_minutes=stop.waiting_minutes,
            minutes_from_boarding=stop.minutes_from_boarding,
            minutes_from_previous=stop.minutes_from_previous,
            previous_station_name=stop.previous_station_name,
            next_station_name=stop.next_station_name,
        )
        for stop in stops
    ]
