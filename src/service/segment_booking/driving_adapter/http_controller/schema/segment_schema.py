from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.platform.types import UtilsUUID7
from src.service.segment_booking.domain.enum.booking_attempt_state import BookingAttemptState
from src.service.segment_booking.domain.enum.seat_class import SeatClass
from src.service.segment_booking.domain.enum.seat_status import SeatStatus


class StationRangeResponse(BaseModel):
    start_order: int
    end_order: int


class RouteStopResponse(BaseModel):
    route_order: int
    station_code: str
    station_name: str
    city: Optional[str] = None
    arrival_time: Optional[datetime] = None
    departure_time: Optional[datetime] = None


class CandidateSeatResponse(BaseModel):
    seat_id: int
    coach_code: str
    seat_number: str
    seat_class: SeatClass
    price: int


class SegmentQuoteResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'run_id': 1,
                'boarding_code': 'GMR',
                'alighting_code': 'BD',
                'station_range': {'start_order': 0, 'end_order': 2},
                'passenger_count': 2,
                'seats': [
                    {
                        'seat_id': 11,
                        'coach_code': 'EKS-1',
                        'seat_number': '1A',
                        'seat_class': 'Executive',
                        'price': 1000000,
                    }
                ],
                'partial': True,
                'state': 'quoting',
            }
        }
    )

    run_id: int
    boarding_code: str
    alighting_code: str
    station_range: StationRangeResponse
    passenger_count: int
    seats: List[CandidateSeatResponse]
    partial: bool
    state: BookingAttemptState


class SegmentBookingCreateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'booking_id': '01234567-89ab-7def-0123-456789abcdef',
                'seat_id': 11,
                'boarding_code': 'GMR',
                'alighting_code': 'BD',
            }
        }
    )

    booking_id: UtilsUUID7  # UUID7, assigned by the caller
    seat_id: int
    boarding_code: str = Field(min_length=1)
    alighting_code: str = Field(min_length=1)


class SegmentBookingResponse(BaseModel):
    booking_id: UtilsUUID7
    interval_id: UtilsUUID7
    run_id: int
    seat_id: int
    station_range: StationRangeResponse
    price: int
    seat_status: SeatStatus
    state: BookingAttemptState


class SegmentCancellationResponse(BaseModel):
    booking_id: UtilsUUID7
    run_id: int
    seat_id: int
    released_count: int
    seat_status: Optional[SeatStatus] = None


class SeatMapEntryResponse(BaseModel):
    seat_id: int
    seat_number: str
    seat_class: SeatClass
    status: SeatStatus
    is_available: bool
    passenger_count: int = 0
    can_be_reused: bool = False


class SeatReuseStatisticsResponse(BaseModel):
    run_id: int
    total_seats: int
    available_seats: int
    reused_seats: int
    occupied_seats: int
    reuse_rate: int


class CoachSeatMapResponse(BaseModel):
    coach_code: str
    seat_class: Optional[SeatClass] = None
    total_seats: int
    available_count: int
    seats: List[SeatMapEntryResponse]


class SeatAvailabilityMatrixResponse(BaseModel):
    run_id: int
    # seat key "coach-seat" -> matrix[i][j] = range [i, j) free (null where j <= i)
    seats: Dict[str, List[List[Optional[bool]]]]


class TransitStopResponse(BaseModel):
    route_order: int
    station_code: str
    station_name: str
    arrival_time: Optional[datetime] = None
    departure_time: Optional[datetime] = None
    waiting_minutes: Optional[int] = None
    minutes_from_boarding: Optional[int] = None
    minutes_from_previous: Optional[int] = None
    previous_station_name: str
    next_station_name: str
