"""
Fare Policy

Price depends only on seat class and the number of segments travelled:

    price = base_rate[seat_class] * (end_order - start_order) * 100

Unrecognised seat classes are charged the Economy rate.
"""

from typing import Mapping

from src.service.segment_booking.domain.enum.seat_class import SeatClass
from src.service.segment_booking.domain.value_object.station_range import StationRange


BASE_RATE_PER_SEGMENT: Mapping[str, int] = {
    SeatClass.EXECUTIVE: 5000,
    SeatClass.BUSINESS: 3000,
    SeatClass.ECONOMY: 1500,
}
SEGMENT_MULTIPLIER = 100


class FareCalculator:
    def __init__(
        self,
        *,
        base_rates: Mapping[str, int] = BASE_RATE_PER_SEGMENT,
        multiplier: int = SEGMENT_MULTIPLIER,
    ) -> None:
        self.base_rates = base_rates
        self.multiplier = multiplier

    def base_rate(self, seat_class: str) -> int:
        return self.base_rates.get(seat_class, self.base_rates[SeatClass.ECONOMY])

    def price_for(self, *, seat_class: str, start_order: int, end_order: int) -> int:
        station_range = StationRange(start_order=start_order, end_order=end_order)
        return self.price_for_range(seat_class=seat_class, station_range=station_range)

    def price_for_range(self, *, seat_class: str, station_range: StationRange) -> int:
        return self.base_rate(seat_class) * station_range.segment_count * self.multiplier
