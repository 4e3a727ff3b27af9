"""
Segment Booking Errors

Caller errors (DomainError, 400) are never retried: the request names stations
or ranges the published route does not support. Contention errors
(ConflictError, 409) mean the caller should re-quote.
"""

from src.platform.exception.exceptions import (
    ConflictError,
    CustomBaseError,
    DomainError,
    NotFoundError,
)


class StationNotOnRouteError(DomainError):
    def __init__(self, *, run_id: int, station_code: str) -> None:
        self.run_id = run_id
        self.station_code = station_code
        super().__init__(f'Station {station_code} is not on the route of run {run_id}')


class InvalidRouteError(DomainError):
    def __init__(self, *, boarding_code: str, alighting_code: str) -> None:
        self.boarding_code = boarding_code
        self.alighting_code = alighting_code
        super().__init__(
            f'Alighting station {alighting_code} must come after boarding station {boarding_code}'
        )


class MalformedRangeError(ValueError):
    """A station range with start >= end (or a negative start) was built."""


class RouteSequenceCorruptedError(CustomBaseError):
    """Route orders of a run are not the contiguous sequence 0..N-1."""

    def __init__(self, *, run_id: int, orders: list[int]) -> None:
        self.run_id = run_id
        self.orders = orders
        super().__init__(f'Route of run {run_id} has non-contiguous orders {orders}', 500)


class SeatNoLongerAvailableError(ConflictError):
    def __init__(self, *, seat_id: int, run_id: int) -> None:
        self.seat_id = seat_id
        self.run_id = run_id
        super().__init__(f'Seat {seat_id} is no longer available for the requested range')


class ScheduledRunNotFoundError(NotFoundError):
    def __init__(self, *, run_id: int) -> None:
        self.run_id = run_id
        super().__init__(f'Scheduled run {run_id} not found')


class SeatNotFoundError(NotFoundError):
    def __init__(self, *, seat_id: int, run_id: int | None = None) -> None:
        self.seat_id = seat_id
        self.run_id = run_id
        where = f' on run {run_id}' if run_id is not None else ''
        super().__init__(f'Seat {seat_id} not found{where}')


class InvalidPassengerCountError(DomainError):
    def __init__(self, *, passenger_count: int, maximum: int) -> None:
        super().__init__(f'passenger_count must be between 1 and {maximum}, got {passenger_count}')


class IncompleteStationPairError(DomainError):
    def __init__(self, *, boarding_code: str | None, alighting_code: str | None) -> None:
        self.boarding_code = boarding_code
        self.alighting_code = alighting_code
        super().__init__(
            'Give both boarding and alighting stations, or neither '
            f'(got boarding={boarding_code!r}, alighting={alighting_code!r})'
        )
