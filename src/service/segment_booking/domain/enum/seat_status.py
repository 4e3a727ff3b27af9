from enum import StrEnum


class SeatStatus(StrEnum):
    """Cached seat status. Derived from occupancy intervals, never the source of truth."""

    AVAILABLE = 'available'
    BOOKED = 'booked'  # no sub-range of the route is sellable any more
    BLOCKED = 'blocked'  # taken out of sale by operations; never overridden by reconciliation
