"""
Seat Occupancy Rules

Pure functions over half-open station ranges. Two ranges [a, b) and [c, d)
conflict iff a < d and c < b, so a passenger alighting at station k never
conflicts with one boarding at k.
"""

from typing import Iterable, List

from src.service.segment_booking.domain.value_object.station_range import StationRange


def ranges_overlap(
    a_start: int,
    a_end: int,
    b_start: int,
    b_end: int,
) -> bool:
    return a_start < b_end and b_start < a_end


def is_range_free(station_range: StationRange, taken: Iterable[StationRange]) -> bool:
    return not any(station_range.overlaps(other) for other in taken)


def is_fully_consumed(
    all_ranges: Iterable[StationRange], taken: Iterable[StationRange]
) -> bool:
    """
    True when no sellable range is free.

    Exhaustive check over every [i, j); with no sellable ranges at all
    (a route of fewer than two stops) the seat counts as consumed.
    """
    taken = list(taken)
    return all(not is_range_free(station_range, taken) for station_range in all_ranges)


def free_segments(stop_count: int, taken: Iterable[StationRange]) -> List[StationRange]:
    """
    Maximal free stretches of the route, by sweep line over the taken ranges.

    Every range [i, j) contains a single hop [k, k+1), so a seat has a free
    range iff this list is non-empty; this answers the same question as
    is_fully_consumed in O(m log m).
    """
    last = stop_count - 1
    free: List[StationRange] = []
    if last <= 0:
        return free
    cursor = 0
    for station_range in sorted(taken, key=lambda r: r.start_order):
        if station_range.start_order > cursor:
            gap_end = min(station_range.start_order, last)
            free.append(StationRange(start_order=cursor, end_order=gap_end))
        cursor = max(cursor, station_range.end_order)
        if cursor >= last:
            break
    if cursor < last:
        free.append(StationRange(start_order=cursor, end_order=last))
    return free
