import pytest

from src.service.segment_booking.domain.seat_occupancy import (
    free_segments,
    is_fully_consumed,
    is_range_free,
    ranges_overlap,
)
from src.service.segment_booking.domain.segment_errors import MalformedRangeError
from src.service.segment_booking.domain.value_object.station_range import StationRange


def r(start: int, end: int) -> StationRange:
    return StationRange(start_order=start, end_order=end)


def all_ranges(stop_count: int) -> list[StationRange]:
    return [r(i, j) for i in range(stop_count - 1) for j in range(i + 1, stop_count)]


@pytest.mark.unit
class TestRangesOverlap:
    @pytest.mark.parametrize(
        'a,b,expected',
        [
            ((0, 2), (1, 3), True),
            ((0, 2), (2, 3), False),  # alight at 2, board at 2
            ((0, 3), (1, 2), True),  # containment
            ((1, 2), (1, 2), True),
            ((0, 1), (2, 3), False),
            ((2, 5), (0, 3), True),
        ],
    )
    def test_overlap_is_symmetric(
        self, a: tuple[int, int], b: tuple[int, int], expected: bool
    ) -> None:
        assert ranges_overlap(*a, *b) is expected
        assert ranges_overlap(*b, *a) is expected
        assert r(*a).overlaps(r(*b)) is expected

    def test_adjacent_ranges_never_conflict(self) -> None:
        # Given: a passenger alighting at order 2
        taken = [r(0, 2)]

        # Then: another may board at order 2
        assert is_range_free(r(2, 3), taken) is True
        assert is_range_free(r(1, 3), taken) is False


@pytest.mark.unit
class TestStationRange:
    def test_rejects_empty_and_reversed_ranges(self) -> None:
        with pytest.raises(MalformedRangeError):
            StationRange(start_order=2, end_order=2)
        with pytest.raises(MalformedRangeError):
            StationRange(start_order=3, end_order=1)

    def test_rejects_negative_start(self) -> None:
        with pytest.raises(MalformedRangeError):
            StationRange(start_order=-1, end_order=1)

    def test_malformed_range_is_a_value_error(self) -> None:
        assert issubclass(MalformedRangeError, ValueError)

    def test_segment_count_and_unit_segments(self) -> None:
        station_range = r(1, 4)

        assert station_range.segment_count == 3
        assert list(station_range.unit_segments()) == [r(1, 2), r(2, 3), r(3, 4)]


@pytest.mark.unit
class TestFullyConsumed:
    def test_two_bookings_covering_route_consume_seat(self) -> None:
        # Given: 4 stops, seat booked for [0,2) and [2,3)
        taken = [r(0, 2), r(2, 3)]

        # Then: none of the six ranges is free
        assert is_fully_consumed(all_ranges(4), taken) is True
        assert free_segments(4, taken) == []

    def test_one_free_hop_keeps_seat_available(self) -> None:
        taken = [r(0, 2)]

        assert is_fully_consumed(all_ranges(4), taken) is False
        assert free_segments(4, taken) == [r(2, 3)]

    def test_empty_seat_is_entirely_free(self) -> None:
        assert is_fully_consumed(all_ranges(4), []) is False
        assert free_segments(4, []) == [r(0, 3)]

    def test_route_without_sellable_ranges_counts_as_consumed(self) -> None:
        assert is_fully_consumed(all_ranges(1), []) is True
        assert free_segments(1, []) == []

    def test_free_segments_reports_every_gap(self) -> None:
        # Given: 7 stops with bookings leaving [0,1), [3,4) and [5,6) free
        taken = [r(4, 5), r(1, 3), r(2, 3)]

        assert free_segments(7, taken) == [r(0, 1), r(3, 4), r(5, 6)]

    @pytest.mark.parametrize(
        'stop_count,taken',
        [
            (5, [r(0, 4)]),
            (5, [r(0, 1), r(1, 2), r(3, 4)]),
            (5, [r(1, 3), r(0, 2), r(2, 4)]),
            (6, [r(0, 2), r(3, 5)]),
            (6, [r(0, 5)]),
        ],
    )
    def test_sweep_line_agrees_with_exhaustive_check(
        self, stop_count: int, taken: list[StationRange]
    ) -> None:
        exhaustive = is_fully_consumed(all_ranges(stop_count), taken)
        sweep = not free_segments(stop_count, taken)

        assert sweep is exhaustive
