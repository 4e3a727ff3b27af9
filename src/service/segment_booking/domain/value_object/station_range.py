"""
Station Range Value Object

A half-open interval [start_order, end_order) over route orders. The passenger
boards at start_order and alights at end_order, so the seat is free again from
end_order onwards.
"""

from typing import Iterator

import attrs

from src.service.segment_booking.domain.segment_errors import MalformedRangeError


def _validate_bounds(instance: 'StationRange', attribute: attrs.Attribute, value: int) -> None:
    if instance.start_order < 0:
        raise MalformedRangeError(f'start_order must be >= 0, got {instance.start_order}')
    if instance.start_order >= value:
        raise MalformedRangeError(
            f'start_order ({instance.start_order}) must be less than end_order ({value})'
        )


@attrs.define(frozen=True)
class StationRange:
    start_order: int
    end_order: int = attrs.field(validator=_validate_bounds)

    @property
    def segment_count(self) -> int:
        return self.end_order - self.start_order

    def overlaps(self, other: 'StationRange') -> bool:
        return self.start_order < other.end_order and other.start_order < self.end_order

    def unit_segments(self) -> Iterator['StationRange']:
        """Yield the single-hop ranges [k, k+1) this range is made of."""
        for order in range(self.start_order, self.end_order):
            yield StationRange(start_order=order, end_order=order + 1)

    def __str__(self) -> str:
        return f'[{self.start_order}, {self.end_order})'
