from prometheus_client import Counter, Histogram


class SegmentBookingMetrics:
    """
    Segment Seat Booking Metrics Collector

    Tracks quote/booking/cancellation outcomes and the cost of the
    per-seat availability checks behind them.
    """

    def __init__(self) -> None:
        # ========== Quote Metrics ==========
        self.segment_quotes = Counter(
            'segment_quotes_total',
            'Total segment quote requests',
            ['seat_class', 'result'],  # result: full/partial/none
        )

        self.segment_quote_duration = Histogram(
            'segment_quote_duration_seconds',
            'Segment quote processing time',
            ['seat_class'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        # ========== Booking Metrics ==========
        self.segment_bookings = Counter(
            'segment_bookings_total',
            'Total segment booking attempts',
            ['result'],  # result: confirmed/failed/rejected
        )

        self.segment_booking_duration = Histogram(
            'segment_booking_duration_seconds',
            'Segment booking processing time',
            ['result'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0],
        )

        self.segment_cancellations = Counter(
            'segment_cancellations_total',
            'Total segment cancellations',
            ['result'],  # result: released/noop
        )

        # ========== Reconciliation Metrics ==========
        self.seat_status_transitions = Counter(
            'seat_status_transitions_total',
            'Cached seat status changes written by the reconciler',
            ['from_status', 'to_status'],
        )

        self.range_checks = Histogram(
            'segment_reconcile_range_checks',
            'Number of ranges evaluated per reconciliation',
            buckets=[1, 3, 6, 10, 28, 45, 105, 190],
        )

    # ========== Helper Methods ==========

    def record_quote(self, *, seat_class: str, result: str, duration: float) -> None:
        self.segment_quotes.labels(seat_class=seat_class, result=result).inc()
        self.segment_quote_duration.labels(seat_class=seat_class).observe(duration)

    def record_booking(self, *, result: str, duration: float) -> None:
        self.segment_bookings.labels(result=result).inc()
        self.segment_booking_duration.labels(result=result).observe(duration)

    def record_cancellation(self, *, result: str) -> None:
        self.segment_cancellations.labels(result=result).inc()

    def record_status_transition(self, *, from_status: str, to_status: str) -> None:
        self.seat_status_transitions.labels(from_status=from_status, to_status=to_status).inc()

    def record_range_checks(self, *, count: int) -> None:
        self.range_checks.observe(count)


# Global metrics instance
metrics = SegmentBookingMetrics()
