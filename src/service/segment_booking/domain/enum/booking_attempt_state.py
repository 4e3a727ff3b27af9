from enum import StrEnum


class BookingAttemptState(StrEnum):
    """
    QUOTING -> RESERVING -> CONFIRMED
    QUOTING -> ABORTED   (no seat qualifies)
    RESERVING -> FAILED  (range taken by a concurrent booking)
    """

    QUOTING = 'quoting'
    RESERVING = 'reserving'
    CONFIRMED = 'confirmed'
    ABORTED = 'aborted'
    FAILED = 'failed'
