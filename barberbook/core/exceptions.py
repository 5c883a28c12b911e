# barberbook/core/exceptions.py
"""Booking error taxonomy surfaced to the HTTP layer"""


class BookingError(Exception):
    """Base class for errors reported back to the customer or operator"""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BookingValidationError(BookingError):
    """A required booking field is missing or malformed. Nothing was persisted."""

    status_code = 422


class SlotConflictError(BookingError):
    """The selected slot was taken before the booking could be stored."""

    status_code = 409

    def __init__(self, message: str = "This time slot is no longer available. Please refresh the slot list and choose another."):
        super().__init__(message)


class StoreUnavailableError(BookingError):
    """A read or write against the database failed; retry the whole operation."""

    status_code = 503

    def __init__(self, message: str = "Booking store is unavailable. Please try again."):
        super().__init__(message)


class NotFoundError(BookingError):
    status_code = 404
