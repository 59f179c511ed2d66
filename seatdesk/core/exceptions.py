"""Domain errors raised by the service layer.

Each error carries the HTTP status it maps to and a short machine-readable
code; `seatdesk.core.error_handlers` turns them into the `ErrorResponse`
envelope.
"""


class SeatDeskError(Exception):
    """Base class for all domain errors."""

    code = "error"

    def __init__(self, message: str, status_code: int = 400) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationError(SeatDeskError):
    """Missing or malformed input."""

    code = "validation_error"

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class NotFoundError(SeatDeskError):
    """A referenced property, seat, student, shift, assignment or payment does not exist."""

    code = "not_found"

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(SeatDeskError):
    """The request clashes with the current state of a record."""

    code = "conflict"

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class SeatUnavailableError(ConflictError):
    """The seat cannot be claimed for the requested shift."""

    code = "seat_unavailable"

    def __init__(self, message: str, seat_id=None) -> None:
        super().__init__(message)
        self.seat_id = seat_id


class TransientError(SeatDeskError):
    """The database could not be reached; safe to retry manually."""

    code = "transient_error"

    def __init__(self, message: str = "Service temporarily unavailable, please retry") -> None:
        super().__init__(message, 503)
