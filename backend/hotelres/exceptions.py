"""
Domain exceptions

Every failure a user action can hit is a HotelError subclass. Services raise
them, routers translate them into HTTP responses. None of them is retried.
"""
from typing import Optional


class HotelError(Exception):
    """Base class for all domain errors"""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(HotelError):
    """Missing or malformed input field"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidDateRangeError(HotelError):
    """Check-out is not strictly after check-in"""


class CapacityExceededError(HotelError):
    """More guests than the selected rooms can hold"""

    def __init__(self, max_allowed: int):
        super().__init__(
            f"The selected rooms can hold at most {max_allowed} guests"
        )
        self.max_allowed = max_allowed


class UnavailableError(HotelError):
    """Room is not in the available status"""
    status_code = 409


class AlreadyStartedError(HotelError):
    """Customer cancel on a reservation whose stay has started"""
    status_code = 409


class InvalidTransitionError(HotelError):
    """Reservation status change not defined by the lifecycle"""
    status_code = 409


class AuthError(HotelError):
    """Sign-in / sign-up / token failure"""
    status_code = 401


class PermissionDeniedError(HotelError):
    """Row policy denied the operation"""
    status_code = 403


class NotFoundError(HotelError):
    """Requested row does not exist (or is not visible to the caller)"""
    status_code = 404


class PersistenceError(HotelError):
    """Read or write against the database failed"""
    status_code = 500
