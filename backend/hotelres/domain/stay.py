"""
Stay validation rules

Dates are calendar dates; time of day is display-only.
"""
import math
from datetime import date, datetime
from typing import Union

from hotelres.exceptions import InvalidDateRangeError, CapacityExceededError, ValidationError

DateLike = Union[date, datetime]

_SECONDS_PER_DAY = 24 * 60 * 60


def count_nights(check_in: DateLike, check_out: DateLike) -> int:
    """Whole nights between two dates, partial days rounded up"""
    delta = check_out - check_in
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)


def validate_stay_dates(check_in: DateLike, check_out: DateLike) -> int:
    """
    Validate a stay range and return its number of nights

    Raises:
        InvalidDateRangeError: check_out is not strictly after check_in
    """
    if check_in is None or check_out is None:
        raise ValidationError("Check-in and check-out dates are required", field="dates")
    if check_out <= check_in:
        raise InvalidDateRangeError("Check-out date must be after the check-in date")
    return count_nights(check_in, check_out)


def validate_guest_count(guests: int, max_capacity: int) -> None:
    """
    Raises:
        ValidationError: guests is not positive
        CapacityExceededError: guests exceeds the combined room capacity
    """
    if guests is None or guests < 1:
        raise ValidationError("At least one guest is required", field="guests")
    if guests > max_capacity:
        raise CapacityExceededError(max_capacity)


def has_started(check_in: date, today: date) -> bool:
    """A stay has started once its check-in date is today or earlier"""
    return check_in <= today
