"""
Price computation

total = nights x sum of nightly prices of the selected rooms.
No taxes, discounts or proration.
"""
from dataclasses import dataclass, asdict
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable

from hotelres.domain.stay import validate_stay_dates

CENT = Decimal("0.01")


def to_money(value: Any) -> Decimal:
    """Convert a price to a Decimal rounded to cents"""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def nightly_rate(rooms: Iterable[Any]) -> Decimal:
    """Sum of the nightly prices of rooms"""
    return to_money(sum((to_money(room.price) for room in rooms), Decimal("0")))


def calculate_total(nights: int, rate: Decimal) -> Decimal:
    return to_money(Decimal(nights) * rate)


@dataclass
class PriceQuote:
    """Price breakdown for a selection and a stay range"""
    nights: int
    nightly_rate: Decimal
    total: Decimal
    room_count: int
    max_guests: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def quote_stay(rooms: list, check_in: date, check_out: date) -> PriceQuote:
    """Validate the range and price it for rooms"""
    nights = validate_stay_dates(check_in, check_out)
    rate = nightly_rate(rooms)
    return PriceQuote(
        nights=nights,
        nightly_rate=rate,
        total=calculate_total(nights, rate),
        room_count=len(rooms),
        max_guests=sum(room.capacity for room in rooms),
    )
