"""
Price computation tests
"""
import pytest
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from hotelres.domain.pricing import calculate_total, nightly_rate, quote_stay, to_money
from hotelres.exceptions import InvalidDateRangeError


def _room(price, capacity=2):
    return SimpleNamespace(price=price, capacity=capacity)


class TestPricing:
    """Pricing"""

    def test_two_rooms_three_nights(self):
        quote = quote_stay([_room(Decimal("100")), _room(Decimal("150"))],
                           date(2025, 7, 1), date(2025, 7, 4))
        assert quote.nights == 3
        assert quote.nightly_rate == Decimal("250.00")
        assert quote.total == Decimal("750.00")
        assert quote.room_count == 2
        assert quote.max_guests == 4

    def test_fractional_prices(self):
        assert nightly_rate([_room("99.99"), _room(0.01)]) == Decimal("100.00")
        assert calculate_total(3, Decimal("33.33")) == Decimal("99.99")

    def test_rounding(self):
        assert to_money("10.005") == Decimal("10.01")

    def test_empty_rate(self):
        assert nightly_rate([]) == Decimal("0.00")

    def test_invalid_range(self):
        with pytest.raises(InvalidDateRangeError):
            quote_stay([_room(Decimal("100"))], date(2025, 7, 4), date(2025, 7, 4))

    def test_to_dict(self):
        quote = quote_stay([_room(Decimal("100"))], date(2025, 7, 1), date(2025, 7, 2))
        assert quote.to_dict()["total"] == Decimal("100.00")
