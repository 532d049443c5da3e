"""
Domain layer: room selection, stay rules, pricing and the reservation lifecycle
"""
from hotelres.domain.cart import RoomSelection, SelectedRoom
from hotelres.domain.pricing import PriceQuote, quote_stay, nightly_rate, calculate_total
from hotelres.domain.reservation import (
    ReservationEntity, LifecycleEvent, Actor, create_reservation_state_machine
)
from hotelres.domain.stay import (
    count_nights, validate_stay_dates, validate_guest_count, has_started
)

__all__ = [
    "RoomSelection", "SelectedRoom",
    "PriceQuote", "quote_stay", "nightly_rate", "calculate_total",
    "ReservationEntity", "LifecycleEvent", "Actor", "create_reservation_state_machine",
    "count_nights", "validate_stay_dates", "validate_guest_count", "has_started",
]
