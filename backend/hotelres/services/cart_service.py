"""
Cart service
Per-session room selection that feeds reservation checkout
"""
from typing import Dict, Optional
import logging
import threading
from sqlalchemy.orm import Session
from hotelres.domain.cart import RoomSelection
from hotelres.exceptions import ValidationError
from hotelres.models.events import EventType
from hotelres.models.ontology import Reservation
from hotelres.models.schemas import CheckoutRequest, ReservationCreate
from hotelres.security.policies import Caller
from hotelres.services.event_bus import event_bus, Event
from hotelres.services.reservation_service import ReservationService
from hotelres.services.room_service import RoomService

logger = logging.getLogger(__name__)


class CartStore:
    """
    Process-local selections keyed by auth session id

    Nothing is persisted and nothing expires; a selection lives until checkout
    succeeds, the owner clears it, or the session signs out.
    """

    def __init__(self):
        self._carts: Dict[str, RoomSelection] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> RoomSelection:
        with self._lock:
            return self._carts.setdefault(session_id, RoomSelection())

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._carts.pop(session_id, None)

    def clear_all(self) -> None:
        with self._lock:
            self._carts.clear()

    def __len__(self) -> int:
        return len(self._carts)


cart_store = CartStore()


def _discard_on_sign_out(event: Event) -> None:
    cart_store.discard(event.data.get("session_id", ""))


def register_cart_handlers() -> None:
    """Drop a session's cart when it signs out"""
    event_bus.subscribe(EventType.SESSION_SIGNED_OUT.value, _discard_on_sign_out)


class CartService:
    """Cart service"""

    def __init__(self, db: Session, store: Optional[CartStore] = None,
                 reservation_service: Optional[ReservationService] = None):
        self.db = db
        self.store = store or cart_store
        self.room_service = RoomService(db)
        self.reservation_service = reservation_service or ReservationService(db)

    def get_cart(self, session_id: str) -> RoomSelection:
        return self.store.get(session_id)

    def add_room(self, caller: Caller, session_id: str, room_id: str) -> RoomSelection:
        """
        Raises:
            NotFoundError: unknown room
            UnavailableError: room not available; cart unchanged
        """
        room = self.room_service.get_room(caller, room_id)
        cart = self.store.get(session_id)
        cart.add_room(room)
        return cart

    def remove_room(self, session_id: str, index: int) -> RoomSelection:
        cart = self.store.get(session_id)
        cart.remove_room(index)
        return cart

    def clear(self, session_id: str) -> None:
        self.store.discard(session_id)

    def checkout(self, caller: Caller, session_id: str, data: CheckoutRequest) -> Reservation:
        """
        Create a reservation from the cart

        Rooms are re-read so current prices and availability apply. The cart
        is cleared only after the reservation is stored; any failure leaves
        it as it was.
        """
        cart = self.store.get(session_id)
        if cart.is_empty():
            raise ValidationError("Select at least one room", field="room_ids")
        request = ReservationCreate(room_ids=cart.room_ids, **data.model_dump())
        reservation = self.reservation_service.create_reservation(caller, request)
        self.store.discard(session_id)
        logger.info(f"Cart of session {session_id} checked out as reservation {reservation.id}")
        return reservation
