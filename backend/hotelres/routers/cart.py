"""
Cart routes
The cart belongs to the current auth session
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from hotelres.database import get_db
from hotelres.exceptions import HotelError
from hotelres.domain.cart import RoomSelection
from hotelres.models.ontology import AuthSession
from hotelres.models.schemas import (
    CartAddRoom, CartResponse, CheckoutRequest, ReservationResponse
)
from hotelres.security.auth import get_caller, get_current_session
from hotelres.security.policies import Caller
from hotelres.services.cart_service import CartService
from hotelres.services.reservation_service import ReservationService

router = APIRouter(prefix="/cart", tags=["Cart"])


def _cart_response(cart: RoomSelection) -> dict:
    return {
        'rooms': [room.to_dict() for room in cart],
        'total_capacity': cart.total_capacity(),
        'nightly_rate': cart.nightly_rate(),
    }


@router.get("", response_model=CartResponse)
def get_cart(
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db)
):
    """Current selection"""
    return _cart_response(CartService(db).get_cart(session.id))


@router.post("/rooms", response_model=CartResponse)
def add_room(
    data: CartAddRoom,
    session: AuthSession = Depends(get_current_session),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db)
):
    """Add a room; unavailable rooms are rejected and the cart is left unchanged"""
    try:
        return _cart_response(CartService(db).add_room(caller, session.id, data.room_id))
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/rooms/{index}", response_model=CartResponse)
def remove_room(
    index: int,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db)
):
    """Remove the entry at index; out-of-range indexes change nothing"""
    return _cart_response(CartService(db).remove_room(session.id, index))


@router.delete("", response_model=CartResponse)
def clear_cart(
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db)
):
    """Empty the cart"""
    service = CartService(db)
    service.clear(session.id)
    return _cart_response(service.get_cart(session.id))


@router.post("/checkout", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
def checkout(
    data: CheckoutRequest,
    session: AuthSession = Depends(get_current_session),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db)
):
    """Turn the cart into a pending reservation"""
    reservation_service = ReservationService(db)
    service = CartService(db, reservation_service=reservation_service)
    try:
        reservation = service.checkout(caller, session.id, data)
        return reservation_service.get_reservation_detail(reservation)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
