"""
Reservation routes
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from hotelres.database import get_db
from hotelres.exceptions import HotelError
from hotelres.models.ontology import ReservationStatus
from hotelres.models.schemas import (
    QuoteRequest, QuoteResponse, ReservationCreate, ReservationResponse
)
from hotelres.security.auth import get_caller, require_admin
from hotelres.security.policies import Caller
from hotelres.services.reservation_service import ReservationService

router = APIRouter(prefix="/reservations", tags=["Reservations"])


@router.post("/quote", response_model=QuoteResponse)
def quote(
    data: QuoteRequest,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller)
):
    """Price a stay without booking it"""
    try:
        return ReservationService(db).quote(caller, data).to_dict()
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
def create_reservation(
    data: ReservationCreate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller)
):
    """Book rooms directly, without the cart"""
    service = ReservationService(db)
    try:
        reservation = service.create_reservation(caller, data)
        return service.get_reservation_detail(reservation)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=List[ReservationResponse])
def list_reservations(
    reservation_status: Optional[ReservationStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller)
):
    """Own reservations; every reservation for administrators"""
    service = ReservationService(db)
    try:
        reservations = service.get_reservations(caller, reservation_status)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return [service.get_reservation_detail(r) for r in reservations]


@router.get("/{reservation_id}", response_model=ReservationResponse)
def get_reservation(
    reservation_id: str,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller)
):
    """Reservation detail"""
    service = ReservationService(db)
    try:
        return service.get_reservation_detail(service.get_reservation(caller, reservation_id))
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/{reservation_id}/cancel", response_model=ReservationResponse)
def cancel_reservation(
    reservation_id: str,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller)
):
    """Owner cancels a pending reservation before check-in"""
    service = ReservationService(db)
    try:
        return service.get_reservation_detail(service.cancel_by_customer(caller, reservation_id))
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/{reservation_id}/confirm", response_model=ReservationResponse)
def confirm_reservation(
    reservation_id: str,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin)
):
    """Confirm a pending reservation"""
    service = ReservationService(db)
    try:
        return service.get_reservation_detail(service.confirm(caller, reservation_id))
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/{reservation_id}/admin-cancel", response_model=ReservationResponse)
def admin_cancel_reservation(
    reservation_id: str,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin)
):
    """Cancel a pending reservation as administrator"""
    service = ReservationService(db)
    try:
        return service.get_reservation_detail(service.cancel_by_admin(caller, reservation_id))
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/{reservation_id}/complete", response_model=ReservationResponse)
def complete_reservation(
    reservation_id: str,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin)
):
    """Mark a confirmed reservation as completed"""
    service = ReservationService(db)
    try:
        return service.get_reservation_detail(service.complete(caller, reservation_id))
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{reservation_id}")
def delete_reservation(
    reservation_id: str,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin)
):
    """Delete a reservation"""
    try:
        ReservationService(db).delete_reservation(caller, reservation_id)
        return {"message": "Reservation deleted"}
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
