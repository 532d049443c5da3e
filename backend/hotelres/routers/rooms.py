"""
Room catalog routes
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from hotelres.database import get_db
from hotelres.exceptions import HotelError
from hotelres.models.ontology import RoomStatus
from hotelres.models.schemas import RoomCreate, RoomUpdate, RoomResponse
from hotelres.security.auth import get_caller, require_admin
from hotelres.security.policies import Caller
from hotelres.services.room_service import RoomOrder, RoomService

router = APIRouter(prefix="/rooms", tags=["Rooms"])


@router.get("", response_model=List[RoomResponse])
def list_rooms(
    type: Optional[str] = None,
    room_status: Optional[RoomStatus] = Query(None, alias="status"),
    sort: Optional[RoomOrder] = None,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller)
):
    """List rooms (sort=price|newest, default depends on the role)"""
    try:
        return RoomService(db).get_rooms(caller, type, room_status, sort)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/types", response_model=List[str])
def list_room_types(
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller)
):
    """Distinct room types"""
    try:
        return RoomService(db).get_room_types(caller)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(
    room_id: str,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller)
):
    """Room detail"""
    try:
        return RoomService(db).get_room(caller, room_id)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(
    data: RoomCreate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin)
):
    """Create a room"""
    try:
        return RoomService(db).create_room(caller, data)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{room_id}", response_model=RoomResponse)
def update_room(
    room_id: str,
    data: RoomUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin)
):
    """Update a room"""
    try:
        return RoomService(db).update_room(caller, room_id, data)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{room_id}")
def delete_room(
    room_id: str,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin)
):
    """Delete a room"""
    try:
        RoomService(db).delete_room(caller, room_id)
        return {"message": "Room deleted"}
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
