"""
Own profile routes
"""
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from hotelres.database import get_db
from hotelres.exceptions import HotelError
from hotelres.models.schemas import ProfileUpdate, ProfileResponse
from hotelres.security.auth import get_caller
from hotelres.security.policies import Caller
from hotelres.services.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=ProfileResponse)
def get_profile(
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller)
):
    """Own profile"""
    try:
        return ProfileService(db).get_profile(caller)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("", response_model=ProfileResponse)
def update_profile(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller)
):
    """Update name and phone"""
    try:
        return ProfileService(db).update_profile(caller, data)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/avatar", response_model=ProfileResponse)
async def upload_avatar(
    request: Request,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller)
):
    """Replace the avatar; the request body is the image itself"""
    content = await request.body()
    try:
        return ProfileService(db).upload_avatar(
            caller, content, request.headers.get("content-type")
        )
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/avatar", response_model=ProfileResponse)
def delete_avatar(
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller)
):
    """Remove the avatar"""
    try:
        return ProfileService(db).delete_avatar(caller)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
