"""
User and role administration routes
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from hotelres.database import get_db
from hotelres.exceptions import HotelError
from hotelres.models.schemas import RoleUpdate, RoleResponse, UserWithRoleResponse
from hotelres.security.auth import get_caller, require_admin
from hotelres.security.policies import Caller
from hotelres.services.role_service import RoleService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[UserWithRoleResponse])
def list_users(
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin)
):
    """Every user with their role"""
    try:
        return RoleService(db).list_users(caller)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{user_id}/role", response_model=RoleResponse)
def get_user_role(
    user_id: str,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_caller)
):
    """Role of a user (customer when none is stored)"""
    return {'user_id': user_id, 'role': RoleService(db).get_role(user_id)}


@router.put("/{user_id}/role", response_model=RoleResponse)
def set_user_role(
    user_id: str,
    data: RoleUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_admin)
):
    """Change a user's role"""
    try:
        row = RoleService(db).set_role(caller, user_id, data.role)
        return {'user_id': row.user_id, 'role': row.role}
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
