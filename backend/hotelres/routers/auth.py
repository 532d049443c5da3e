"""
Authentication routes
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from hotelres.database import get_db
from hotelres.exceptions import AuthError, HotelError
from hotelres.models.ontology import AuthSession, User
from hotelres.models.schemas import (
    SignUpRequest, SignInRequest, SignInResponse, SessionResponse, ProfileResponse
)
from hotelres.security.auth import get_current_session, get_current_user
from hotelres.services.auth_service import AuthService
from hotelres.services.role_service import RoleService

router = APIRouter(prefix="/auth", tags=["Auth"])


def _session_response(db: Session, session: AuthSession, user: User) -> dict:
    return {
        'session_id': session.id,
        'user_id': user.id,
        'email': user.email,
        'role': RoleService(db).get_role(user.id),
        'created_at': session.created_at,
        'expires_at': session.expires_at,
    }


@router.post("/sign-up", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
def sign_up(data: SignUpRequest, db: Session = Depends(get_db)):
    """Create an account with the customer role"""
    service = AuthService(db)
    try:
        user = service.sign_up(data)
        return user.profile
    except AuthError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/sign-in", response_model=SignInResponse)
def sign_in(data: SignInRequest, db: Session = Depends(get_db)):
    """Sign in and receive a bearer token"""
    service = AuthService(db)
    try:
        result = service.sign_in(str(data.email), data.password)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return {
        **_session_response(db, result['session'], result['user']),
        'access_token': result['access_token'],
        'token_type': "bearer",
    }


@router.post("/sign-out")
def sign_out(
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db)
):
    """Revoke the current session"""
    try:
        AuthService(db).sign_out(session)
    except HotelError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return {"message": "Signed out"}


@router.get("/session", response_model=SessionResponse)
def get_session(
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db)
):
    """Current session"""
    return _session_response(db, session, session.user)


@router.get("/me")
def get_current_user_info(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Current user with profile and role"""
    profile = current_user.profile
    return {
        'id': current_user.id,
        'email': current_user.email,
        'name': profile.name if profile else None,
        'phone': profile.phone if profile else None,
        'avatar_url': profile.avatar_url if profile else None,
        'role': RoleService(db).get_role(current_user.id).value,
    }
