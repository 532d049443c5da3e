"""
Authentication and authorization dependencies

Bearer JWTs carry the user id (sub) and the auth session id (sid). A token is
only accepted while its session has not been signed out.
"""
import bcrypt
import logging
from datetime import datetime, timedelta
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session
from hotelres.config import settings
from hotelres.database import get_db
from hotelres.exceptions import AuthError
from hotelres.models.ontology import AuthSession, User
from hotelres.security.policies import Caller

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_password_hash(password: str) -> str:
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))


def token_expiry() -> datetime:
    return datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)


def create_access_token(user_id: str, session_id: str, expires_at: Optional[datetime] = None) -> str:
    """Create a JWT for a session"""
    to_encode = {
        "sub": user_id,
        "sid": session_id,
        "exp": expires_at or token_expiry(),
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict:
    """
    Raises:
        AuthError: signature invalid, token expired or claims missing
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        raise AuthError("Invalid authentication credentials") from e
    if not payload.get("sub") or not payload.get("sid"):
        raise AuthError("Invalid authentication credentials")
    return payload


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_session(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> AuthSession:
    """Resolve the bearer token to an active auth session"""
    from hotelres.services.auth_service import AuthService

    session = AuthService(db).get_current_session(credentials.credentials)
    if session is None:
        raise _unauthorized("Session expired or signed out")
    return session


async def get_current_user(
    session: AuthSession = Depends(get_current_session),
) -> User:
    """Signed-in user"""
    if session.user is None:
        raise _unauthorized("User no longer exists")
    return session.user


async def get_caller(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Caller:
    """Signed-in user with resolved role (customer when the lookup fails)"""
    from hotelres.services.role_service import RoleService

    return Caller(user_id=current_user.id, role=RoleService(db).get_role(current_user.id))


async def require_admin(caller: Caller = Depends(get_caller)) -> Caller:
    """Reject non-admin callers with 403"""
    if not caller.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator role required"
        )
    return caller
