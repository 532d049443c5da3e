"""
Identity service
Sign-up, sign-in, sign-out and session lookup
"""
from datetime import datetime
from typing import Callable, Optional
import logging
from sqlalchemy.orm import Session
from hotelres.database import commit_or_rollback
from hotelres.exceptions import AuthError, ValidationError
from hotelres.models.events import EventType, SessionChangedData
from hotelres.models.ontology import AppRole, AuthSession, Profile, User, UserRole
from hotelres.models.schemas import SignUpRequest
from hotelres.security.auth import (
    create_access_token, decode_token, get_password_hash, token_expiry, verify_password
)
from hotelres.services.event_bus import event_bus, Event, make_event

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_NAME = "User"
MIN_PASSWORD_LENGTH = 6

SESSION_EVENTS = (EventType.SESSION_SIGNED_IN, EventType.SESSION_SIGNED_OUT)


class AuthService:
    """Identity service"""

    def __init__(self, db: Session, event_publisher: Optional[Callable[[Event], None]] = None):
        self.db = db
        self._publish_event = event_publisher or event_bus.publish

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def sign_up(self, data: SignUpRequest) -> User:
        """
        Create an account

        Also creates the profile and the default customer role row.
        """
        email = str(data.email).strip().lower()
        if len(data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters", field="password"
            )
        if self.get_user_by_email(email):
            raise AuthError("An account with this email already exists")

        user = User(email=email, password_hash=get_password_hash(data.password))
        self.db.add(user)
        self.db.flush()

        name = (data.name or "").strip() or DEFAULT_PROFILE_NAME
        self.db.add(Profile(id=user.id, name=name, email=email))
        self.db.add(UserRole(user_id=user.id, role=AppRole.CUSTOMER.value))

        commit_or_rollback(self.db, "create the account")
        self.db.refresh(user)
        logger.info(f"Account created for {email}")
        return user

    def sign_in(self, email: str, password: str) -> dict:
        """
        Authenticate and open a session

        Returns:
            dict with the session, the user and a bearer token
        """
        user = self.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise AuthError("Invalid email or password")

        session = AuthSession(user_id=user.id, expires_at=token_expiry())
        self.db.add(session)
        commit_or_rollback(self.db, "sign in")
        self.db.refresh(session)

        token = create_access_token(user.id, session.id, session.expires_at)
        logger.info(f"User {user.id} signed in (session {session.id})")
        self._publish_session_event(EventType.SESSION_SIGNED_IN, session)
        return {
            'access_token': token,
            'session': session,
            'user': user,
        }

    def sign_out(self, session: AuthSession) -> None:
        """Revoke a session; its token stops working immediately"""
        if session.revoked_at is not None:
            return
        session.revoked_at = datetime.utcnow()
        commit_or_rollback(self.db, "sign out")
        logger.info(f"User {session.user_id} signed out (session {session.id})")
        self._publish_session_event(EventType.SESSION_SIGNED_OUT, session)

    def get_current_session(self, token: str) -> Optional[AuthSession]:
        """Session behind token, or None when invalid, expired or signed out"""
        try:
            payload = decode_token(token)
        except AuthError:
            return None

        session = self.db.query(AuthSession).filter(AuthSession.id == payload["sid"]).first()
        if session is None or session.user_id != payload["sub"] or not session.is_active:
            return None
        return session

    def _publish_session_event(self, event_type: EventType, session: AuthSession) -> None:
        self._publish_event(make_event(
            event_type,
            SessionChangedData(session_id=session.id, user_id=session.user_id),
            source="auth_service",
        ))

    @staticmethod
    def on_session_change(callback: Callable[[Event], None]) -> Callable[[], None]:
        """
        Subscribe callback to sign-in and sign-out events

        Returns:
            a function that removes the subscription
        """
        for event_type in SESSION_EVENTS:
            event_bus.subscribe(event_type.value, callback)

        def unsubscribe() -> None:
            for event_type in SESSION_EVENTS:
                event_bus.unsubscribe(event_type.value, callback)

        return unsubscribe
