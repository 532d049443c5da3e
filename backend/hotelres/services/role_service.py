"""
Role service
Resolves and changes user roles
"""
from typing import List, Optional, Callable
import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from hotelres.database import commit_or_rollback
from hotelres.exceptions import NotFoundError
from hotelres.models.events import EventType, RoleChangedData
from hotelres.models.ontology import AppRole, Profile, User, UserRole
from hotelres.security.policies import Caller, Action, PROFILES, USER_ROLES, authorize, require_role
from hotelres.services.event_bus import event_bus, Event, make_event

logger = logging.getLogger(__name__)


class RoleService:
    """Role service"""

    def __init__(self, db: Session, event_publisher: Optional[Callable[[Event], None]] = None):
        self.db = db
        self._publish_event = event_publisher or event_bus.publish

    def get_role(self, user_id: str) -> AppRole:
        """
        Role of user_id

        Falls back to customer when the row is missing or the lookup fails:
        the user keeps access but never gains admin rights.
        """
        try:
            row = self.db.query(UserRole).filter(UserRole.user_id == user_id).first()
        except SQLAlchemyError as e:
            logger.warning(f"Role lookup failed for {user_id}, defaulting to customer: {e}")
            return AppRole.CUSTOMER
        if row is None or row.role is None:
            return AppRole.CUSTOMER
        try:
            return AppRole(row.role)
        except ValueError:
            logger.warning(f"Unknown role {row.role!r} stored for {user_id}, defaulting to customer")
            return AppRole.CUSTOMER

    def set_role(self, caller: Caller, user_id: str, role: AppRole) -> UserRole:
        """Replace the role of user_id (administrators only)"""
        authorize(caller, Action.UPDATE, USER_ROLES)

        if self.db.query(User).filter(User.id == user_id).first() is None:
            raise NotFoundError("User not found")

        row = self.db.query(UserRole).filter(UserRole.user_id == user_id).first()
        old_role = row.role if row else None
        if row is None:
            row = UserRole(user_id=user_id, role=role.value)
            self.db.add(row)
        else:
            row.role = role.value

        commit_or_rollback(self.db, "update the role")
        self.db.refresh(row)
        logger.info(f"Role of {user_id} changed {old_role} -> {role.value} by {caller.user_id}")

        self._publish_event(make_event(
            EventType.ROLE_CHANGED,
            RoleChangedData(
                user_id=user_id,
                old_role=old_role,
                new_role=role.value,
                changed_by=caller.user_id,
            ),
            source="role_service",
        ))
        return row

    def list_users(self, caller: Caller) -> List[dict]:
        """Every profile with its role, newest first (administrators only)"""
        require_role(caller, AppRole.ADMIN)
        authorize(caller, Action.SELECT, PROFILES)
        authorize(caller, Action.SELECT, USER_ROLES)

        profiles = self.db.query(Profile).order_by(Profile.created_at.desc()).all()
        return [
            {
                'id': p.id,
                'name': p.name,
                'email': p.email,
                'phone': p.phone,
                'avatar_url': p.avatar_url,
                'role': self.get_role(p.id),
                'created_at': p.created_at,
            }
            for p in profiles
        ]
