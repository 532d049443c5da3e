"""
Domain events
"""
from enum import Enum
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional, Dict, Any


class EventType(str, Enum):
    """Event types"""
    # Reservations
    RESERVATION_CREATED = "reservation.created"
    RESERVATION_CONFIRMED = "reservation.confirmed"
    RESERVATION_CANCELLED = "reservation.cancelled"
    RESERVATION_COMPLETED = "reservation.completed"

    # Sessions
    SESSION_SIGNED_IN = "session.signed_in"
    SESSION_SIGNED_OUT = "session.signed_out"

    # Roles
    ROLE_CHANGED = "role.changed"


@dataclass
class BaseEventData:
    """Base payload"""
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        for key, value in result.items():
            if isinstance(value, datetime):
                result[key] = value.isoformat()
        return result


@dataclass
class ReservationStatusChangedData(BaseEventData):
    """Reservation created or moved to a new status"""
    reservation_id: str = ""
    user_id: str = ""
    old_status: Optional[str] = None
    new_status: str = ""
    changed_by: Optional[str] = None


@dataclass
class SessionChangedData(BaseEventData):
    """User signed in or out"""
    session_id: str = ""
    user_id: str = ""


@dataclass
class RoleChangedData(BaseEventData):
    """Administrator changed a user's role"""
    user_id: str = ""
    old_role: Optional[str] = None
    new_role: str = ""
    changed_by: Optional[str] = None
