"""
ORM models
Rooms, reservations, identity users, profiles, role rows and auth sessions
"""
import uuid
from datetime import datetime
from enum import Enum
from sqlalchemy import (
    Column, Integer, String, DateTime, Date,
    ForeignKey, Text, Numeric, JSON
)
from sqlalchemy.orm import relationship
from hotelres.database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


# ============== Enums ==============

class RoomStatus(str, Enum):
    """Room status, toggled manually by administrators"""
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


class RoomType(str, Enum):
    """Known room types (the column accepts any string)"""
    SUITE = "suite"
    DOUBLE = "double"
    SINGLE = "single"


class ReservationStatus(str, Enum):
    """Reservation status"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class AppRole(str, Enum):
    """Authorization level"""
    CUSTOMER = "customer"
    ADMIN = "admin"


# ============== Identity ==============

class User(Base):
    """
    Identity record (credentials only)
    Profile data lives in Profile, authorization in UserRole
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    profile = relationship("Profile", back_populates="user", uselist=False,
                           cascade="all, delete-orphan")
    role_row = relationship("UserRole", back_populates="user", uselist=False,
                            cascade="all, delete-orphan")
    sessions = relationship("AuthSession", back_populates="user",
                            cascade="all, delete-orphan")


class AuthSession(Base):
    """Sign-in session; current while not revoked and its token not expired"""
    __tablename__ = "auth_sessions"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    expires_at = Column(DateTime, nullable=False)
    revoked_at = Column(DateTime)

    user = relationship("User", back_populates="sessions")

    @property
    def is_active(self) -> bool:
        return self.revoked_at is None and self.expires_at > datetime.utcnow()


class Profile(Base):
    """User profile; email is copied from the identity and never changed"""
    __tablename__ = "profiles"

    id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(30))
    avatar_url = Column(String(500))
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="profile")


class UserRole(Base):
    """One authoritative role per user"""
    __tablename__ = "user_roles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    role = Column(String(20), nullable=False, default=AppRole.CUSTOMER.value)  # customer | admin
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="role_row")


# ============== Catalog and bookings ==============

class Room(Base):
    """Bookable room"""
    __tablename__ = "rooms"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(100), nullable=False)
    type = Column(String(30), nullable=False)
    capacity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)        # nightly price
    description = Column(Text)
    status = Column(String(20), nullable=False, default=RoomStatus.AVAILABLE.value)
    image_url = Column(String(500))
    features = Column(JSON, default=list)                 # ordered list of strings
    created_by = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Reservation(Base):
    """
    Reservation of one or more rooms for a date range
    room_ids is a denormalized ordered list; the same id may repeat
    """
    __tablename__ = "reservations"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    room_ids = Column(JSON, nullable=False)
    check_in = Column(Date, nullable=False)
    check_out = Column(Date, nullable=False)
    guests = Column(Integer, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    status = Column(String(20), nullable=False, default=ReservationStatus.PENDING.value)
    guest_data = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    owner = relationship("User")

    @property
    def confirmation_number(self) -> str:
        return self.id[:8].upper()
