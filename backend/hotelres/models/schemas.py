"""
Pydantic schemas
Request/response validation for the API
"""
from datetime import datetime, date
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, EmailStr, ConfigDict, field_validator
from hotelres.models.ontology import RoomStatus, ReservationStatus, AppRole


# ============== Auth Schemas ==============

class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: Optional[str] = Field(None, max_length=100)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class SessionResponse(BaseModel):
    session_id: str
    user_id: str
    email: str
    role: AppRole
    created_at: datetime
    expires_at: datetime


class SignInResponse(SessionResponse):
    access_token: str
    token_type: str = "bearer"


# ============== Room Schemas ==============

class RoomBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: str = Field(..., min_length=1, max_length=30)
    capacity: int = Field(..., ge=1)
    price: Decimal = Field(..., ge=0)
    description: Optional[str] = None
    status: RoomStatus = RoomStatus.AVAILABLE
    image_url: Optional[str] = Field(None, max_length=500)
    features: List[str] = Field(default_factory=list)

    @field_validator('features')
    @classmethod
    def strip_features(cls, v: List[str]) -> List[str]:
        """Drop blank entries, keep order"""
        return [f.strip() for f in v if f and f.strip()]


class RoomCreate(RoomBase):
    pass


class RoomUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[str] = Field(None, min_length=1, max_length=30)
    capacity: Optional[int] = Field(None, ge=1)
    price: Optional[Decimal] = Field(None, ge=0)
    description: Optional[str] = None
    status: Optional[RoomStatus] = None
    image_url: Optional[str] = Field(None, max_length=500)
    features: Optional[List[str]] = None

    @field_validator('features')
    @classmethod
    def strip_features(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return [f.strip() for f in v if f and f.strip()]


class RoomResponse(BaseModel):
    id: str
    name: str
    type: str
    capacity: int
    price: Decimal
    description: Optional[str] = None
    status: RoomStatus
    image_url: Optional[str] = None
    features: List[str] = []
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ============== Cart Schemas ==============

class CartAddRoom(BaseModel):
    room_id: str


class SelectedRoomResponse(BaseModel):
    id: str
    name: str
    type: str
    capacity: int
    price: Decimal


class CartResponse(BaseModel):
    rooms: List[SelectedRoomResponse]
    total_capacity: int
    nightly_rate: Decimal


# ============== Reservation Schemas ==============

class GuestData(BaseModel):
    """Contact details of the person staying"""
    first_name: str = Field(..., min_length=2, max_length=100)
    last_name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=10, max_length=30)
    document_id: str = Field(..., min_length=5, max_length=50)


class StayRequest(BaseModel):
    check_in: date
    check_out: date
    guests: int = Field(default=1, ge=1)


class QuoteRequest(StayRequest):
    room_ids: List[str] = Field(..., min_length=1)


class QuoteResponse(BaseModel):
    nights: int
    nightly_rate: Decimal
    total: Decimal
    room_count: int
    max_guests: int


class CheckoutRequest(StayRequest):
    """Create a reservation from the caller's cart"""
    guest_data: GuestData


class ReservationCreate(CheckoutRequest):
    room_ids: List[str] = Field(..., min_length=1)


class ReservationResponse(BaseModel):
    id: str
    confirmation_number: str
    user_id: str
    room_ids: List[str]
    rooms: List[SelectedRoomResponse] = []
    check_in: date
    check_out: date
    check_in_time: str
    check_out_time: str
    nights: int
    guests: int
    total_price: Decimal
    status: ReservationStatus
    guest_data: GuestData
    owner_name: Optional[str] = None
    owner_email: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# ============== User/Role Schemas ==============

class RoleUpdate(BaseModel):
    role: AppRole


class RoleResponse(BaseModel):
    user_id: str
    role: AppRole


class UserWithRoleResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    role: AppRole
    created_at: datetime


# ============== Profile Schemas ==============

class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    phone: Optional[str] = Field(None, min_length=10, max_length=30)


class ProfileResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ============== Dashboard Schemas ==============

class AdminStats(BaseModel):
    total_rooms: int
    total_reservations: int
    total_users: int
    pending_reservations: int


class CustomerSummary(BaseModel):
    total_reservations: int
    by_status: dict
    upcoming: int
