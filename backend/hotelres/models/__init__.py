# Models module
from hotelres.models.ontology import (
    User, AuthSession, Profile, UserRole, Room, Reservation,
    RoomStatus, RoomType, ReservationStatus, AppRole,
)

__all__ = [
    'User', 'AuthSession', 'Profile', 'UserRole', 'Room', 'Reservation',
    'RoomStatus', 'RoomType', 'ReservationStatus', 'AppRole',
]
