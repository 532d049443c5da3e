# Business Services
from hotelres.services.auth_service import AuthService
from hotelres.services.role_service import RoleService
from hotelres.services.room_service import RoomService
from hotelres.services.reservation_service import ReservationService
from hotelres.services.cart_service import CartService, cart_store
from hotelres.services.profile_service import ProfileService
from hotelres.services.dashboard_service import DashboardService

__all__ = [
    'AuthService', 'RoleService', 'RoomService', 'ReservationService',
    'CartService', 'cart_store', 'ProfileService', 'DashboardService'
]
