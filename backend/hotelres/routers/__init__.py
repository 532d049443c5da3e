# API Routers
from hotelres.routers import auth, rooms, cart, reservations, users, profile, dashboard

__all__ = ['auth', 'rooms', 'cart', 'reservations', 'users', 'profile', 'dashboard']
