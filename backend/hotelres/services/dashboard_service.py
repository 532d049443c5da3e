"""
Dashboard service
Headline counts for the admin panel and the customer dashboard
"""
from datetime import date
from typing import Callable, Dict, Optional
import logging
from sqlalchemy import func
from sqlalchemy.orm import Session
from hotelres.models.ontology import AppRole, Profile, Reservation, ReservationStatus, Room
from hotelres.security.policies import (
    Caller, Action, PROFILES, RESERVATIONS, ROOMS, authorize, require_role,
)

logger = logging.getLogger(__name__)


class DashboardService:
    """Dashboard service"""

    def __init__(self, db: Session, today: Optional[Callable[[], date]] = None):
        self.db = db
        self._today = today or date.today

    def admin_stats(self, caller: Caller) -> Dict[str, int]:
        """Rooms, reservations, users and pending reservations"""
        require_role(caller, AppRole.ADMIN)
        for table in (ROOMS, RESERVATIONS, PROFILES):
            authorize(caller, Action.SELECT, table)
        return {
            'total_rooms': self.db.query(func.count(Room.id)).scalar() or 0,
            'total_reservations': self.db.query(func.count(Reservation.id)).scalar() or 0,
            'total_users': self.db.query(func.count(Profile.id)).scalar() or 0,
            'pending_reservations': self.db.query(func.count(Reservation.id)).filter(
                Reservation.status == ReservationStatus.PENDING.value
            ).scalar() or 0,
        }

    def customer_summary(self, caller: Caller) -> dict:
        """
        The caller's own reservations counted by status

        upcoming counts pending or confirmed stays whose check-in is today or later.
        """
        authorize(caller, Action.SELECT, RESERVATIONS, {"user_id": caller.user_id})
        rows = (
            self.db.query(Reservation.status, func.count(Reservation.id))
            .filter(Reservation.user_id == caller.user_id)
            .group_by(Reservation.status)
            .all()
        )
        by_status = {status.value: 0 for status in ReservationStatus}
        for status, count in rows:
            by_status[status] = count

        upcoming = self.db.query(func.count(Reservation.id)).filter(
            Reservation.user_id == caller.user_id,
            Reservation.status.in_([
                ReservationStatus.PENDING.value, ReservationStatus.CONFIRMED.value
            ]),
            Reservation.check_in >= self._today(),
        ).scalar() or 0

        return {
            'total_reservations': sum(by_status.values()),
            'by_status': by_status,
            'upcoming': upcoming,
        }
