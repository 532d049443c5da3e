"""
Reservation service
Creation (validation and pricing) and lifecycle transitions
"""
from typing import Callable, List, Optional
from datetime import date
import logging
from sqlalchemy.orm import Session
from hotelres.config import settings
from hotelres.database import commit_or_rollback
from hotelres.domain.cart import RoomSelection
from hotelres.domain.pricing import PriceQuote, calculate_total
from hotelres.domain.reservation import ReservationEntity
from hotelres.domain.stay import validate_guest_count, validate_stay_dates
from hotelres.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from hotelres.models.events import EventType, ReservationStatusChangedData
from hotelres.models.ontology import AppRole, Profile, Reservation, ReservationStatus, Room
from hotelres.models.schemas import QuoteRequest, ReservationCreate
from hotelres.security.policies import (
    Caller, Action, RESERVATIONS, authorize, is_allowed, require_role,
)
from hotelres.services.event_bus import event_bus, Event, make_event
from hotelres.services.room_service import RoomService

logger = logging.getLogger(__name__)

_STATUS_EVENTS = {
    ReservationStatus.PENDING.value: EventType.RESERVATION_CREATED,
    ReservationStatus.CONFIRMED.value: EventType.RESERVATION_CONFIRMED,
    ReservationStatus.CANCELLED.value: EventType.RESERVATION_CANCELLED,
    ReservationStatus.COMPLETED.value: EventType.RESERVATION_COMPLETED,
}


class ReservationService:
    """Reservation service"""

    def __init__(self, db: Session,
                 event_publisher: Optional[Callable[[Event], None]] = None,
                 today: Optional[Callable[[], date]] = None):
        self.db = db
        self.room_service = RoomService(db)
        self._publish_event = event_publisher or event_bus.publish
        # Injectable clock for the customer-cancel rule
        self._today = today or date.today

    # ============== Selection and pricing ==============

    def build_selection(self, caller: Caller, room_ids: List[str]) -> RoomSelection:
        """
        Resolve room ids into a selection

        Raises:
            ValidationError: no rooms
            NotFoundError: unknown room id
            UnavailableError: a room is not available
        """
        if not room_ids:
            raise ValidationError("Select at least one room", field="room_ids")
        selection = RoomSelection()
        for room in self.room_service.get_rooms_by_ids(caller, room_ids):
            selection.add_room(room)
        return selection

    def quote_selection(self, selection: RoomSelection, check_in: date, check_out: date,
                        guests: Optional[int] = None) -> PriceQuote:
        """
        Validate dates (and guests when given) and price the selection

        Raises:
            InvalidDateRangeError, CapacityExceededError, ValidationError
        """
        if selection.is_empty():
            raise ValidationError("Select at least one room", field="room_ids")
        nights = validate_stay_dates(check_in, check_out)
        max_guests = selection.total_capacity()
        if guests is not None:
            validate_guest_count(guests, max_guests)
        rate = selection.nightly_rate()
        return PriceQuote(
            nights=nights,
            nightly_rate=rate,
            total=calculate_total(nights, rate),
            room_count=len(selection),
            max_guests=max_guests,
        )

    def quote(self, caller: Caller, data: QuoteRequest) -> PriceQuote:
        """Price a stay without persisting anything"""
        selection = self.build_selection(caller, data.room_ids)
        return self.quote_selection(selection, data.check_in, data.check_out, data.guests)

    # ============== Queries ==============

    def get_reservations(self, caller: Caller,
                         status: Optional[ReservationStatus] = None) -> List[Reservation]:
        """Own reservations; every reservation for administrators. Newest first."""
        query = self.db.query(Reservation)
        if not caller.is_admin:
            query = query.filter(Reservation.user_id == caller.user_id)
        if status:
            query = query.filter(Reservation.status == ReservationStatus(status).value)
        reservations = query.order_by(Reservation.created_at.desc()).all()
        return [r for r in reservations if is_allowed(caller, Action.SELECT, RESERVATIONS, r)]

    def get_reservation(self, caller: Caller, reservation_id: str) -> Reservation:
        """
        Raises:
            NotFoundError: missing, or not visible to the caller
        """
        reservation = self.db.query(Reservation).filter(Reservation.id == reservation_id).first()
        if not reservation or not is_allowed(caller, Action.SELECT, RESERVATIONS, reservation):
            raise NotFoundError("Reservation not found")
        return reservation

    # ============== Creation ==============

    def create_reservation(self, caller: Caller, data: ReservationCreate,
                           selection: Optional[RoomSelection] = None) -> Reservation:
        """
        Create a pending reservation owned by the caller

        The total is computed here once and never recomputed.
        """
        if selection is None:
            selection = self.build_selection(caller, data.room_ids)
        quote = self.quote_selection(selection, data.check_in, data.check_out, data.guests)

        reservation = Reservation(
            user_id=caller.user_id,
            room_ids=selection.room_ids,
            check_in=data.check_in,
            check_out=data.check_out,
            guests=data.guests,
            total_price=quote.total,
            status=ReservationStatus.PENDING.value,
            guest_data=data.guest_data.model_dump(mode="json"),
        )
        authorize(caller, Action.INSERT, RESERVATIONS, reservation)

        self.db.add(reservation)
        commit_or_rollback(self.db, "create the reservation")
        self.db.refresh(reservation)

        logger.info(
            f"Reservation {reservation.id} created by {caller.user_id}: "
            f"{quote.room_count} rooms, {quote.nights} nights, total {quote.total}"
        )
        self._publish_status_event(reservation, None, caller)
        return reservation

    # ============== Lifecycle ==============

    def cancel_by_customer(self, caller: Caller, reservation_id: str) -> Reservation:
        """Owner cancels a pending reservation before check-in"""
        reservation = self.get_reservation(caller, reservation_id)
        if reservation.user_id != caller.user_id:
            raise PermissionDeniedError("Only the owner can cancel this reservation")
        return self._transition(
            caller, reservation,
            lambda entity: entity.cancel_by_owner(self._today()),
        )

    def confirm(self, caller: Caller, reservation_id: str) -> Reservation:
        return self._admin_transition(caller, reservation_id, ReservationEntity.confirm)

    def cancel_by_admin(self, caller: Caller, reservation_id: str) -> Reservation:
        return self._admin_transition(caller, reservation_id, ReservationEntity.cancel_by_admin)

    def complete(self, caller: Caller, reservation_id: str) -> Reservation:
        return self._admin_transition(caller, reservation_id, ReservationEntity.complete)

    def delete_reservation(self, caller: Caller, reservation_id: str) -> None:
        """Hard delete (administrators only)"""
        reservation = self.get_reservation(caller, reservation_id)
        authorize(caller, Action.DELETE, RESERVATIONS, reservation)
        self.db.delete(reservation)
        commit_or_rollback(self.db, "delete the reservation")
        logger.info(f"Reservation {reservation_id} deleted by {caller.user_id}")

    def _admin_transition(self, caller: Caller, reservation_id: str,
                          apply: Callable[[ReservationEntity], None]) -> Reservation:
        reservation = self.get_reservation(caller, reservation_id)
        require_role(caller, AppRole.ADMIN)
        return self._transition(caller, reservation, apply)

    def _transition(self, caller: Caller, reservation: Reservation,
                    apply: Callable[[ReservationEntity], None]) -> Reservation:
        authorize(caller, Action.UPDATE, RESERVATIONS, reservation)
        old_status = reservation.status
        apply(ReservationEntity(reservation))
        commit_or_rollback(self.db, "update the reservation")
        self.db.refresh(reservation)
        self._publish_status_event(reservation, old_status, caller)
        return reservation

    def _publish_status_event(self, reservation: Reservation, old_status: Optional[str],
                              caller: Caller) -> None:
        self._publish_event(make_event(
            _STATUS_EVENTS[reservation.status],
            ReservationStatusChangedData(
                reservation_id=reservation.id,
                user_id=reservation.user_id,
                old_status=old_status,
                new_status=reservation.status,
                changed_by=caller.user_id,
            ),
            source="reservation_service",
        ))

    # ============== Views ==============

    def get_reservation_detail(self, reservation: Reservation) -> dict:
        """Reservation with rooms, nights, confirmation number and owner"""
        entity = ReservationEntity(reservation)
        rooms = {
            room.id: room
            for room in self.db.query(Room).filter(Room.id.in_(set(reservation.room_ids or []))).all()
        }
        owner = self.db.query(Profile).filter(Profile.id == reservation.user_id).first()
        return {
            'id': reservation.id,
            'confirmation_number': entity.confirmation_number,
            'user_id': reservation.user_id,
            'room_ids': list(reservation.room_ids or []),
            'rooms': [
                {
                    'id': room.id,
                    'name': room.name,
                    'type': room.type,
                    'capacity': room.capacity,
                    'price': room.price,
                }
                for room in (rooms.get(room_id) for room_id in reservation.room_ids or [])
                if room is not None
            ],
            'check_in': reservation.check_in,
            'check_out': reservation.check_out,
            'check_in_time': settings.CHECK_IN_TIME,
            'check_out_time': settings.CHECK_OUT_TIME,
            'nights': entity.nights,
            'guests': reservation.guests,
            'total_price': reservation.total_price,
            'status': reservation.status,
            'guest_data': reservation.guest_data,
            'owner_name': owner.name if owner else "User",
            'owner_email': owner.email if owner else "",
            'created_at': reservation.created_at,
            'updated_at': reservation.updated_at,
        }