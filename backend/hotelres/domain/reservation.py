"""
hotelres/domain/reservation.py

Reservation lifecycle

    pending --confirm--> confirmed --complete--> completed
    pending --cancel---> cancelled

cancelled and completed are terminal. confirmed cannot be cancelled.
"""
from typing import Optional, List, Dict, Any, TYPE_CHECKING
from datetime import date, datetime
from decimal import Decimal
import logging

from hotelres.domain.stay import count_nights, has_started
from hotelres.engine.state_machine import StateMachine, StateMachineConfig, StateTransition
from hotelres.exceptions import (
    AlreadyStartedError, InvalidTransitionError, PermissionDeniedError
)
from hotelres.models.ontology import ReservationStatus

if TYPE_CHECKING:
    from hotelres.models.ontology import Reservation

logger = logging.getLogger(__name__)


# ============== Triggers and actors ==============

class LifecycleEvent:
    """Triggers understood by the reservation state machine"""
    CONFIRM = "confirm"
    CANCEL = "cancel"
    COMPLETE = "complete"


class Actor:
    """Who is driving a transition"""
    OWNER = "owner"
    ADMIN = "admin"


def _actor_in(*actors: str):
    def condition(context: Dict[str, Any]) -> bool:
        return context.get("actor") in actors
    return condition


# ============== State machine configuration ==============

RESERVATION_TRANSITIONS: List[StateTransition] = [
    StateTransition(
        from_state=ReservationStatus.PENDING.value,
        to_state=ReservationStatus.CONFIRMED.value,
        trigger=LifecycleEvent.CONFIRM,
        condition=_actor_in(Actor.ADMIN),
    ),
    StateTransition(
        from_state=ReservationStatus.PENDING.value,
        to_state=ReservationStatus.CANCELLED.value,
        trigger=LifecycleEvent.CANCEL,
        condition=_actor_in(Actor.ADMIN, Actor.OWNER),
    ),
    StateTransition(
        from_state=ReservationStatus.CONFIRMED.value,
        to_state=ReservationStatus.COMPLETED.value,
        trigger=LifecycleEvent.COMPLETE,
        condition=_actor_in(Actor.ADMIN),
    ),
]

TERMINAL_STATUSES = frozenset({
    ReservationStatus.CANCELLED.value,
    ReservationStatus.COMPLETED.value,
})


def create_reservation_state_machine(current_status: Optional[str] = None) -> StateMachine:
    """Build a machine positioned at current_status (pending when omitted)"""
    return StateMachine(
        config=StateMachineConfig(
            name="Reservation",
            states=[s.value for s in ReservationStatus],
            transitions=RESERVATION_TRANSITIONS,
            initial_state=ReservationStatus.PENDING.value,
        ),
        current_state=current_status,
    )


# ============== Reservation entity ==============

class ReservationEntity:
    """
    Wraps a Reservation ORM row and applies lifecycle transitions to it.

    The row's status is only written after the machine accepts the trigger,
    so a rejected transition leaves the row untouched.
    """

    def __init__(self, orm_model: "Reservation"):
        self._orm_model = orm_model
        self._state_machine = create_reservation_state_machine(self.status)

    @property
    def model(self) -> "Reservation":
        return self._orm_model

    @property
    def id(self) -> str:
        return self._orm_model.id

    @property
    def user_id(self) -> str:
        return self._orm_model.user_id

    @property
    def status(self) -> str:
        status = self._orm_model.status or ReservationStatus.PENDING.value
        return getattr(status, "value", status)

    @property
    def check_in(self) -> date:
        return self._orm_model.check_in

    @property
    def check_out(self) -> date:
        return self._orm_model.check_out

    @property
    def total_price(self) -> Decimal:
        return self._orm_model.total_price

    @property
    def nights(self) -> int:
        return count_nights(self.check_in, self.check_out)

    @property
    def confirmation_number(self) -> str:
        return self.id[:8].upper()

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def allowed_actions(self, actor: str) -> List[str]:
        """Triggers the actor may fire from the current status"""
        return [
            trigger for trigger in self._state_machine.available_triggers()
            if self._state_machine.can_fire(trigger, {"actor": actor})
        ]

    # ============== Transitions ==============

    def confirm(self) -> None:
        """Administrator confirms a pending reservation"""
        self._apply(LifecycleEvent.CONFIRM, Actor.ADMIN)

    def complete(self) -> None:
        """Administrator closes a confirmed reservation"""
        self._apply(LifecycleEvent.COMPLETE, Actor.ADMIN)

    def cancel_by_admin(self) -> None:
        """Administrator cancels a pending reservation"""
        self._apply(LifecycleEvent.CANCEL, Actor.ADMIN)

    def cancel_by_owner(self, today: date) -> None:
        """
        Owner cancels a pending reservation whose stay has not started

        Raises:
            AlreadyStartedError: check-in is today or earlier, whatever the status
            InvalidTransitionError: the reservation is not pending
        """
        if has_started(self.check_in, today):
            raise AlreadyStartedError(
                "A reservation that has already started cannot be cancelled"
            )
        self._apply(LifecycleEvent.CANCEL, Actor.OWNER)

    def _apply(self, trigger: str, actor: str) -> str:
        machine = self._state_machine
        if machine.is_terminal():
            raise InvalidTransitionError(
                f"Reservation {self.confirmation_number} is already {self.status}"
            )
        transition = machine.get_transition(trigger)
        if transition is None:
            raise InvalidTransitionError(
                f"Cannot {trigger} a reservation that is {self.status}"
            )
        if not transition.is_allowed({"actor": actor}):
            raise PermissionDeniedError(f"{actor} may not {trigger} this reservation")

        old_status = self.status
        new_status = machine.fire(trigger, {"actor": actor})
        self._orm_model.status = new_status
        self._orm_model.updated_at = datetime.utcnow()
        logger.info(
            f"Reservation {self.id}: {old_status} -> {new_status} ({trigger} by {actor})"
        )
        return new_status
