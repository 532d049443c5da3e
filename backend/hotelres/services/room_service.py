"""
Room service
Room catalog reads for every signed-in user, writes for administrators
"""
from enum import Enum
from typing import List, Optional
import logging
from sqlalchemy.orm import Session
from hotelres.database import commit_or_rollback
from hotelres.exceptions import NotFoundError, ValidationError
from hotelres.models.ontology import Room, RoomStatus
from hotelres.models.schemas import RoomCreate, RoomUpdate
from hotelres.security.policies import Caller, Action, ROOMS, authorize

logger = logging.getLogger(__name__)


class RoomOrder(str, Enum):
    """Catalog ordering"""
    PRICE = "price"      # cheapest first, the customer browse view
    NEWEST = "newest"    # most recently added first, the admin table


class RoomService:
    """Room service"""

    def __init__(self, db: Session):
        self.db = db

    def get_rooms(self, caller: Caller, room_type: Optional[str] = None,
                  status: Optional[RoomStatus] = None,
                  order: Optional[RoomOrder] = None) -> List[Room]:
        """
        List rooms, optionally filtered by type and status

        Without an explicit order customers see the cheapest rooms first and
        administrators the newest.
        """
        authorize(caller, Action.SELECT, ROOMS)
        query = self.db.query(Room)
        if room_type:
            query = query.filter(Room.type == room_type)
        if status:
            query = query.filter(Room.status == RoomStatus(status).value)
        if order is None:
            order = RoomOrder.NEWEST if caller.is_admin else RoomOrder.PRICE
        try:
            order = RoomOrder(order)
        except ValueError:
            raise ValidationError(f"Unknown room order: {order}")
        if order == RoomOrder.PRICE:
            return query.order_by(Room.price.asc(), Room.name.asc()).all()
        return query.order_by(Room.created_at.desc()).all()

    def get_room(self, caller: Caller, room_id: str) -> Room:
        authorize(caller, Action.SELECT, ROOMS)
        room = self.db.query(Room).filter(Room.id == room_id).first()
        if not room:
            raise NotFoundError("Room not found")
        return room

    def get_rooms_by_ids(self, caller: Caller, room_ids: List[str]) -> List[Room]:
        """
        Rooms for room_ids in the same order, repeating duplicates

        Raises:
            NotFoundError: any id does not exist
        """
        authorize(caller, Action.SELECT, ROOMS)
        found = {
            room.id: room
            for room in self.db.query(Room).filter(Room.id.in_(set(room_ids))).all()
        }
        missing = [room_id for room_id in room_ids if room_id not in found]
        if missing:
            raise NotFoundError(f"Room not found: {', '.join(sorted(set(missing)))}")
        return [found[room_id] for room_id in room_ids]

    def get_room_types(self, caller: Caller) -> List[str]:
        """Distinct room types in the catalog"""
        authorize(caller, Action.SELECT, ROOMS)
        return sorted(t for (t,) in self.db.query(Room.type).distinct().all())

    def create_room(self, caller: Caller, data: RoomCreate) -> Room:
        authorize(caller, Action.INSERT, ROOMS)
        values = data.model_dump()
        values['status'] = RoomStatus(values['status']).value
        room = Room(**values, created_by=caller.user_id)
        self.db.add(room)
        commit_or_rollback(self.db, "create the room")
        self.db.refresh(room)
        logger.info(f"Room {room.id} ({room.name}) created by {caller.user_id}")
        return room

    def update_room(self, caller: Caller, room_id: str, data: RoomUpdate) -> Room:
        room = self.get_room(caller, room_id)
        authorize(caller, Action.UPDATE, ROOMS, room)

        update_data = data.model_dump(exclude_unset=True)
        if update_data.get('status') is not None:
            update_data['status'] = RoomStatus(update_data['status']).value
        for key, value in update_data.items():
            if value is None and key in ('name', 'type', 'capacity', 'price', 'status', 'features'):
                continue
            setattr(room, key, value)

        commit_or_rollback(self.db, "update the room")
        self.db.refresh(room)
        logger.info(f"Room {room.id} updated by {caller.user_id}: {sorted(update_data)}")
        return room

    def delete_room(self, caller: Caller, room_id: str) -> None:
        room = self.get_room(caller, room_id)
        authorize(caller, Action.DELETE, ROOMS, room)
        self.db.delete(room)
        commit_or_rollback(self.db, "delete the room")
        logger.info(f"Room {room_id} deleted by {caller.user_id}")
