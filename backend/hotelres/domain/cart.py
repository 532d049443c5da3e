"""
Room selection accumulated before checkout
"""
from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import List, Any, Dict
import logging

from hotelres.domain.pricing import nightly_rate, to_money
from hotelres.exceptions import UnavailableError
from hotelres.models.ontology import RoomStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectedRoom:
    """Snapshot of a room taken when it was added"""
    id: str
    name: str
    type: str
    capacity: int
    price: Decimal

    @classmethod
    def from_room(cls, room: Any) -> "SelectedRoom":
        return cls(
            id=room.id,
            name=room.name,
            type=room.type,
            capacity=room.capacity,
            price=to_money(room.price),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class RoomSelection:
    """
    Ordered room selection

    The same room may appear more than once (several units of it), so entries
    are removed by position rather than by id.
    """

    def __init__(self):
        self._rooms: List[SelectedRoom] = []

    def __len__(self) -> int:
        return len(self._rooms)

    def __iter__(self):
        return iter(self._rooms)

    @property
    def rooms(self) -> List[SelectedRoom]:
        return list(self._rooms)

    @property
    def room_ids(self) -> List[str]:
        return [room.id for room in self._rooms]

    def is_empty(self) -> bool:
        return not self._rooms

    def add_room(self, room: Any) -> SelectedRoom:
        """
        Append a room

        Raises:
            UnavailableError: room status is not available; the selection is unchanged
        """
        status = getattr(room.status, "value", room.status)
        if status != RoomStatus.AVAILABLE.value:
            raise UnavailableError(f"Room '{room.name}' is not available")
        selected = SelectedRoom.from_room(room)
        self._rooms.append(selected)
        logger.debug(f"Room {room.id} added to selection ({len(self._rooms)} total)")
        return selected

    def remove_room(self, index: int) -> None:
        """Remove the entry at index; out-of-range indexes are ignored"""
        if 0 <= index < len(self._rooms):
            del self._rooms[index]

    def clear(self) -> None:
        self._rooms.clear()

    def total_capacity(self) -> int:
        return sum(room.capacity for room in self._rooms)

    def nightly_rate(self) -> Decimal:
        return nightly_rate(self._rooms)
