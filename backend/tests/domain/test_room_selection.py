"""
Room selection tests
"""
import pytest
from decimal import Decimal
from types import SimpleNamespace

from hotelres.domain.cart import RoomSelection
from hotelres.exceptions import UnavailableError


def _room(room_id, price="100", capacity=2, status="available"):
    return SimpleNamespace(id=room_id, name=f"Room {room_id}", type="double",
                           capacity=capacity, price=Decimal(price), status=status)


class TestRoomSelection:
    """RoomSelection"""

    def test_starts_empty(self):
        selection = RoomSelection()
        assert selection.is_empty()
        assert selection.total_capacity() == 0

    def test_add_rooms(self):
        selection = RoomSelection()
        selection.add_room(_room("a", "100", 2))
        selection.add_room(_room("b", "150", 3))
        assert selection.room_ids == ["a", "b"]
        assert selection.total_capacity() == 5
        assert selection.nightly_rate() == Decimal("250.00")

    def test_same_room_twice(self):
        selection = RoomSelection()
        selection.add_room(_room("a"))
        selection.add_room(_room("a"))
        assert selection.room_ids == ["a", "a"]
        assert selection.total_capacity() == 4

    @pytest.mark.parametrize("status", ["occupied", "maintenance"])
    def test_unavailable_room_rejected(self, status):
        selection = RoomSelection()
        selection.add_room(_room("a"))
        with pytest.raises(UnavailableError):
            selection.add_room(_room("b", status=status))
        assert selection.room_ids == ["a"]

    def test_remove_by_index(self):
        selection = RoomSelection()
        for room_id in ("a", "b", "a"):
            selection.add_room(_room(room_id))
        selection.remove_room(0)
        assert selection.room_ids == ["b", "a"]

    @pytest.mark.parametrize("index", [2, 10, -1])
    def test_remove_out_of_range_is_noop(self, index):
        selection = RoomSelection()
        selection.add_room(_room("a"))
        selection.add_room(_room("b"))
        selection.remove_room(index)
        assert selection.room_ids == ["a", "b"]

    def test_snapshot_keeps_added_price(self):
        room = _room("a", "100")
        selection = RoomSelection()
        selection.add_room(room)
        room.price = Decimal("500")
        assert selection.nightly_rate() == Decimal("100.00")

    def test_clear(self):
        selection = RoomSelection()
        selection.add_room(_room("a"))
        selection.clear()
        assert len(selection) == 0
