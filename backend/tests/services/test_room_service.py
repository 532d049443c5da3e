"""
Tests for hotelres/services/room_service.py
"""
import pytest
from datetime import datetime
from decimal import Decimal

from hotelres.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from hotelres.models.ontology import Room, RoomStatus
from hotelres.models.schemas import RoomCreate, RoomUpdate
from hotelres.services.room_service import RoomOrder, RoomService


class TestRoomQueries:
    """Reads"""

    def test_list_and_filter(self, db_session, customer_caller, room_a, maintenance_room):
        service = RoomService(db_session)
        assert len(service.get_rooms(customer_caller)) == 2
        assert [r.id for r in service.get_rooms(customer_caller, status=RoomStatus.MAINTENANCE)] == [
            maintenance_room.id
        ]
        assert [r.id for r in service.get_rooms(customer_caller, room_type="double")] == [room_a.id]

    def test_customers_see_cheapest_first(self, db_session, customer_caller, room_b, room_a,
                                          maintenance_room):
        rooms = RoomService(db_session).get_rooms(customer_caller)
        assert [r.name for r in rooms] == ["Room C", "Room A", "Room B"]

    def test_admins_see_newest_first(self, db_session, admin_caller, room_a, room_b):
        room_a.created_at = datetime(2025, 1, 2)
        room_b.created_at = datetime(2025, 1, 1)
        db_session.commit()
        service = RoomService(db_session)
        assert [r.id for r in service.get_rooms(admin_caller)] == [room_a.id, room_b.id]
        assert [r.id for r in service.get_rooms(admin_caller, order=RoomOrder.PRICE)] == [
            room_a.id, room_b.id
        ]
        room_a.price = Decimal("200.00")
        db_session.commit()
        assert [r.id for r in service.get_rooms(admin_caller, order="price")] == [
            room_b.id, room_a.id
        ]
        assert [r.id for r in service.get_rooms(admin_caller, order="newest")] == [
            room_a.id, room_b.id
        ]

    def test_unknown_order(self, db_session, customer_caller):
        with pytest.raises(ValidationError):
            RoomService(db_session).get_rooms(customer_caller, order="random")

    def test_get_missing(self, db_session, customer_caller):
        with pytest.raises(NotFoundError):
            RoomService(db_session).get_room(customer_caller, "missing")

    def test_get_by_ids_keeps_order_and_duplicates(self, db_session, customer_caller, room_a, room_b):
        rooms = RoomService(db_session).get_rooms_by_ids(
            customer_caller, [room_b.id, room_a.id, room_b.id]
        )
        assert [r.id for r in rooms] == [room_b.id, room_a.id, room_b.id]

    def test_room_types(self, db_session, customer_caller, room_a, maintenance_room):
        assert RoomService(db_session).get_room_types(customer_caller) == ["double", "single"]


class TestRoomWrites:
    """Writes"""

    def _create(self, caller, db):
        return RoomService(db).create_room(caller, RoomCreate(
            name="Sea Suite", type="suite", capacity=4, price=Decimal("320.50"),
            features=["sea view", " ", "jacuzzi"],
        ))

    def test_admin_creates(self, db_session, admin_caller):
        room = self._create(admin_caller, db_session)
        assert room.status == "available"
        assert room.created_by == admin_caller.user_id
        assert room.features == ["sea view", "jacuzzi"]

    def test_customer_cannot_create(self, db_session, customer_caller):
        with pytest.raises(PermissionDeniedError):
            self._create(customer_caller, db_session)
        assert db_session.query(Room).count() == 0

    def test_update_partial(self, db_session, admin_caller, room_a):
        room = RoomService(db_session).update_room(
            admin_caller, room_a.id, RoomUpdate(price=Decimal("120"), status=RoomStatus.OCCUPIED)
        )
        assert room.price == Decimal("120.00")
        assert room.status == "occupied"
        assert room.name == "Room A"

    def test_customer_cannot_update(self, db_session, customer_caller, room_a):
        with pytest.raises(PermissionDeniedError):
            RoomService(db_session).update_room(customer_caller, room_a.id, RoomUpdate(name="X"))

    def test_delete(self, db_session, admin_caller, room_a):
        RoomService(db_session).delete_room(admin_caller, room_a.id)
        assert db_session.query(Room).count() == 0
