"""
Pytest configuration and shared fixtures
"""
import pytest
from datetime import date, timedelta
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from hotelres.config import settings
from hotelres.database import Base, get_db
from hotelres.models import ontology
from hotelres.models.ontology import AppRole, Reservation, ReservationStatus, Room, RoomStatus, UserRole
from hotelres.models.schemas import SignUpRequest
from hotelres.security.policies import Caller
from hotelres.services.auth_service import AuthService
from hotelres.services.cart_service import cart_store
from hotelres.services.event_bus import event_bus
from hotelres.main import app

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def isolated_state(tmp_path, monkeypatch):
    """Fresh event bus, carts and avatar directory for every test"""
    monkeypatch.setattr(settings, "AVATAR_DIR", str(tmp_path / "avatars"))
    event_bus.clear_subscribers()
    event_bus.clear_history()
    cart_store.clear_all()
    yield
    event_bus.clear_subscribers()
    event_bus.clear_history()
    cart_store.clear_all()


@pytest.fixture(scope="function")
def db_engine():
    """In-memory database engine"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Database session"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Test client bound to the in-memory database"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== Users and sessions ==============

def _sign_up(db_session, email, name, role=AppRole.CUSTOMER):
    user = AuthService(db_session).sign_up(SignUpRequest(email=email, password=PASSWORD, name=name))
    if role != AppRole.CUSTOMER:
        row = db_session.query(UserRole).filter(UserRole.user_id == user.id).first()
        row.role = role.value
        db_session.commit()
    return user


@pytest.fixture
def customer_user(db_session):
    """Signed-up customer"""
    return _sign_up(db_session, "ana@example.com", "Ana Perez")


@pytest.fixture
def other_customer(db_session):
    """Second customer"""
    return _sign_up(db_session, "luis@example.com", "Luis Gomez")


@pytest.fixture
def admin_user(db_session):
    """Administrator"""
    return _sign_up(db_session, "admin@example.com", "Hotel Admin", role=AppRole.ADMIN)


@pytest.fixture
def customer_caller(customer_user):
    return Caller(user_id=customer_user.id, role=AppRole.CUSTOMER)


@pytest.fixture
def other_caller(other_customer):
    return Caller(user_id=other_customer.id, role=AppRole.CUSTOMER)


@pytest.fixture
def admin_caller(admin_user):
    return Caller(user_id=admin_user.id, role=AppRole.ADMIN)


def _token(db_session, user):
    return AuthService(db_session).sign_in(user.email, PASSWORD)['access_token']


@pytest.fixture
def customer_token(db_session, customer_user):
    return _token(db_session, customer_user)


@pytest.fixture
def admin_token(db_session, admin_user):
    return _token(db_session, admin_user)


@pytest.fixture
def customer_headers(customer_token):
    """Customer bearer header"""
    return {"Authorization": f"Bearer {customer_token}"}


@pytest.fixture
def other_customer_headers(db_session, other_customer):
    return {"Authorization": f"Bearer {_token(db_session, other_customer)}"}


@pytest.fixture
def admin_headers(admin_token):
    """Administrator bearer header"""
    return {"Authorization": f"Bearer {admin_token}"}


# ============== Rooms and reservations ==============

def _make_room(db_session, name, price, capacity=2, room_type="double",
               status=RoomStatus.AVAILABLE.value):
    room = Room(
        name=name,
        type=room_type,
        capacity=capacity,
        price=Decimal(price),
        status=status,
        features=["wifi"],
    )
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def room_a(db_session):
    """Available double room, 100 per night"""
    return _make_room(db_session, "Room A", "100.00")


@pytest.fixture
def room_b(db_session):
    """Available double room, 150 per night"""
    return _make_room(db_session, "Room B", "150.00")


@pytest.fixture
def maintenance_room(db_session):
    """Room under maintenance"""
    return _make_room(db_session, "Room C", "80.00", capacity=1, room_type="single",
                      status=RoomStatus.MAINTENANCE.value)


@pytest.fixture
def guest_data():
    return {
        "first_name": "Ana",
        "last_name": "Perez",
        "email": "ana@example.com",
        "phone": "5551234567",
        "document_id": "AB12345",
    }


@pytest.fixture
def make_reservation(db_session, guest_data):
    """Insert a reservation row directly"""
    def _make(user, rooms, status=ReservationStatus.PENDING.value,
              check_in=None, nights=2, guests=2):
        check_in = check_in or date.today() + timedelta(days=10)
        reservation = Reservation(
            user_id=user.id,
            room_ids=[room.id for room in rooms],
            check_in=check_in,
            check_out=check_in + timedelta(days=nights),
            guests=guests,
            total_price=sum((room.price for room in rooms), Decimal("0")) * nights,
            status=status,
            guest_data=guest_data,
        )
        db_session.add(reservation)
        db_session.commit()
        db_session.refresh(reservation)
        return reservation
    return _make
