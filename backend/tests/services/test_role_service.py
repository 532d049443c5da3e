"""
Tests for hotelres/services/role_service.py
"""
import pytest
from unittest.mock import Mock
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from hotelres.exceptions import NotFoundError, PermissionDeniedError
from hotelres.models.events import EventType
from hotelres.models.ontology import AppRole, UserRole
from hotelres.security.policies import POLICIES, PROFILES, Action
from hotelres.services.role_service import RoleService


class TestGetRole:
    """Role lookup"""

    def test_default_customer(self, db_session, customer_user):
        assert RoleService(db_session).get_role(customer_user.id) == AppRole.CUSTOMER

    def test_admin(self, db_session, admin_user):
        assert RoleService(db_session).get_role(admin_user.id) == AppRole.ADMIN

    def test_missing_row_falls_back(self, db_session, customer_user):
        db_session.query(UserRole).delete()
        db_session.commit()
        assert RoleService(db_session).get_role(customer_user.id) == AppRole.CUSTOMER

    def test_lookup_failure_falls_back(self):
        db = Mock()
        db.query.side_effect = SQLAlchemyError("connection lost")
        assert RoleService(db).get_role("anyone") == AppRole.CUSTOMER

    def test_unknown_stored_role_falls_back(self, db_session, customer_user):
        db_session.execute(
            text("UPDATE user_roles SET role = 'superuser' WHERE user_id = :uid"),
            {"uid": customer_user.id},
        )
        db_session.commit()
        db_session.expire_all()
        assert RoleService(db_session).get_role(customer_user.id) == AppRole.CUSTOMER

    def test_stored_as_lowercase_value(self, db_session, admin_user, customer_user):
        stored = dict(db_session.execute(text("SELECT user_id, role FROM user_roles")).all())
        assert stored == {admin_user.id: "admin", customer_user.id: "customer"}


class TestSetRole:
    """Role changes"""

    def test_admin_promotes(self, db_session, admin_caller, customer_user):
        events = []
        RoleService(db_session, event_publisher=events.append).set_role(
            admin_caller, customer_user.id, AppRole.ADMIN
        )
        assert RoleService(db_session).get_role(customer_user.id) == AppRole.ADMIN
        assert db_session.query(UserRole).filter(UserRole.user_id == customer_user.id).count() == 1
        assert events[0].event_type == EventType.ROLE_CHANGED.value
        assert events[0].data["old_role"] == "customer"
        assert events[0].data["new_role"] == "admin"
        raw = db_session.execute(
            text("SELECT role FROM user_roles WHERE user_id = :uid"), {"uid": customer_user.id}
        ).scalar()
        assert raw == "admin"

    def test_creates_missing_row(self, db_session, admin_caller, customer_user):
        db_session.query(UserRole).filter(UserRole.user_id == customer_user.id).delete()
        db_session.commit()
        RoleService(db_session).set_role(admin_caller, customer_user.id, AppRole.ADMIN)
        assert RoleService(db_session).get_role(customer_user.id) == AppRole.ADMIN

    def test_customer_cannot_change(self, db_session, customer_caller, other_customer):
        with pytest.raises(PermissionDeniedError):
            RoleService(db_session).set_role(customer_caller, other_customer.id, AppRole.ADMIN)

    def test_unknown_user(self, db_session, admin_caller):
        with pytest.raises(NotFoundError):
            RoleService(db_session).set_role(admin_caller, "missing", AppRole.ADMIN)


class TestListUsers:

    def test_admin_lists(self, db_session, admin_caller, customer_user):
        users = RoleService(db_session).list_users(admin_caller)
        roles = {u['email']: u['role'] for u in users}
        assert roles == {"admin@example.com": AppRole.ADMIN, "ana@example.com": AppRole.CUSTOMER}

    def test_customer_denied(self, db_session, customer_caller):
        with pytest.raises(PermissionDeniedError):
            RoleService(db_session).list_users(customer_caller)

    def test_unknown_stored_role_listed_as_customer(self, db_session, admin_caller, customer_user):
        db_session.execute(
            text("UPDATE user_roles SET role = 'owner' WHERE user_id = :uid"),
            {"uid": customer_user.id},
        )
        db_session.commit()
        users = RoleService(db_session).list_users(admin_caller)
        assert {u['email']: u['role'] for u in users}["ana@example.com"] == AppRole.CUSTOMER

    def test_reads_profiles_through_policy(self, db_session, admin_caller, monkeypatch):
        monkeypatch.setitem(POLICIES, (PROFILES, Action.SELECT), lambda caller, row: False)
        with pytest.raises(PermissionDeniedError, match="select profiles"):
            RoleService(db_session).list_users(admin_caller)
