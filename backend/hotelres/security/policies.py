"""
Row-level authorization policies

Each (table, action) pair maps to a predicate over the caller and the target
row. Every service persistence call goes through authorize(); a missing entry
means the action is denied.

    rooms          select: any    insert/update/delete: admin
    user_roles     select: any    insert/update/delete: admin
    reservations   select: owner or admin   insert: row owner is caller
                   update: owner or admin   delete: admin
    profiles       select: any    update: own row
    avatars        write: paths under "<caller id>/"

Panel-wide views (dashboard totals, the user directory) also need
require_role(caller, AppRole.ADMIN).

The reservation update policy is broader than the lifecycle; the state
machine in hotelres.domain.reservation narrows it.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from hotelres.exceptions import PermissionDeniedError
from hotelres.models.ontology import AppRole


@dataclass(frozen=True)
class Caller:
    """Authenticated identity plus its resolved role"""
    user_id: str
    role: AppRole = AppRole.CUSTOMER

    @property
    def is_admin(self) -> bool:
        return self.role == AppRole.ADMIN


class Action(str, Enum):
    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


ROOMS = "rooms"
RESERVATIONS = "reservations"
USER_ROLES = "user_roles"
PROFILES = "profiles"

Predicate = Callable[[Caller, Any], bool]


def _field(row: Any, name: str) -> Any:
    if row is None:
        return None
    if isinstance(row, dict):
        return row.get(name)
    return getattr(row, name, None)


def _anyone(caller: Caller, row: Any) -> bool:
    return True


def _admin(caller: Caller, row: Any) -> bool:
    return caller.is_admin


def _owner_or_admin(caller: Caller, row: Any) -> bool:
    return caller.is_admin or _field(row, "user_id") == caller.user_id


def _inserting_own(caller: Caller, row: Any) -> bool:
    return _field(row, "user_id") == caller.user_id


def _own_profile(caller: Caller, row: Any) -> bool:
    return _field(row, "id") == caller.user_id


POLICIES: Dict[Tuple[str, Action], Predicate] = {
    (ROOMS, Action.SELECT): _anyone,
    (ROOMS, Action.INSERT): _admin,
    (ROOMS, Action.UPDATE): _admin,
    (ROOMS, Action.DELETE): _admin,

    (USER_ROLES, Action.SELECT): _anyone,
    (USER_ROLES, Action.INSERT): _admin,
    (USER_ROLES, Action.UPDATE): _admin,
    (USER_ROLES, Action.DELETE): _admin,

    (RESERVATIONS, Action.SELECT): _owner_or_admin,
    (RESERVATIONS, Action.INSERT): _inserting_own,
    (RESERVATIONS, Action.UPDATE): _owner_or_admin,
    (RESERVATIONS, Action.DELETE): _admin,

    (PROFILES, Action.SELECT): _anyone,
    (PROFILES, Action.UPDATE): _own_profile,
}


def is_allowed(caller: Optional[Caller], action: Action, table: str, row: Any = None) -> bool:
    """Evaluate the policy for (table, action); anonymous callers are always denied"""
    if caller is None:
        return False
    predicate = POLICIES.get((table, Action(action)))
    if predicate is None:
        return False
    return predicate(caller, row)


def authorize(caller: Optional[Caller], action: Action, table: str, row: Any = None) -> None:
    """
    Raises:
        PermissionDeniedError: the policy denies the operation
    """
    if not is_allowed(caller, action, table, row):
        raise PermissionDeniedError(f"Not allowed to {Action(action).value} {table}")


def require_role(caller: Optional[Caller], role: AppRole) -> None:
    """
    Raises:
        PermissionDeniedError: the caller does not hold role
    """
    if caller is None or caller.role != role:
        label = "Administrator" if role == AppRole.ADMIN else role.value.capitalize()
        raise PermissionDeniedError(f"{label} role required")


def can_write_avatar(caller: Optional[Caller], path: str) -> bool:
    """Avatar objects must live under the caller's own folder"""
    if caller is None or not path:
        return False
    folder, _, name = path.partition("/")
    return folder == caller.user_id and bool(name) and ".." not in name and "/" not in name
