# Security module
from hotelres.security.auth import (
    get_password_hash, verify_password, create_access_token,
    get_current_session, get_current_user, get_caller, require_admin
)
from hotelres.security.policies import Caller, Action, authorize, is_allowed

__all__ = [
    'get_password_hash', 'verify_password', 'create_access_token',
    'get_current_session', 'get_current_user', 'get_caller', 'require_admin',
    'Caller', 'Action', 'authorize', 'is_allowed',
]
