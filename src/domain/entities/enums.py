"""
Auth Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class TokenAbility(str, Enum):
    """Capabilities an access token can carry"""

    all = "*"
    profile_read = "profile:read"
    profile_write = "profile:write"


class AuditAction(str, Enum):
    """Actions recorded in the audit log"""

    register = "register"
    login_succeeded = "login_succeeded"
    login_failed = "login_failed"
    logout = "logout"
    logout_all = "logout_all"
    token_refreshed = "token_refreshed"
    profile_updated = "profile_updated"
    password_changed = "password_changed"
    password_change_failed = "password_change_failed"
    password_reset_requested = "password_reset_requested"
    password_reset_completed = "password_reset_completed"
