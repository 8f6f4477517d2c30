"""
Auth Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import AuditAction, TokenAbility

# Export all entities
from .user import User
from .access_token import AccessToken
from .password_reset_ticket import PasswordResetTicket
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "AuditAction",
    "TokenAbility",
    # Entities
    "User",
    "AccessToken",
    "PasswordResetTicket",
    "AuditEvent",
]
