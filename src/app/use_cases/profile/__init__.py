"""
Profile Use Cases

Self-service changes to the authenticated user's account.
"""

from .update_profile_use_case import UpdateProfileUseCase
from .change_password_use_case import ChangePasswordUseCase
from .dtos import UpdateProfileCommand, ChangePasswordResponse

__all__ = [
    "UpdateProfileUseCase",
    "ChangePasswordUseCase",
    "UpdateProfileCommand",
    "ChangePasswordResponse",
]
