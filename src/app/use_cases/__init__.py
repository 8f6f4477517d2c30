"""
Use Cases

Organized by domain folder:
- auth/: Registration, login, tokens and password reset
- profile/: Profile and password changes
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    IssueTokenUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
    AuthenticateTokenUseCase,
    RequestPasswordResetUseCase,
    ValidateResetTokenUseCase,
    ResetPasswordUseCase,
)
from .profile import (
    UpdateProfileUseCase,
    ChangePasswordUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "IssueTokenUseCase",
    "LogoutUseCase",
    "RefreshTokenUseCase",
    "AuthenticateTokenUseCase",
    "RequestPasswordResetUseCase",
    "ValidateResetTokenUseCase",
    "ResetPasswordUseCase",
    # Profile
    "UpdateProfileUseCase",
    "ChangePasswordUseCase",
]
