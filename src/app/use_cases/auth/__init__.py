"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .issue_token_use_case import IssueTokenUseCase
from .logout_use_case import LogoutUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .authenticate_token_use_case import AuthenticateTokenUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .validate_reset_token_use_case import ValidateResetTokenUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .dtos import (
    RegisterCommand,
    ClientInfo,
    UserInfo,
    TokenInfo,
    AuthenticatedPrincipal,
    IssuedTokenResponse,
    LoginResponse,
    LogoutResponse,
    RequestPasswordResetResponse,
    ResetPasswordResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "IssueTokenUseCase",
    "LogoutUseCase",
    "RefreshTokenUseCase",
    "AuthenticateTokenUseCase",
    "RequestPasswordResetUseCase",
    "ValidateResetTokenUseCase",
    "ResetPasswordUseCase",
    # DTOs - Commands
    "RegisterCommand",
    "ClientInfo",
    # DTOs - Responses
    "IssuedTokenResponse",
    "LoginResponse",
    "LogoutResponse",
    "RequestPasswordResetResponse",
    "ResetPasswordResponse",
    # DTOs - Nested Models
    "UserInfo",
    "TokenInfo",
    "AuthenticatedPrincipal",
]
