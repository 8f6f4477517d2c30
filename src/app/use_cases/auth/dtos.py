"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import AccessToken, User


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    Contains only business-relevant data (no HTTP concerns).
    """

    name: str
    email: str
    password: str


class ClientInfo(BaseModel):
    """Where a request came from, recorded on audit events"""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


# ============================================================================
# Nested Models
# ============================================================================


class UserInfo(BaseModel):
    """Public user representation (never carries the password hash)"""

    id: UUID
    name: str
    email: str
    email_verified_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserInfo":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            email_verified_at=user.email_verified_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class TokenInfo(BaseModel):
    """Metadata of an access token (never carries the secret)"""

    id: UUID
    name: str
    abilities: List[str]
    expires_at: datetime
    last_used_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, token: AccessToken) -> "TokenInfo":
        return cls(
            id=token.id,
            name=token.name,
            abilities=list(token.abilities),
            expires_at=token.expires_at,
            last_used_at=token.last_used_at,
        )


class AuthenticatedPrincipal(BaseModel):
    """The user behind a bearer token together with that token"""

    user: UserInfo
    token: TokenInfo


# ============================================================================
# Response DTOs
# ============================================================================


class IssuedTokenResponse(BaseModel):
    """A freshly minted bearer token; the plaintext is only ever shown here"""

    token: str
    token_type: str = "Bearer"
    expires_at: datetime


class LoginResponse(BaseModel):
    """Response for user login use case"""

    user: UserInfo
    token: str
    token_type: str = "Bearer"
    expires_at: datetime


class LogoutResponse(BaseModel):
    """Response for logout use cases"""

    status: str
    message: str
    revoked_count: int


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    status: str
    message: str
