"""
AccessToken Entity

Bearer credentials issued to users.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import TokenAbility


class AccessToken(SQLModel, table=True):
    """
    AccessToken entity - one issued bearer credential.

    Business Rules:
    - Only the SHA-256 digest of the secret is stored
    - Expires 24 hours after issuance, never extended
    - Valid iff not revoked and now < expires_at
    - A user may hold several valid tokens at once
    """

    __tablename__ = "access_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    name: str = Field(default="auth-token", max_length=255)

    token_hash: str = Field(unique=True, max_length=64)  # SHA-256 hex
    abilities: List[str] = Field(
        default_factory=lambda: [TokenAbility.all.value], sa_column=Column(JSON)
    )

    revoked: bool = Field(default=False)
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))
    last_used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_access_token_expires_at", "expires_at"),
        Index("idx_access_token_revoked", "revoked"),
    )

    def is_valid(self, now: datetime) -> bool:
        return not self.revoked and now < self.expires_at

    def can(self, ability: TokenAbility) -> bool:
        return TokenAbility.all.value in self.abilities or ability.value in self.abilities
