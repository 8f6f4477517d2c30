from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import AccessToken


class IAccessTokenRepository(ABC):
    """AccessToken repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, token_id: UUID) -> Optional[AccessToken]:
        """Get token by ID"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[AccessToken]:
        """Get token by SHA-256 digest of its secret"""
        pass

    @abstractmethod
    async def create(self, token: AccessToken) -> AccessToken:
        """Create a new token"""
        pass

    @abstractmethod
    async def touch(self, token_id: UUID, used_at: datetime) -> None:
        """Record the last successful use of a token"""
        pass

    @abstractmethod
    async def revoke_by_id(self, token_id: UUID, revoked_at: datetime) -> bool:
        """Revoke a specific token. Returns True if a live token was revoked by this call."""
        pass

    @abstractmethod
    async def revoke_all_by_user_id(self, user_id: UUID, revoked_at: datetime) -> int:
        """Revoke all tokens for a user. Returns count of revoked tokens."""
        pass
