from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.access_token_repository import IAccessTokenRepository
from src.domain.entities import AccessToken


class AccessTokenRepository(IAccessTokenRepository):
    """AccessToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, token_id: UUID) -> Optional[AccessToken]:
        """Get token by ID"""
        stmt = select(AccessToken).where(AccessToken.id == token_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_token_hash(self, token_hash: str) -> Optional[AccessToken]:
        """Get token by SHA-256 digest of its secret"""
        stmt = select(AccessToken).where(AccessToken.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, token: AccessToken) -> AccessToken:
        """Create a new token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def touch(self, token_id: UUID, used_at: datetime) -> None:
        """Record the last successful use of a token"""
        stmt = (
            update(AccessToken)
            .where(AccessToken.id == token_id)
            .values(last_used_at=used_at)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def revoke_by_id(self, token_id: UUID, revoked_at: datetime) -> bool:
        """Revoke a specific token by ID"""
        stmt = (
            update(AccessToken)
            .where(AccessToken.id == token_id, AccessToken.revoked == False)
            .values(revoked=True, revoked_at=revoked_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def revoke_all_by_user_id(self, user_id: UUID, revoked_at: datetime) -> int:
        """Revoke all active tokens for a user"""
        stmt = (
            update(AccessToken)
            .where(AccessToken.user_id == user_id, AccessToken.revoked == False)
            .values(revoked=True, revoked_at=revoked_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
