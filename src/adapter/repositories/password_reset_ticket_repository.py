from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.password_reset_ticket_repository import IPasswordResetTicketRepository
from src.domain.entities import PasswordResetTicket


class PasswordResetTicketRepository(IPasswordResetTicketRepository):
    """PasswordResetTicket repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, ticket: PasswordResetTicket) -> PasswordResetTicket:
        """Create a new password reset ticket"""
        self.session.add(ticket)
        await self.session.flush()
        await self.session.refresh(ticket)
        return ticket

    async def get_latest_by_email(self, email: str) -> Optional[PasswordResetTicket]:
        """Get the most recent ticket issued for an email"""
        stmt = (
            select(PasswordResetTicket)
            .where(PasswordResetTicket.email == email)
            .order_by(PasswordResetTicket.created_at.desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def delete_by_email(self, email: str) -> int:
        """Delete every ticket for an email"""
        stmt = delete(PasswordResetTicket).where(PasswordResetTicket.email == email)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_if_matching(
        self, ticket_id: UUID, token_hash: str, now: datetime
    ) -> bool:
        """Conditional delete - the row count tells which caller won"""
        stmt = delete(PasswordResetTicket).where(
            PasswordResetTicket.id == ticket_id,
            PasswordResetTicket.token_hash == token_hash,
            PasswordResetTicket.expires_at > now,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
