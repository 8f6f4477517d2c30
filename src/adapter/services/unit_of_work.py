from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.access_token_repository import AccessTokenRepository
from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.password_reset_ticket_repository import PasswordResetTicketRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.access_tokens = AccessTokenRepository(self.session)
        self.password_reset_tickets = PasswordResetTicketRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
