from abc import ABC, abstractmethod

from src.app.repositories.access_token_repository import IAccessTokenRepository
from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.password_reset_ticket_repository import IPasswordResetTicketRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    access_tokens: IAccessTokenRepository
    password_reset_tickets: IPasswordResetTicketRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
