from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import PasswordResetTicket


class IPasswordResetTicketRepository(ABC):
    """PasswordResetTicket repository interface - application layer"""

    @abstractmethod
    async def create(self, ticket: PasswordResetTicket) -> PasswordResetTicket:
        """Create a new password reset ticket"""
        pass

    @abstractmethod
    async def get_latest_by_email(self, email: str) -> Optional[PasswordResetTicket]:
        """Get the most recent ticket issued for an email"""
        pass

    @abstractmethod
    async def delete_by_email(self, email: str) -> int:
        """Delete every ticket for an email. Returns count."""
        pass

    @abstractmethod
    async def delete_if_matching(
        self, ticket_id: UUID, token_hash: str, now: datetime
    ) -> bool:
        """
        Delete a ticket only if it still exists, still carries token_hash and
        has not expired. Returns True only for the caller whose statement
        removed the row, so concurrent redemptions cannot both succeed.
        """
        pass
