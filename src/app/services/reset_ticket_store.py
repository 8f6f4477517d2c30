"""
Password Reset Ticket Store

Single-use, time-limited tickets proving control of an email address.
"""

from datetime import timedelta
from typing import Optional

from src.app.repositories.password_reset_ticket_repository import IPasswordResetTicketRepository
from src.app.services.token_hashing import generate_secret, hash_secret, secret_matches
from src.domain.base import utc_now
from src.domain.entities import PasswordResetTicket

DEFAULT_TICKET_TTL = timedelta(minutes=60)


class PasswordResetTicketStore:
    """
    Business Rules:
    - Token is 32 random bytes (256 bits), only its SHA-256 digest is stored
    - A new request for an email deletes that email's older tickets
    - Validation and redemption share one matching rule (find_valid)
    - Redemption deletes the ticket with a conditional delete
    """

    def __init__(
        self,
        tickets: IPasswordResetTicketRepository,
        ttl: timedelta = DEFAULT_TICKET_TTL,
    ):
        self.tickets = tickets
        self.ttl = ttl

    async def issue(self, email: str) -> str:
        await self.tickets.delete_by_email(email)

        token = generate_secret(32)
        now = utc_now()
        await self.tickets.create(
            PasswordResetTicket(
                email=email,
                token_hash=hash_secret(token),
                created_at=now,
                expires_at=now + self.ttl,
            )
        )
        return token

    async def find_valid(self, email: str, token: str) -> Optional[PasswordResetTicket]:
        ticket = await self.tickets.get_latest_by_email(email)
        if ticket is None:
            return None
        if not secret_matches(token, ticket.token_hash):
            return None
        if ticket.expires_at <= utc_now():
            return None
        return ticket

    async def redeem(self, email: str, token: str) -> bool:
        ticket = await self.find_valid(email, token)
        if ticket is None:
            return False
        return await self.tickets.delete_if_matching(
            ticket.id, ticket.token_hash, utc_now()
        )
