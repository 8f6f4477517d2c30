"""
Request Password Reset Use Case

Handles generating and sending password reset tokens.
"""

import logging
from datetime import timedelta
from typing import Optional

from src.libs.result import Result, Return
from src.app.services.notification import INotificationDispatcher
from src.app.services.reset_ticket_store import DEFAULT_TICKET_TTL, PasswordResetTicketStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.domain.entities import AuditAction, AuditEvent
from .dtos import ClientInfo, RequestPasswordResetResponse

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "If the email exists, a password reset link has been sent"


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Token is 32 random bytes, only its SHA-256 digest is stored
    - Token expires after ticket_ttl (60 minutes by default)
    - A new request replaces any outstanding ticket for the email
    - No email enumeration (same response for valid/invalid emails)
    - Delivery failures are logged, never surfaced to the caller
    - Rate limiting is handled at the API layer
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: INotificationDispatcher,
        ticket_ttl: timedelta = DEFAULT_TICKET_TTL,
    ):
        self.uow = uow
        self.notifier = notifier
        self.ticket_ttl = ticket_ttl

    async def execute(
        self, email: str, client: Optional[ClientInfo] = None
    ) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address
            client: Request origin for the audit log

        Returns:
            Result with the generic response, whether or not the email exists
        """
        client = client or ClientInfo()
        response = RequestPasswordResetResponse(status="sent", message=GENERIC_MESSAGE)

        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))

            if user is None:
                logger.info("Password reset requested for unknown email")
                return Return.ok(response)

            store = PasswordResetTicketStore(self.uow.password_reset_tickets, self.ticket_ttl)
            reset_token = await store.issue(user.email)

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=user.id,
                    email=user.email,
                    action=AuditAction.password_reset_requested.value,
                    success=True,
                    ip_address=client.ip_address,
                    user_agent=client.user_agent,
                )
            )

            await self.uow.commit()

        try:
            await self.notifier.send_password_reset_email(user.email, reset_token)
        except Exception:
            logger.exception(f"Failed to deliver password reset email to user {user.id}")

        return Return.ok(response)
