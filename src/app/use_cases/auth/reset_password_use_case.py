"""
Reset Password Use Case

Redeems a password reset ticket and sets a new password.
"""

import logging
from typing import Optional

from src.libs.result import Error, Result, Return
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.reset_ticket_store import PasswordResetTicketStore
from src.app.services.token_issuer import AccessTokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email, utc_now
from src.domain.entities import AuditAction, AuditEvent
from src.domain.password_policy import password_violations
from .dtos import ClientInfo, ResetPasswordResponse

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for completing a password reset.

    Business Rules:
    - New password must satisfy the password policy
    - The ticket must match the email, be unexpired and unused
    - Redemption is a conditional delete, so a ticket works at most once
      even under concurrent requests
    - Every access token of the user is revoked
    - Audit event created for security tracking
    """

    def __init__(self, uow: UnitOfWork, hasher: IPasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def execute(
        self,
        email: str,
        token: str,
        new_password: str,
        client: Optional[ClientInfo] = None,
    ) -> Result[ResetPasswordResponse]:
        """
        Errors:
            - INVALID_PASSWORD: Password does not meet the policy
            - INVALID_TOKEN: Ticket unknown, expired, already used or for another email
        """
        client = client or ClientInfo()

        violations = password_violations(new_password)
        if violations:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    "Password does not meet the requirements",
                    {"password": violations},
                )
            )

        invalid = Error("INVALID_TOKEN", "This password reset token is invalid or has expired")

        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))
            if user is None:
                return Return.err(invalid)

            store = PasswordResetTicketStore(self.uow.password_reset_tickets)
            if not await store.redeem(user.email, token):
                logger.warning(f"Rejected password reset token for user {user.id}")
                return Return.err(invalid)

            user.password_hash = self.hasher.hash(new_password)
            user.updated_at = utc_now()
            await self.uow.users.update(user)

            revoked_count = await AccessTokenIssuer(self.uow.access_tokens).revoke_all(user.id)

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=user.id,
                    email=user.email,
                    action=AuditAction.password_reset_completed.value,
                    success=True,
                    ip_address=client.ip_address,
                    user_agent=client.user_agent,
                    event_metadata={"tokens_revoked": revoked_count},
                )
            )

            await self.uow.commit()

        logger.info(f"Password reset completed for user {user.id}")
        return Return.ok(
            ResetPasswordResponse(
                status="success",
                message="Your password has been reset",
            )
        )
