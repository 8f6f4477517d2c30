"""
Change Password Use Case

Replaces the password of an authenticated user.
"""

import logging
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.token_issuer import AccessTokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditAction, AuditEvent
from src.domain.password_policy import password_violations
from .dtos import ChangePasswordResponse

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for changing a known password.

    Business Rules:
    - The current password must verify; otherwise nothing changes
    - The new password must differ from the current one
    - The new password must satisfy the password policy
    - On success every access token of the user is revoked,
      the one that made the request included
    """

    def __init__(self, uow: UnitOfWork, hasher: IPasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def execute(
        self, user_id: UUID, current_password: str, new_password: str
    ) -> Result[ChangePasswordResponse]:
        """
        Errors:
            - INVALID_CURRENT_PASSWORD: current password does not verify
            - PASSWORD_UNCHANGED: new password equals the current one
            - INVALID_PASSWORD: new password breaks the policy
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not self.hasher.verify(current_password, user.password_hash):
                await self.uow.audit_events.create(
                    AuditEvent(
                        user_id=user.id,
                        email=user.email,
                        action=AuditAction.password_change_failed.value,
                        success=False,
                        failure_reason="invalid_current_password",
                    )
                )
                await self.uow.commit()
                logger.warning(f"Password change rejected for user {user.id}")
                return Return.err(
                    Error(
                        "INVALID_CURRENT_PASSWORD",
                        "The current password is incorrect",
                        {"current_password": ["The current password is incorrect."]},
                    )
                )

            if new_password == current_password:
                return Return.err(
                    Error(
                        "PASSWORD_UNCHANGED",
                        "The new password must be different from the current password",
                        {"password": ["The new password must be different from the current password."]},
                    )
                )

            violations = password_violations(new_password)
            if violations:
                return Return.err(
                    Error(
                        "INVALID_PASSWORD",
                        "Password does not meet the requirements",
                        {"password": violations},
                    )
                )

            user.password_hash = self.hasher.hash(new_password)
            user.updated_at = utc_now()
            await self.uow.users.update(user)

            revoked_count = await AccessTokenIssuer(self.uow.access_tokens).revoke_all(user.id)

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=user.id,
                    email=user.email,
                    action=AuditAction.password_changed.value,
                    success=True,
                    event_metadata={"tokens_revoked": revoked_count},
                )
            )

            await self.uow.commit()

        logger.info(f"Password changed for user {user_id}")
        return Return.ok(
            ChangePasswordResponse(
                status="success",
                message="Password changed successfully. Please log in again.",
                revoked_count=revoked_count,
            )
        )
