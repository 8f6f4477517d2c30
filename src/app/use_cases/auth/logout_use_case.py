"""
Logout Use Case

Revokes the presenting token, or every token a user holds.
"""

import logging
from uuid import UUID

from src.libs.result import Result, Return
from src.app.services.token_issuer import AccessTokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent
from .dtos import LogoutResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Business Rules:
    - Logout revokes only the token that made the request
    - Logout-all revokes every token of the user, the current one included
    - Revoking an already revoked token is a no-op, not an error
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def logout(self, user_id: UUID, token_id: UUID) -> Result[LogoutResponse]:
        async with self.uow:
            issuer = AccessTokenIssuer(self.uow.access_tokens)

            revoked = False
            token = await self.uow.access_tokens.get_by_id(token_id)
            if token is not None and token.user_id == user_id:
                revoked = await issuer.revoke(token_id)

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=user_id,
                    action=AuditAction.logout.value,
                    success=True,
                    event_metadata={"token_id": str(token_id)},
                )
            )
            await self.uow.commit()

        return Return.ok(
            LogoutResponse(
                status="success",
                message="Logged out successfully",
                revoked_count=1 if revoked else 0,
            )
        )

    async def logout_all(self, user_id: UUID) -> Result[LogoutResponse]:
        async with self.uow:
            issuer = AccessTokenIssuer(self.uow.access_tokens)
            revoked_count = await issuer.revoke_all(user_id)

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=user_id,
                    action=AuditAction.logout_all.value,
                    success=True,
                    event_metadata={"tokens_revoked": revoked_count},
                )
            )
            await self.uow.commit()

        logger.info(f"Revoked {revoked_count} token(s) for user {user_id}")
        return Return.ok(
            LogoutResponse(
                status="success",
                message="Logged out from all devices",
                revoked_count=revoked_count,
            )
        )
