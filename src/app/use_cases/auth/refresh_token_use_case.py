"""
Refresh Token Use Case

Rotates a bearer token: the presented token is revoked and a new one issued.
"""

import logging
from datetime import timedelta
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.token_issuer import DEFAULT_TOKEN_TTL, AccessTokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent, TokenAbility
from .dtos import IssuedTokenResponse

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for rotating access tokens.

    Business Rules:
    - Token rotation: old token revoked, new token issued in one transaction
    - The new token keeps the name and abilities of the old one
    - Only the first of two concurrent refreshes wins; the revoke is
      conditional and the loser mints nothing
    """

    def __init__(self, uow: UnitOfWork, token_ttl: timedelta = DEFAULT_TOKEN_TTL):
        self.uow = uow
        self.token_ttl = token_ttl

    async def execute(self, user_id: UUID, token_id: UUID) -> Result[IssuedTokenResponse]:
        """
        Execute refresh token use case.

        Args:
            user_id: Owner of the presented token
            token_id: Id of the presented (already authenticated) token

        Returns:
            Result with IssuedTokenResponse, or Error(INVALID_TOKEN / TOKEN_REVOKED)
        """
        async with self.uow:
            current = await self.uow.access_tokens.get_by_id(token_id)
            if current is None or current.user_id != user_id:
                return Return.err(Error("INVALID_TOKEN", "Invalid token"))

            issuer = AccessTokenIssuer(self.uow.access_tokens, self.token_ttl)

            if not await issuer.revoke(current.id):
                logger.warning(f"Refresh attempted with revoked token {token_id}")
                return Return.err(Error("TOKEN_REVOKED", "Token has been revoked"))

            abilities = [TokenAbility(ability) for ability in current.abilities]
            plaintext, token = await issuer.issue(
                user_id, abilities=abilities, name=current.name
            )

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=user_id,
                    action=AuditAction.token_refreshed.value,
                    success=True,
                    event_metadata={
                        "old_token_id": str(current.id),
                        "new_token_id": str(token.id),
                    },
                )
            )

            response = IssuedTokenResponse(token=plaintext, expires_at=token.expires_at)

            await self.uow.commit()

        return Return.ok(response)
