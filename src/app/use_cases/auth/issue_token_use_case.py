from datetime import timedelta
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.token_issuer import DEFAULT_TOKEN_TTL, AccessTokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from .dtos import IssuedTokenResponse


class IssueTokenUseCase:
    """Mints a full-ability access token for an existing user (e.g. right after registration)."""

    def __init__(self, uow: UnitOfWork, token_ttl: timedelta = DEFAULT_TOKEN_TTL):
        self.uow = uow
        self.token_ttl = token_ttl

    async def execute(self, user_id: UUID) -> Result[IssuedTokenResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            issuer = AccessTokenIssuer(self.uow.access_tokens, self.token_ttl)
            plaintext, token = await issuer.issue(user.id)

            response = IssuedTokenResponse(token=plaintext, expires_at=token.expires_at)

            await self.uow.commit()

        return Return.ok(response)
