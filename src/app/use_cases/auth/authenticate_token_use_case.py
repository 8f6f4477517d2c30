import logging

from src.libs.result import Error, Result, Return
from src.app.services.token_issuer import AccessTokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from .dtos import AuthenticatedPrincipal, TokenInfo, UserInfo

logger = logging.getLogger(__name__)


class AuthenticateTokenUseCase:
    """
    Resolves a presented bearer token to its user.

    Unknown, malformed, revoked and expired tokens all yield the same
    INVALID_TOKEN error. A successful lookup stamps last_used_at.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, presented: str) -> Result[AuthenticatedPrincipal]:
        async with self.uow:
            issuer = AccessTokenIssuer(self.uow.access_tokens)
            now = utc_now()

            token = await issuer.lookup(presented)
            if not issuer.is_valid(token, now):
                return Return.err(Error("INVALID_TOKEN", "Invalid or expired token"))

            user = await self.uow.users.get_by_id(token.user_id)
            if user is None:
                logger.warning(f"Token {token.id} belongs to a missing user")
                return Return.err(Error("INVALID_TOKEN", "Invalid or expired token"))

            await self.uow.access_tokens.touch(token.id, now)
            token.last_used_at = now

            principal = AuthenticatedPrincipal(
                user=UserInfo.from_entity(user),
                token=TokenInfo.from_entity(token),
            )

            await self.uow.commit()

        return Return.ok(principal)
