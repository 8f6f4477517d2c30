"""
Access Token Issuer/Registry

Mints, resolves and revokes opaque bearer tokens.
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional, Tuple
from uuid import UUID

from src.app.repositories.access_token_repository import IAccessTokenRepository
from src.app.services.token_hashing import generate_secret, hash_secret, secret_matches
from src.domain.base import utc_now
from src.domain.entities import AccessToken, TokenAbility

DEFAULT_TOKEN_TTL = timedelta(hours=24)
DEFAULT_TOKEN_NAME = "auth-token"
TOKEN_SEPARATOR = "|"


class AccessTokenIssuer:
    """
    Token registry over the access token repository.

    Business Rules:
    - Plaintext is "<token id>|<secret>" and is returned exactly once
    - Only the SHA-256 digest of the secret is persisted
    - Lookup compares digests in constant time
    - Revocation is idempotent
    """

    def __init__(self, tokens: IAccessTokenRepository, ttl: timedelta = DEFAULT_TOKEN_TTL):
        self.tokens = tokens
        self.ttl = ttl

    async def issue(
        self,
        user_id: UUID,
        abilities: Optional[Iterable[TokenAbility]] = None,
        ttl: Optional[timedelta] = None,
        name: str = DEFAULT_TOKEN_NAME,
    ) -> Tuple[str, AccessToken]:
        abilities = list(abilities) if abilities else [TokenAbility.all]
        secret = generate_secret(40)
        now = utc_now()

        record = AccessToken(
            user_id=user_id,
            name=name,
            token_hash=hash_secret(secret),
            abilities=[ability.value for ability in abilities],
            created_at=now,
            expires_at=now + (ttl or self.ttl),
        )
        record = await self.tokens.create(record)

        return f"{record.id}{TOKEN_SEPARATOR}{secret}", record

    async def lookup(self, presented: str) -> Optional[AccessToken]:
        """Resolve a presented token to its record, whatever its state."""
        if not presented:
            return None

        if TOKEN_SEPARATOR not in presented:
            return await self.tokens.get_by_token_hash(hash_secret(presented))

        token_id, secret = presented.split(TOKEN_SEPARATOR, 1)
        try:
            record = await self.tokens.get_by_id(UUID(token_id))
        except ValueError:
            return None

        if record is None or not secret_matches(secret, record.token_hash):
            return None
        return record

    async def revoke(self, token_id: UUID) -> bool:
        return await self.tokens.revoke_by_id(token_id, utc_now())

    async def revoke_all(self, user_id: UUID) -> int:
        return await self.tokens.revoke_all_by_user_id(user_id, utc_now())

    @staticmethod
    def is_valid(record: Optional[AccessToken], now: Optional[datetime] = None) -> bool:
        if record is None:
            return False
        return record.is_valid(now or utc_now())
