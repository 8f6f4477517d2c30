"""
Login Use Case

Handles credential verification and bearer token issuance.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.token_issuer import DEFAULT_TOKEN_TTL, AccessTokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.domain.entities import AuditAction, AuditEvent
from .dtos import ClientInfo, LoginResponse, UserInfo

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Unknown email and wrong password are indistinguishable (same error,
      same hashing cost)
    - A successful login mints a 24h token with all abilities
    - Earlier tokens stay valid unless single_session is enabled
    - Every attempt, failed or not, is written to the audit log
    - No lockout here; attempts are throttled at the API layer
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: IPasswordHasher,
        token_ttl: timedelta = DEFAULT_TOKEN_TTL,
        single_session: bool = False,
    ):
        self.uow = uow
        self.hasher = hasher
        self.token_ttl = token_ttl
        self.single_session = single_session

    async def execute(
        self, email: str, password: str, client: Optional[ClientInfo] = None
    ) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password
            client: Request origin for the audit log

        Returns:
            Result with LoginResponse containing the plaintext token, or
            Error(INVALID_CREDENTIALS)
        """
        client = client or ClientInfo()
        email = normalize_email(email)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                # Hash anyway so response time does not reveal unknown emails
                self.hasher.dummy_verify(password)
                return await self._reject(email, None, "unknown_email", client)

            if not self.hasher.verify(password, user.password_hash):
                return await self._reject(email, user.id, "invalid_password", client)

            issuer = AccessTokenIssuer(self.uow.access_tokens, self.token_ttl)

            revoked_count = 0
            if self.single_session:
                revoked_count = await issuer.revoke_all(user.id)

            plaintext, token = await issuer.issue(user.id)

            audit = AuditEvent(
                user_id=user.id,
                email=email,
                action=AuditAction.login_succeeded.value,
                success=True,
                ip_address=client.ip_address,
                user_agent=client.user_agent,
                event_metadata={
                    "token_id": str(token.id),
                    "tokens_revoked": revoked_count,
                },
            )
            await self.uow.audit_events.create(audit)

            response = LoginResponse(
                user=UserInfo.from_entity(user),
                token=plaintext,
                expires_at=token.expires_at,
            )

            await self.uow.commit()

        logger.info(f"Login succeeded for user {user.id}")
        return Return.ok(response)

    async def _reject(
        self, email: str, user_id: Optional[UUID], reason: str, client: ClientInfo
    ) -> Result[LoginResponse]:
        audit = AuditEvent(
            user_id=user_id,
            email=email,
            action=AuditAction.login_failed.value,
            success=False,
            failure_reason=reason,
            ip_address=client.ip_address,
            user_agent=client.user_agent,
        )
        await self.uow.audit_events.create(audit)
        await self.uow.commit()

        logger.warning(f"Login failed for {email}: {reason}")
        return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))
