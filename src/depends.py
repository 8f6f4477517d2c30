from datetime import timedelta
from typing import Optional

from fastapi import BackgroundTasks, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.notification import (
    BackgroundNotificationDispatcher,
    LoggingNotificationDispatcher,
    SmtpNotificationDispatcher,
)
from src.adapter.services.password_hasher import BcryptPasswordHasher
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.notification import INotificationDispatcher
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import AuthenticateTokenUseCase, AuthenticatedPrincipal, ClientInfo
from src.domain.entities import TokenAbility
from src.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)

ACCESS_TOKEN_TTL = timedelta(hours=ApplicationConfig.ACCESS_TOKEN_TTL_HOURS)
PASSWORD_RESET_TTL = timedelta(minutes=ApplicationConfig.PASSWORD_RESET_TTL_MINUTES)

_password_hasher = BcryptPasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_hasher() -> IPasswordHasher:
    return _password_hasher


def get_notifier() -> INotificationDispatcher:
    if not ApplicationConfig.SMTP_HOST:
        return LoggingNotificationDispatcher(ApplicationConfig.PASSWORD_RESET_URL)
    return SmtpNotificationDispatcher(
        ApplicationConfig.PASSWORD_RESET_URL,
        host=ApplicationConfig.SMTP_HOST,
        port=ApplicationConfig.SMTP_PORT,
        username=ApplicationConfig.SMTP_USER,
        password=ApplicationConfig.SMTP_PASSWORD,
        use_tls=ApplicationConfig.SMTP_USE_TLS,
        from_address=ApplicationConfig.MAIL_FROM_ADDRESS,
        from_name=ApplicationConfig.MAIL_FROM_NAME,
    )


def get_background_notifier(
    background_tasks: BackgroundTasks,
    notifier: INotificationDispatcher = Depends(get_notifier),
) -> INotificationDispatcher:
    """Notifier whose deliveries run after the response has been sent."""
    return BackgroundNotificationDispatcher(notifier, background_tasks)


def get_client_info(request: Request) -> ClientInfo:
    return ClientInfo(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> AuthenticatedPrincipal:
    """
    Dependency resolving the bearer token from the Authorization header.

    Returns:
        AuthenticatedPrincipal with the token owner and the token itself

    Raises:
        ClientError: 401 if the header is missing or the token is invalid,
            revoked or expired
    """
    if credentials is None or not credentials.credentials:
        raise ClientError(
            Error("UNAUTHENTICATED", "Unauthenticated."),
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )

    result = await AuthenticateTokenUseCase(uow).execute(credentials.credentials)
    if result.is_err():
        raise ClientError(
            result.error,
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )

    return result.value


def require_ability(ability: TokenAbility):
    """Dependency factory rejecting tokens that lack the given ability."""

    async def dependency(
        principal: AuthenticatedPrincipal = Depends(get_current_principal),
    ) -> AuthenticatedPrincipal:
        abilities = principal.token.abilities
        if TokenAbility.all.value not in abilities and ability.value not in abilities:
            raise ClientError(
                Error("FORBIDDEN", "This token is not allowed to perform this action."),
                status_code=status.HTTP_403_FORBIDDEN,
            )
        return principal

    return dependency
