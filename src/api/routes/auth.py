from datetime import datetime

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.routes.validators import confirmed
from src.api.utils.envelope import Envelope, ok
from src.api.utils.rate_limit import rate_limit
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthenticatedPrincipal,
    ClientInfo,
    IssuedTokenResponse,
    IssueTokenUseCase,
    LoginResponse,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
    TokenInfo,
    UserInfo,
)
from src.depends import (
    ACCESS_TOKEN_TTL,
    get_client_info,
    get_current_principal,
    get_password_hasher,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    Password strength is enforced by the use case.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., max_length=255, description="User email address")
    password: str = Field(..., description="User password")
    password_confirmation: str = Field(..., description="Must equal password")

    @field_validator("password_confirmation")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        return confirmed(value, info)


class RegisterResponse(BaseModel):
    user: UserInfo
    token: str
    token_type: str = "Bearer"
    expires_at: datetime


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[RegisterResponse],
    dependencies=[Depends(rate_limit("auth"))],
)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: IPasswordHasher = Depends(get_password_hasher),
):
    """
    User Registration

    Creates the account and returns its first bearer token.

    Raises:
        - 409 Conflict: Email already exists
        - 422 Unprocessable Entity: Invalid input or weak password
    """
    command = RegisterCommand(
        name=request.name, email=request.email, password=request.password
    )

    result = await RegisterUseCase(uow, hasher).execute(command)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        if error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        raise ServerError(error)

    user = result.value
    token_result = await IssueTokenUseCase(uow, ACCESS_TOKEN_TTL).execute(user.id)
    if token_result.is_err():
        raise ServerError(token_result.error)

    issued = token_result.value
    return ok(
        RegisterResponse(user=user, token=issued.token, expires_at=issued.expires_at),
        "User registered successfully",
    )


class LoginRequest(BaseModel):
    """
    Login HTTP request payload
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=Envelope[LoginResponse],
    dependencies=[Depends(rate_limit("auth"))],
)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: IPasswordHasher = Depends(get_password_hasher),
    client: ClientInfo = Depends(get_client_info),
):
    """
    User Login

    Raises:
        - 401 Unauthorized: Invalid credentials (same for unknown email)
        - 429 Too Many Requests: Rate limited
    """
    use_case = LoginUseCase(
        uow,
        hasher,
        token_ttl=ACCESS_TOKEN_TTL,
        single_session=ApplicationConfig.SINGLE_SESSION_LOGIN,
    )
    result = await use_case.execute(request.email, request.password, client)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return ok(result.value, "Login successful")


@router.post("/logout", response_model=Envelope[LogoutResponse])
async def logout(
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Revoke the token that made this request"""
    result = await LogoutUseCase(uow).logout(principal.user.id, principal.token.id)
    if result.is_err():
        raise ServerError(result.error)
    return ok(result.value, result.value.message)


@router.post("/logout-all", response_model=Envelope[LogoutResponse])
async def logout_all(
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Revoke every token of the authenticated user"""
    result = await LogoutUseCase(uow).logout_all(principal.user.id)
    if result.is_err():
        raise ServerError(result.error)
    return ok(result.value, result.value.message)


@router.post("/refresh", response_model=Envelope[IssuedTokenResponse])
async def refresh(
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Refresh Token

    Revokes the presented token and returns a new one.

    Raises:
        - 401 Unauthorized: Token invalid or already rotated
    """
    use_case = RefreshTokenUseCase(uow, token_ttl=ACCESS_TOKEN_TTL)
    result = await use_case.execute(principal.user.id, principal.token.id)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_TOKEN", "TOKEN_REVOKED"):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return ok(result.value, "Token refreshed successfully")


class UserPayload(BaseModel):
    user: UserInfo


class TokenValidationPayload(BaseModel):
    user: UserInfo
    token: TokenInfo


@router.get("/me", response_model=Envelope[UserPayload])
async def me(principal: AuthenticatedPrincipal = Depends(get_current_principal)):
    return ok(UserPayload(user=principal.user), "User retrieved successfully")


@router.get(
    "/validate",
    response_model=Envelope[TokenValidationPayload],
    dependencies=[Depends(rate_limit("token_validation"))],
)
async def validate(principal: AuthenticatedPrincipal = Depends(get_current_principal)):
    """
    Token Validation

    For other services: confirms a bearer token and describes its owner.
    """
    return ok(
        TokenValidationPayload(user=principal.user, token=principal.token),
        "Token is valid",
    )


@router.get(
    "/user",
    response_model=Envelope[UserPayload],
    dependencies=[Depends(rate_limit("token_validation"))],
)
async def user(principal: AuthenticatedPrincipal = Depends(get_current_principal)):
    return ok(UserPayload(user=principal.user), "User retrieved successfully")
