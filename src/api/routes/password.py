from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

from src.api.error import ClientError, ServerError
from src.api.routes.validators import confirmed
from src.api.utils.envelope import Envelope, ok
from src.api.utils.rate_limit import rate_limit
from src.app.services.notification import INotificationDispatcher
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    ClientInfo,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    ResetPasswordResponse,
    ResetPasswordUseCase,
    ValidateResetTokenUseCase,
)
from src.depends import (
    PASSWORD_RESET_TTL,
    get_client_info,
    get_background_notifier,
    get_password_hasher,
    get_unit_of_work,
)
from src.libs.result import Error

router = APIRouter(prefix="/auth/password", tags=["Password Reset"])


class ForgotPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email address")


@router.post(
    "/forgot",
    response_model=Envelope[RequestPasswordResetResponse],
    dependencies=[Depends(rate_limit("auth"))],
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationDispatcher = Depends(get_background_notifier),
    client: ClientInfo = Depends(get_client_info),
):
    """
    Request Password Reset

    Always answers the same way so callers cannot tell which emails exist.
    Mail is sent from a background task after the response.
    """
    use_case = RequestPasswordResetUseCase(uow, notifier, ticket_ttl=PASSWORD_RESET_TTL)
    result = await use_case.execute(request.email, client)

    if result.is_err():
        raise ServerError(result.error)

    return ok(result.value, result.value.message)


class ValidateResetTokenRequest(BaseModel):
    email: EmailStr
    token: str = Field(..., min_length=1)


class ValidateResetTokenPayload(BaseModel):
    valid: bool


@router.post(
    "/validate-token",
    response_model=Envelope[ValidateResetTokenPayload],
    dependencies=[Depends(rate_limit("password_validate"))],
)
async def validate_reset_token(
    request: ValidateResetTokenRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Check a reset token without consuming it.

    Raises:
        - 400 Bad Request: Token unknown, expired or for another email
    """
    result = await ValidateResetTokenUseCase(uow).execute(request.email, request.token)
    if result.is_err():
        raise ServerError(result.error)

    if not result.value:
        raise ClientError(
            Error("INVALID_TOKEN", "This password reset token is invalid or has expired"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    return ok(ValidateResetTokenPayload(valid=True), "Token is valid")


class ResetPasswordRequest(BaseModel):
    email: EmailStr
    token: str = Field(..., min_length=1)
    password: str
    password_confirmation: str

    @field_validator("password_confirmation")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        return confirmed(value, info)


@router.post(
    "/reset",
    response_model=Envelope[ResetPasswordResponse],
    dependencies=[Depends(rate_limit("auth"))],
)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: IPasswordHasher = Depends(get_password_hasher),
    client: ClientInfo = Depends(get_client_info),
):
    """
    Reset Password

    Consumes the reset token, sets the new password and signs the user out
    everywhere.

    Raises:
        - 400 Bad Request: Invalid, expired or already used token
        - 422 Unprocessable Entity: Weak password or confirmation mismatch
    """
    use_case = ResetPasswordUseCase(uow, hasher)
    result = await use_case.execute(request.email, request.token, request.password, client)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_TOKEN":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        raise ServerError(error)

    return ok(result.value, result.value.message)
