from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

from src.api.error import ClientError, ServerError
from src.api.routes.validators import confirmed
from src.api.utils.envelope import Envelope, ok
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import AuthenticatedPrincipal, UserInfo
from src.app.use_cases.profile import (
    ChangePasswordResponse,
    ChangePasswordUseCase,
    UpdateProfileCommand,
    UpdateProfileUseCase,
)
from src.depends import get_password_hasher, get_unit_of_work, require_ability
from src.domain.entities import TokenAbility

router = APIRouter(prefix="/auth", tags=["Profile"])


class UpdateProfileRequest(BaseModel):
    """Only the fields present are changed"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = Field(None, max_length=255)


class ProfilePayload(BaseModel):
    user: UserInfo


@router.put("/profile", response_model=Envelope[ProfilePayload])
async def update_profile(
    request: UpdateProfileRequest,
    principal: AuthenticatedPrincipal = Depends(require_ability(TokenAbility.profile_write)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Profile

    Raises:
        - 409 Conflict: Email belongs to another account
    """
    command = UpdateProfileCommand(name=request.name, email=request.email)
    result = await UpdateProfileUseCase(uow).execute(principal.user.id, command)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return ok(ProfilePayload(user=result.value), "Profile updated successfully")


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    password: str
    password_confirmation: str

    @field_validator("password_confirmation")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        return confirmed(value, info)


@router.post("/password/change", response_model=Envelope[ChangePasswordResponse])
async def change_password(
    request: ChangePasswordRequest,
    principal: AuthenticatedPrincipal = Depends(require_ability(TokenAbility.profile_write)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: IPasswordHasher = Depends(get_password_hasher),
):
    """
    Change Password

    Every token of the user is revoked on success, including this one.

    Raises:
        - 400 Bad Request: Wrong current password or unchanged password
        - 422 Unprocessable Entity: Weak password or confirmation mismatch
    """
    use_case = ChangePasswordUseCase(uow, hasher)
    result = await use_case.execute(
        principal.user.id, request.current_password, request.password
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_CURRENT_PASSWORD", "PASSWORD_UNCHANGED"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        raise ServerError(error)

    return ok(result.value, result.value.message)
