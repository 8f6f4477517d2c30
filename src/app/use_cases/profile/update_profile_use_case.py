import logging
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserInfo
from src.domain.base import DuplicateEmailError, normalize_email, utc_now
from src.domain.entities import AuditAction, AuditEvent
from .dtos import UpdateProfileCommand

logger = logging.getLogger(__name__)


def _email_taken(email: str) -> Error:
    return Error(
        "EMAIL_ALREADY_EXISTS",
        "Email already registered",
        {"email": ["The email has already been taken."]},
    )


class UpdateProfileUseCase:
    """
    Update Profile Use Case

    Business Rules:
    - Only supplied fields change
    - Email stays unique across users (own current email is allowed)
    - Access tokens are left untouched
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, command: UpdateProfileCommand) -> Result[UserInfo]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            changed = []
            email = normalize_email(command.email) if command.email is not None else None

            if email is not None and email != user.email:
                existing = await self.uow.users.get_by_email(email)
                if existing is not None and existing.id != user.id:
                    return Return.err(_email_taken(email))
                user.email = email
                changed.append("email")

            if command.name is not None and command.name != user.name:
                user.name = command.name
                changed.append("name")

            if changed:
                user.updated_at = utc_now()
                try:
                    user = await self.uow.users.update(user)
                except DuplicateEmailError:
                    return Return.err(_email_taken(email))

                await self.uow.audit_events.create(
                    AuditEvent(
                        user_id=user.id,
                        email=user.email,
                        action=AuditAction.profile_updated.value,
                        success=True,
                        event_metadata={"fields": changed},
                    )
                )
                await self.uow.commit()
                logger.info(f"Profile updated for user {user.id}: {', '.join(changed)}")

            return Return.ok(UserInfo.from_entity(user))
