import logging

from src.libs.result import Error, Result, Return
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import DuplicateEmailError, normalize_email
from src.domain.entities import AuditAction, AuditEvent, User
from src.domain.password_policy import password_violations
from .dtos import RegisterCommand, UserInfo

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[UserInfo]

    Business Logic:
    1. Enforce the password policy
    2. Hash password with bcrypt
    3. Insert the user; the unique index on email decides duplicates,
       so two concurrent registrations cannot both succeed
    4. Create AuditEvent with action=register
    5. Commit transaction atomically

    The caller mints the first access token separately (IssueTokenUseCase).
    """

    def __init__(self, uow: UnitOfWork, hasher: IPasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def execute(self, command: RegisterCommand) -> Result[UserInfo]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with validated name, email, password

        Returns:
            Result[UserInfo] for the created user,
            Error(INVALID_PASSWORD) if the password breaks the policy,
            or Error(EMAIL_ALREADY_EXISTS) if email exists
        """
        violations = password_violations(command.password)
        if violations:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    "Password does not meet the requirements",
                    {"password": violations},
                )
            )

        async with self.uow:
            user = User(
                name=command.name,
                email=normalize_email(command.email),
                password_hash=self.hasher.hash(command.password),
            )

            try:
                user = await self.uow.users.create(user)
            except DuplicateEmailError:
                logger.info(f"Registration rejected, email already registered: {user.email}")
                return Return.err(
                    Error(
                        "EMAIL_ALREADY_EXISTS",
                        "Email already registered",
                        {"email": ["The email has already been taken."]},
                    )
                )

            audit_event = AuditEvent(
                user_id=user.id,
                email=user.email,
                action=AuditAction.register.value,
                success=True,
            )
            await self.uow.audit_events.create(audit_event)

            user_info = UserInfo.from_entity(user)

            await self.uow.commit()

        logger.info(f"New user registered: {user_info.id}")
        return Return.ok(user_info)
