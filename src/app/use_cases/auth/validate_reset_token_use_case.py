from src.libs.result import Result, Return
from src.app.services.reset_ticket_store import PasswordResetTicketStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email


class ValidateResetTokenUseCase:
    """Checks a reset token without consuming it. Uses the same matching rule as redemption."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, token: str) -> Result[bool]:
        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))
            if user is None:
                return Return.ok(False)

            store = PasswordResetTicketStore(self.uow.password_reset_tickets)
            ticket = await store.find_valid(user.email, token)

        return Return.ok(ticket is not None)
