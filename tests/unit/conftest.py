from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.adapter.services.password_hasher import BcryptPasswordHasher
from src.domain.entities import User


def _returns_argument(entity):
    return entity


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=_returns_argument)
    uow.users.update = AsyncMock(side_effect=_returns_argument)

    uow.access_tokens = MagicMock()
    uow.access_tokens.get_by_id = AsyncMock(return_value=None)
    uow.access_tokens.get_by_token_hash = AsyncMock(return_value=None)
    uow.access_tokens.create = AsyncMock(side_effect=_returns_argument)
    uow.access_tokens.touch = AsyncMock()
    uow.access_tokens.revoke_by_id = AsyncMock(return_value=True)
    uow.access_tokens.revoke_all_by_user_id = AsyncMock(return_value=0)

    uow.password_reset_tickets = MagicMock()
    uow.password_reset_tickets.create = AsyncMock(side_effect=_returns_argument)
    uow.password_reset_tickets.get_latest_by_email = AsyncMock(return_value=None)
    uow.password_reset_tickets.delete_by_email = AsyncMock(return_value=0)
    uow.password_reset_tickets.delete_if_matching = AsyncMock(return_value=True)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock(side_effect=_returns_argument)

    return uow


@pytest.fixture
def hasher():
    # Low cost factor keeps the suite fast
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def user(hasher):
    return User(
        id=uuid4(),
        name="Jane Doe",
        email="jane@example.com",
        password_hash=hasher.hash("SecurePass123!"),
    )