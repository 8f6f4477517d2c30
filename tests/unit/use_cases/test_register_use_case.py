import pytest

from src.app.use_cases.auth import RegisterCommand, RegisterUseCase
from src.domain.base import DuplicateEmailError


@pytest.mark.asyncio
async def test_register_creates_user_with_hashed_password(mock_uow, hasher):
    command = RegisterCommand(name="Jane Doe", email="jane@example.com", password="SecurePass123!")

    result = await RegisterUseCase(mock_uow, hasher).execute(command)

    assert result.is_ok()
    assert result.value.email == "jane@example.com"
    assert result.value.name == "Jane Doe"

    created = mock_uow.users.create.call_args.args[0]
    assert created.password_hash != "SecurePass123!"
    assert hasher.verify("SecurePass123!", created.password_hash)

    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.action == "register"
    assert audit.user_id == created.id
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_register_stores_lowercased_email(mock_uow, hasher):
    command = RegisterCommand(name="Jane Doe", email=" Jane@Example.COM", password="SecurePass123!")

    result = await RegisterUseCase(mock_uow, hasher).execute(command)

    assert result.is_ok()
    created = mock_uow.users.create.call_args.args[0]
    assert created.email == "jane@example.com"
    assert result.value.email == "jane@example.com"


@pytest.mark.asyncio
async def test_register_duplicate_email(mock_uow, hasher):
    """The unique constraint is the arbiter; the use case maps it to a conflict"""
    mock_uow.users.create.side_effect = DuplicateEmailError("jane@example.com")
    command = RegisterCommand(name="Jane Doe", email="jane@example.com", password="SecurePass123!")

    result = await RegisterUseCase(mock_uow, hasher).execute(command)

    assert result.is_err()
    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    assert "email" in result.error.details
    mock_uow.audit_events.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "password",
    ["short1!", "alllowercase1!", "ALLUPPERCASE1!", "NoDigitsHere!", "NoSymbols123"],
)
async def test_register_rejects_weak_password(mock_uow, hasher, password):
    command = RegisterCommand(name="Jane Doe", email="jane@example.com", password=password)

    result = await RegisterUseCase(mock_uow, hasher).execute(command)

    assert result.is_err()
    assert result.error.code == "INVALID_PASSWORD"
    assert result.error.details["password"]
    mock_uow.users.create.assert_not_called()
