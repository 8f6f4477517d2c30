from datetime import timedelta

import pytest

from src.app.services.token_hashing import hash_secret
from src.app.use_cases.auth import ClientInfo, LoginUseCase
from src.domain.base import utc_now


@pytest.mark.asyncio
async def test_successful_login(mock_uow, hasher, user):
    """Correct credentials mint a 24h full-ability token"""
    mock_uow.users.get_by_email.return_value = user

    client = ClientInfo(ip_address="10.0.0.1", user_agent="pytest")
    result = await LoginUseCase(mock_uow, hasher).execute(
        "jane@example.com", "SecurePass123!", client
    )

    assert result.is_ok()
    data = result.value
    assert data.user.email == "jane@example.com"
    assert data.token_type == "Bearer"

    token_id, secret = data.token.split("|", 1)
    record = mock_uow.access_tokens.create.call_args.args[0]
    assert token_id == str(record.id)
    assert record.token_hash == hash_secret(secret)
    assert record.abilities == ["*"]
    assert record.user_id == user.id
    assert timedelta(hours=23, minutes=59) < record.expires_at - utc_now() <= timedelta(hours=24)

    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.action == "login_succeeded"
    assert audit.success is True
    assert audit.ip_address == "10.0.0.1"
    assert audit.user_agent == "pytest"

    mock_uow.access_tokens.revoke_all_by_user_id.assert_not_called()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_login_wrong_password_issues_no_token(mock_uow, hasher, user):
    mock_uow.users.get_by_email.return_value = user

    result = await LoginUseCase(mock_uow, hasher).execute("jane@example.com", "WrongPass123!")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.access_tokens.create.assert_not_called()

    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.action == "login_failed"
    assert audit.success is False
    assert audit.failure_reason == "invalid_password"
    assert audit.user_id == user.id


@pytest.mark.asyncio
async def test_login_unknown_email_matches_wrong_password(mock_uow, hasher):
    """Unknown email gets the same error and still pays for a hash check"""
    mock_uow.users.get_by_email.return_value = None
    calls = []
    original = hasher.dummy_verify
    hasher.dummy_verify = lambda password: calls.append(password) or original(password)

    result = await LoginUseCase(mock_uow, hasher).execute("ghost@example.com", "SecurePass123!")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    assert result.error.message == "Invalid email or password"
    assert calls == ["SecurePass123!"]
    mock_uow.access_tokens.create.assert_not_called()

    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.user_id is None
    assert audit.email == "ghost@example.com"
    assert audit.failure_reason == "unknown_email"


@pytest.mark.asyncio
async def test_login_keeps_previous_tokens_by_default(mock_uow, hasher, user):
    mock_uow.users.get_by_email.return_value = user

    await LoginUseCase(mock_uow, hasher).execute("jane@example.com", "SecurePass123!")
    await LoginUseCase(mock_uow, hasher).execute("jane@example.com", "SecurePass123!")

    assert mock_uow.access_tokens.create.call_count == 2
    mock_uow.access_tokens.revoke_all_by_user_id.assert_not_called()


@pytest.mark.asyncio
async def test_single_session_login_revokes_previous_tokens(mock_uow, hasher, user):
    mock_uow.users.get_by_email.return_value = user
    mock_uow.access_tokens.revoke_all_by_user_id.return_value = 3

    use_case = LoginUseCase(mock_uow, hasher, single_session=True)
    result = await use_case.execute("jane@example.com", "SecurePass123!")

    assert result.is_ok()
    mock_uow.access_tokens.revoke_all_by_user_id.assert_called_once()
    assert mock_uow.access_tokens.revoke_all_by_user_id.call_args.args[0] == user.id

    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.event_metadata["tokens_revoked"] == 3


@pytest.mark.asyncio
async def test_login_uses_configured_ttl(mock_uow, hasher, user):
    mock_uow.users.get_by_email.return_value = user

    result = await LoginUseCase(mock_uow, hasher, token_ttl=timedelta(hours=1)).execute(
        "jane@example.com", "SecurePass123!"
    )

    assert result.value.expires_at - utc_now() <= timedelta(hours=1)


@pytest.mark.asyncio
async def test_login_looks_up_lowercased_email(mock_uow, hasher, user):
    mock_uow.users.get_by_email.return_value = user

    result = await LoginUseCase(mock_uow, hasher).execute("JANE@Example.com", "SecurePass123!")

    assert result.is_ok()
    mock_uow.users.get_by_email.assert_called_once_with("jane@example.com")
