from datetime import timedelta
from uuid import uuid4

import pytest

from src.app.services.token_hashing import hash_secret
from src.app.use_cases.auth import (
    AuthenticateTokenUseCase,
    IssueTokenUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
)
from src.domain.base import utc_now
from src.domain.entities import AccessToken


def make_token(user_id, secret="s3cret", **overrides):
    now = utc_now()
    values = dict(
        id=uuid4(),
        user_id=user_id,
        token_hash=hash_secret(secret),
        abilities=["*"],
        created_at=now,
        expires_at=now + timedelta(hours=24),
        revoked=False,
    )
    values.update(overrides)
    return AccessToken(**values)


# ============================================================================
# Issue
# ============================================================================


@pytest.mark.asyncio
async def test_issue_token_for_existing_user(mock_uow, user):
    mock_uow.users.get_by_id.return_value = user

    result = await IssueTokenUseCase(mock_uow).execute(user.id)

    assert result.is_ok()
    assert result.value.token_type == "Bearer"
    mock_uow.access_tokens.create.assert_called_once()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_issue_token_for_missing_user(mock_uow):
    result = await IssueTokenUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"
    mock_uow.access_tokens.create.assert_not_called()


# ============================================================================
# Authenticate
# ============================================================================


@pytest.mark.asyncio
async def test_authenticate_valid_token_touches_last_used(mock_uow, user):
    token = make_token(user.id)
    mock_uow.access_tokens.get_by_id.return_value = token
    mock_uow.users.get_by_id.return_value = user

    result = await AuthenticateTokenUseCase(mock_uow).execute(f"{token.id}|s3cret")

    assert result.is_ok()
    assert result.value.user.id == user.id
    assert result.value.token.id == token.id
    assert result.value.token.last_used_at is not None
    mock_uow.access_tokens.touch.assert_called_once()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_authenticate_bare_secret_is_looked_up_by_digest(mock_uow, user):
    token = make_token(user.id)
    mock_uow.access_tokens.get_by_token_hash.return_value = token
    mock_uow.users.get_by_id.return_value = user

    result = await AuthenticateTokenUseCase(mock_uow).execute("s3cret")

    assert result.is_ok()
    mock_uow.access_tokens.get_by_token_hash.assert_called_once_with(hash_secret("s3cret"))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"revoked": True},
        {"expires_at": utc_now() - timedelta(seconds=1)},
    ],
)
async def test_authenticate_rejects_revoked_or_expired(mock_uow, user, overrides):
    token = make_token(user.id, **overrides)
    mock_uow.access_tokens.get_by_id.return_value = token
    mock_uow.users.get_by_id.return_value = user

    result = await AuthenticateTokenUseCase(mock_uow).execute(f"{token.id}|s3cret")

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"
    mock_uow.access_tokens.touch.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("presented", ["", "not-a-uuid|secret", "garbage"])
async def test_authenticate_rejects_malformed_tokens(mock_uow, presented):
    result = await AuthenticateTokenUseCase(mock_uow).execute(presented)

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_authenticate_rejects_wrong_secret(mock_uow, user):
    token = make_token(user.id)
    mock_uow.access_tokens.get_by_id.return_value = token
    mock_uow.users.get_by_id.return_value = user

    result = await AuthenticateTokenUseCase(mock_uow).execute(f"{token.id}|guess")

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"


# ============================================================================
# Logout
# ============================================================================


@pytest.mark.asyncio
async def test_logout_revokes_only_presented_token(mock_uow, user):
    token = make_token(user.id)
    mock_uow.access_tokens.get_by_id.return_value = token

    result = await LogoutUseCase(mock_uow).logout(user.id, token.id)

    assert result.is_ok()
    assert result.value.revoked_count == 1
    mock_uow.access_tokens.revoke_by_id.assert_called_once()
    assert mock_uow.access_tokens.revoke_by_id.call_args.args[0] == token.id
    mock_uow.access_tokens.revoke_all_by_user_id.assert_not_called()


@pytest.mark.asyncio
async def test_logout_is_idempotent(mock_uow, user):
    token = make_token(user.id, revoked=True)
    mock_uow.access_tokens.get_by_id.return_value = token
    mock_uow.access_tokens.revoke_by_id.return_value = False

    result = await LogoutUseCase(mock_uow).logout(user.id, token.id)

    assert result.is_ok()
    assert result.value.revoked_count == 0


@pytest.mark.asyncio
async def test_logout_ignores_tokens_of_other_users(mock_uow, user):
    token = make_token(uuid4())
    mock_uow.access_tokens.get_by_id.return_value = token

    result = await LogoutUseCase(mock_uow).logout(user.id, token.id)

    assert result.is_ok()
    assert result.value.revoked_count == 0
    mock_uow.access_tokens.revoke_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_logout_all_reports_count(mock_uow, user):
    mock_uow.access_tokens.revoke_all_by_user_id.return_value = 4

    result = await LogoutUseCase(mock_uow).logout_all(user.id)

    assert result.is_ok()
    assert result.value.revoked_count == 4
    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.action == "logout_all"


# ============================================================================
# Refresh
# ============================================================================


@pytest.mark.asyncio
async def test_refresh_rotates_token(mock_uow, user):
    # Old token is part-way through its life
    token = make_token(
        user.id,
        name="mobile",
        abilities=["profile:read"],
        expires_at=utc_now() + timedelta(hours=3),
    )
    mock_uow.access_tokens.get_by_id.return_value = token

    result = await RefreshTokenUseCase(mock_uow).execute(user.id, token.id)

    assert result.is_ok()
    new_id, _ = result.value.token.split("|", 1)
    assert new_id != str(token.id)

    mock_uow.access_tokens.revoke_by_id.assert_called_once()
    created = mock_uow.access_tokens.create.call_args.args[0]
    assert created.name == "mobile"
    assert created.abilities == ["profile:read"]
    assert created.expires_at > token.expires_at
    assert timedelta(hours=23, minutes=59) < created.expires_at - utc_now() <= timedelta(hours=24)
    assert result.value.expires_at == created.expires_at
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_refresh_loser_mints_nothing(mock_uow, user):
    """A concurrent refresh already revoked the token"""
    token = make_token(user.id)
    mock_uow.access_tokens.get_by_id.return_value = token
    mock_uow.access_tokens.revoke_by_id.return_value = False

    result = await RefreshTokenUseCase(mock_uow).execute(user.id, token.id)

    assert result.is_err()
    assert result.error.code == "TOKEN_REVOKED"
    mock_uow.access_tokens.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_rejects_foreign_token(mock_uow, user):
    token = make_token(uuid4())
    mock_uow.access_tokens.get_by_id.return_value = token

    result = await RefreshTokenUseCase(mock_uow).execute(user.id, token.id)

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"
    mock_uow.access_tokens.revoke_by_id.assert_not_called()
