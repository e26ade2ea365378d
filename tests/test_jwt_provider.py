from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from conftest import make_settings
from vehicle_tracker.core.enums import Role, TokenType
from vehicle_tracker.core.exceptions import ConfigurationError, InvalidTokenError, TokenExpiredError
from vehicle_tracker.infrastructure.security.jwt_provider import JwtProvider


def _provider(**overrides) -> JwtProvider:
    return JwtProvider(make_settings(**overrides))


def test_access_token_round_trip():
    provider = _provider()
    token = provider.issue_access_token(user_id=7, email="a@example.com", role=Role.ADMIN)

    claims = provider.verify(token, TokenType.ACCESS)

    assert claims.sub == 7
    assert claims.email == "a@example.com"
    assert claims.role is Role.ADMIN
    assert claims.token_type == "access"
    assert claims.expires_at - claims.issued_at == timedelta(minutes=15)


def test_refresh_token_lifetime_is_seven_days():
    provider = _provider()
    token = provider.issue_refresh_token(user_id=1, email="a@example.com", role="USER")

    claims = provider.verify(token, TokenType.REFRESH)

    assert claims.expires_at - claims.issued_at == timedelta(days=7)


def test_tokens_issued_together_are_distinct():
    provider = _provider()
    first = provider.issue_refresh_token(user_id=1, email="a@example.com", role=Role.USER)
    second = provider.issue_refresh_token(user_id=1, email="a@example.com", role=Role.USER)

    assert first != second


def test_refresh_token_is_not_an_access_token():
    provider = _provider()
    refresh = provider.issue_refresh_token(user_id=1, email="a@example.com", role=Role.USER)

    with pytest.raises(InvalidTokenError):
        provider.verify(refresh, TokenType.ACCESS)


def test_same_secret_still_checks_token_type():
    provider = _provider(refresh_token_secret="test-access-secret")
    refresh = provider.issue_refresh_token(user_id=1, email="a@example.com", role=Role.USER)

    with pytest.raises(InvalidTokenError):
        provider.verify(refresh, TokenType.ACCESS)


def test_expired_token_is_distinguished_from_invalid():
    past = datetime.now(tz=timezone.utc) - timedelta(hours=1)
    stale = JwtProvider(make_settings(), clock=lambda: past)
    token = stale.issue_access_token(user_id=1, email="a@example.com", role=Role.USER)

    with pytest.raises(TokenExpiredError):
        _provider().verify(token, TokenType.ACCESS)


def test_tampered_token_is_invalid():
    provider = _provider()
    token = provider.issue_access_token(user_id=1, email="a@example.com", role=Role.USER)

    with pytest.raises(InvalidTokenError):
        provider.verify(token[:-3] + "abc", TokenType.ACCESS)

    with pytest.raises(InvalidTokenError):
        provider.verify("not-a-jwt", TokenType.ACCESS)


def test_token_signed_with_other_secret_is_invalid():
    token = _provider(access_token_secret="other").issue_access_token(
        user_id=1, email="a@example.com", role=Role.USER
    )

    with pytest.raises(InvalidTokenError):
        _provider().verify(token, TokenType.ACCESS)


def test_missing_secret_fails_at_use_not_construction():
    provider = _provider(access_token_secret=None)

    with pytest.raises(ConfigurationError) as exc:
        provider.issue_access_token(user_id=1, email="a@example.com", role=Role.USER)

    assert exc.value.status_code == 500
    assert "ACCESS_TOKEN_SECRET" in exc.value.error

    # the other token type is unaffected
    provider.issue_refresh_token(user_id=1, email="a@example.com", role=Role.USER)
