from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from signature_studio.core.errors import TokenInvalidError
from signature_studio.core.security import AccessTokenClaims, RefreshTokenClaims, TokenService
from signature_studio.modules.users.models import Role

ACCESS_SECRET = "unit-access-secret"
REFRESH_SECRET = "unit-refresh-secret"


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(access_secret=ACCESS_SECRET, refresh_secret=REFRESH_SECRET)


@pytest.fixture
def claims() -> AccessTokenClaims:
    return AccessTokenClaims(user_id="user-1", tenant_id="tenant-1", email="ada@acme.com", role=Role.ADMIN)


def test_access_token_round_trip(tokens, claims):
    assert tokens.verify_access_token(tokens.issue_access_token(claims)) == claims


def test_refresh_token_round_trip(tokens):
    claims = RefreshTokenClaims(user_id="user-1", token_version=3)
    assert tokens.verify_refresh_token(tokens.issue_refresh_token(claims)) == claims


def test_access_payload_layout(tokens, claims):
    issued_at = datetime(2026, 1, 1, tzinfo=timezone.utc)
    token = tokens.issue_access_token(claims, issued_at=issued_at)
    payload = jwt.get_unverified_claims(token)
    assert payload["sub"] == "user-1"
    assert payload["tenantId"] == "tenant-1"
    assert payload["email"] == "ada@acme.com"
    assert payload["role"] == "admin"
    assert payload["type"] == "access"
    assert payload["exp"] - payload["iat"] == 15 * 60


def test_refresh_payload_carries_version_only(tokens):
    token = tokens.issue_refresh_token(RefreshTokenClaims(user_id="user-1", token_version=0))
    payload = jwt.get_unverified_claims(token)
    assert payload["tokenVersion"] == 0
    assert payload["type"] == "refresh"
    assert "tenantId" not in payload
    assert payload["exp"] - payload["iat"] == 7 * 24 * 60 * 60


def test_same_claims_and_time_give_same_token(tokens, claims):
    issued_at = datetime(2026, 1, 1, tzinfo=timezone.utc)
    first = tokens.issue_access_token(claims, issued_at=issued_at)
    second = tokens.issue_access_token(claims, issued_at=issued_at)
    assert first == second


def test_tokens_are_not_interchangeable(tokens, claims):
    access = tokens.issue_access_token(claims)
    refresh = tokens.issue_refresh_token(RefreshTokenClaims(user_id="user-1", token_version=0))
    with pytest.raises(TokenInvalidError):
        tokens.verify_refresh_token(access)
    with pytest.raises(TokenInvalidError):
        tokens.verify_access_token(refresh)


def test_type_claim_is_checked_even_with_shared_secret(claims):
    shared = TokenService(access_secret="same-secret", refresh_secret="same-secret")
    refresh = shared.issue_refresh_token(RefreshTokenClaims(user_id="user-1", token_version=0))
    with pytest.raises(TokenInvalidError):
        shared.verify_access_token(refresh)


def test_expired_access_token_is_rejected(tokens, claims):
    issued_at = datetime.now(timezone.utc) - timedelta(hours=1)
    token = tokens.issue_access_token(claims, issued_at=issued_at)
    with pytest.raises(TokenInvalidError):
        tokens.verify_access_token(token)


def test_expired_refresh_token_is_rejected(tokens):
    issued_at = datetime.now(timezone.utc) - timedelta(days=8)
    token = tokens.issue_refresh_token(RefreshTokenClaims(user_id="user-1", token_version=0), issued_at=issued_at)
    with pytest.raises(TokenInvalidError):
        tokens.verify_refresh_token(token)


def test_tampered_signature_is_rejected(tokens, claims):
    token = tokens.issue_access_token(claims)
    header, payload, signature = token.split(".")
    middle = len(signature) // 2
    flipped = "A" if signature[middle] != "A" else "B"
    tampered = ".".join([header, payload, signature[:middle] + flipped + signature[middle + 1 :]])
    with pytest.raises(TokenInvalidError):
        tokens.verify_access_token(tampered)


def test_token_signed_with_other_secret_is_rejected(claims):
    issuer = TokenService(access_secret="someone-else", refresh_secret=REFRESH_SECRET)
    verifier = TokenService(access_secret=ACCESS_SECRET, refresh_secret=REFRESH_SECRET)
    with pytest.raises(TokenInvalidError):
        verifier.verify_access_token(issuer.issue_access_token(claims))


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
def test_garbage_is_rejected(tokens, token):
    with pytest.raises(TokenInvalidError):
        tokens.verify_access_token(token)


def test_missing_claim_is_rejected(tokens):
    token = jwt.encode(
        {"sub": "user-1", "type": "access", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        ACCESS_SECRET,
        algorithm="HS256",
    )
    with pytest.raises(TokenInvalidError):
        tokens.verify_access_token(token)


def test_legacy_user_role_maps_to_member(tokens):
    token = jwt.encode(
        {
            "sub": "user-1",
            "tenantId": "tenant-1",
            "email": "m@acme.com",
            "role": "user",
            "type": "access",
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        },
        ACCESS_SECRET,
        algorithm="HS256",
    )
    assert tokens.verify_access_token(token).role is Role.MEMBER
