"""Tests for JWT issuance and verification."""

import pytest
from datetime import datetime, timedelta, timezone
from bson import ObjectId
from jose import jwt

from common.auth import (
    JWTAuth,
    TokenError,
    MalformedToken,
    InvalidSignature,
    TokenExpired,
)


def test_issued_token_round_trips_claims(token_auth):
    token = token_auth.issue_token({"customer_id": "abc", "email": "a@example.com"})

    claims = token_auth.verify_token(token)

    assert claims["customer_id"] == "abc"
    assert claims["email"] == "a@example.com"
    assert "exp" in claims and "iat" in claims


def test_default_ttl_comes_from_configuration():
    auth = JWTAuth(secret="s", access_token_expire_minutes=7 * 24 * 60)

    claims = auth.verify_token(auth.issue_token({"customer_id": "abc"}))

    assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60


def test_explicit_ttl_overrides_default(token_auth):
    claims = token_auth.verify_token(
        token_auth.issue_token({"customer_id": "abc"}, ttl=timedelta(minutes=2))
    )

    assert claims["exp"] - claims["iat"] == 120


def test_object_id_claims_are_serialized(token_auth):
    object_id = ObjectId()

    claims = token_auth.verify_token(token_auth.issue_token({"customer_id": object_id}))

    assert claims["customer_id"] == str(object_id)


def test_caller_cannot_override_expiry(token_auth):
    past = datetime.now(timezone.utc) - timedelta(days=1)

    claims = token_auth.verify_token(token_auth.issue_token({"customer_id": "abc", "exp": past}))

    assert claims["exp"] > datetime.now(timezone.utc).timestamp()


def test_expired_token_raises_token_expired(token_auth):
    token = token_auth.issue_token({"customer_id": "abc"}, ttl=timedelta(seconds=-10))

    with pytest.raises(TokenExpired):
        token_auth.verify_token(token)


def test_wrong_secret_raises_invalid_signature(token_auth):
    other = JWTAuth(secret="another-secret")
    token = other.issue_token({"customer_id": "abc"})

    with pytest.raises(InvalidSignature):
        token_auth.verify_token(token)


def test_tampered_payload_raises_invalid_signature(token_auth):
    token = token_auth.issue_token({"customer_id": "abc"})
    forged = jwt.encode(
        {"customer_id": "someone-else", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        "guessed-secret",
        algorithm="HS256",
    )
    header, _, signature = token.split(".")
    _, forged_payload, _ = forged.split(".")

    with pytest.raises(InvalidSignature):
        token_auth.verify_token(f"{header}.{forged_payload}.{signature}")


def test_expired_and_forged_token_is_invalid_signature(token_auth):
    other = JWTAuth(secret="another-secret")
    token = other.issue_token({"customer_id": "abc"}, ttl=timedelta(seconds=-10))

    with pytest.raises(InvalidSignature):
        token_auth.verify_token(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "only.two"])
def test_unparseable_token_raises_malformed(token_auth, token):
    with pytest.raises(MalformedToken):
        token_auth.verify_token(token)


def test_failures_share_a_base_class():
    assert issubclass(MalformedToken, TokenError)
    assert issubclass(InvalidSignature, TokenError)
    assert issubclass(TokenExpired, TokenError)
    assert {MalformedToken.reason, InvalidSignature.reason, TokenExpired.reason} == {
        "malformed", "invalid_signature", "expired",
    }


def test_empty_secret_is_rejected():
    with pytest.raises(ValueError):
        JWTAuth(secret="")
