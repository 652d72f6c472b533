"""Unit tests for password hashing, reset secrets and the token issuer."""
import base64
import json
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from core.errors import TokenExpiredError, TokenMalformedError, TokenSignatureError
from core.security import (
    TokenIssuer,
    generate_reset_secret,
    hash_password,
    hash_reset_secret,
    verify_password,
)

KEY = "unit-test-signing-key-0123456789abcdef0123456789"


def _forge_user_id(token: str, user_id: int) -> str:
    """Swap the payload of a signed token, keeping the original signature."""
    header, payload, signature = token.split(".")
    claims = json.loads(base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)))
    claims["user_id"] = user_id
    forged = base64.urlsafe_b64encode(json.dumps(claims).encode()).rstrip(b"=").decode()
    return ".".join([header, forged, signature])


# -- passwords -------------------------------------------------------------


def test_password_hash_verifies_only_the_original_plaintext():
    stored = hash_password("hunter2")

    assert stored != "hunter2"
    assert verify_password("hunter2", stored)
    assert not verify_password("hunter3", stored)


def test_password_hash_is_salted():
    assert hash_password("hunter2") != hash_password("hunter2")


def test_corrupt_stored_hash_does_not_verify():
    assert not verify_password("hunter2", "not-a-passlib-hash")


# -- reset secrets ---------------------------------------------------------


def test_reset_secret_is_random_and_digest_is_deterministic():
    secret, digest = generate_reset_secret()
    other_secret, _ = generate_reset_secret()

    assert len(secret) == 40
    assert secret != other_secret
    assert digest == hash_reset_secret(secret)
    assert digest != secret


# -- tokens ----------------------------------------------------------------


def test_issue_then_verify_returns_user_id():
    issuer = TokenIssuer(KEY)

    assert issuer.verify(issuer.issue(42)) == 42


def test_token_outside_validity_window_is_expired():
    issuer = TokenIssuer(KEY)
    token = issuer.issue(42, now=datetime.now(timezone.utc) - timedelta(days=31))

    with pytest.raises(TokenExpiredError):
        issuer.verify(token)


def test_token_inside_validity_window_is_accepted():
    issuer = TokenIssuer(KEY)
    token = issuer.issue(42, now=datetime.now(timezone.utc) - timedelta(days=29))

    assert issuer.verify(token) == 42


def test_tampered_payload_fails_signature_check():
    issuer = TokenIssuer(KEY)

    with pytest.raises(TokenSignatureError):
        issuer.verify(_forge_user_id(issuer.issue(42), 1))


def test_token_signed_with_another_key_fails_signature_check():
    token = TokenIssuer("another-signing-key-0123456789abcdef0123456789").issue(42)

    with pytest.raises(TokenSignatureError):
        TokenIssuer(KEY).verify(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_undecodable_token_is_malformed(token):
    with pytest.raises(TokenMalformedError):
        TokenIssuer(KEY).verify(token)


def test_token_without_user_id_is_malformed():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "42", "iat": now, "exp": now + timedelta(days=1)}, KEY, algorithm="HS256"
    )

    with pytest.raises(TokenMalformedError):
        TokenIssuer(KEY).verify(token)


def test_issuer_requires_a_signing_key():
    with pytest.raises(ValueError):
        TokenIssuer("")
