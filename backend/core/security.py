# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Central security module.  All cryptographic primitives live here.  No other
module should touch raw crypto directly.

Responsibilities
----------------
1. Password hashing / verification          (passlib pbkdf2_sha256)
2. Password-reset secrets                   (secrets + SHA-256 digest)
3. Bearer token issuing / verification      (PyJWT / HS256)

The FastAPI guards that consume these primitives live in auth/dependencies.py.
"""

import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt as _jwt        # PyJWT
from passlib.hash import pbkdf2_sha256 as _pbkdf2  # pure Python, no binary deps

from core.config import settings
from core.errors import TokenExpiredError, TokenMalformedError, TokenSignatureError

# ---------------------------------------------------------------------------
# 1.  pbkdf2_sha256 – password hashing
# ---------------------------------------------------------------------------
# passlib embeds a per-password random salt and the round count inside the
# hash string ("$pbkdf2-sha256$<rounds>$<salt>$<checksum>"), so verification
# needs nothing but the stored string.
# ---------------------------------------------------------------------------


def hash_password(plain: str) -> str:
    """Hash a plaintext password with PBKDF2-SHA256 using the configured rounds."""
    return _pbkdf2.using(rounds=settings.password_hash_rounds).hash(plain)


def verify_password(plain: str, stored_hash: str) -> bool:
    """
    Constant-time verification of a plaintext password against a hash
    produced by :func:`hash_password`.  A corrupt stored hash verifies as
    False rather than raising.
    """
    try:
        return _pbkdf2.verify(plain, stored_hash)
    except ValueError:
        return False


# ---------------------------------------------------------------------------
# 2.  Password-reset secrets
# ---------------------------------------------------------------------------
# The secret goes to the user by email; only its digest is stored.  Unlike
# the password hash the digest is unsalted so it can be used as a lookup key.
# ---------------------------------------------------------------------------

RESET_SECRET_BYTES = 20


def hash_reset_secret(secret: str) -> str:
    """Return the hex SHA-256 digest stored in place of a reset secret."""
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


def generate_reset_secret() -> tuple[str, str]:
    """
    Mint a fresh reset secret.

    Returns
    -------
    secret : str   40 hex chars (20 random bytes) – delivered, never stored
    digest : str   :func:`hash_reset_secret` of *secret* – stored
    """
    secret = secrets.token_hex(RESET_SECRET_BYTES)
    return secret, hash_reset_secret(secret)


# ---------------------------------------------------------------------------
# 3.  JWT – bearer tokens
# ---------------------------------------------------------------------------


class TokenIssuer:
    """
    Mint and verify stateless HS256 bearer tokens binding a user id.

    The signing key is handed in at construction; the issuer never reads
    global configuration.  Tokens cannot be revoked – they stay valid until
    ``exp`` even if the password changes in the meantime.
    """

    algorithm = "HS256"

    def __init__(self, secret_key: str, lifetime: timedelta = timedelta(days=30)):
        if not secret_key:
            raise ValueError("TokenIssuer requires a non-empty signing key")
        self._secret_key = secret_key
        self.lifetime = lifetime

    def issue(self, user_id: int, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "user_id": user_id,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return _jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """
        Return the user id bound to *token*.

        PyJWT checks the signature before any claim, so a tampered payload is
        reported as a signature failure even when its ``exp`` is in the past.
        """
        try:
            payload = _jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except _jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError("Token has expired") from exc
        except _jwt.InvalidSignatureError as exc:
            raise TokenSignatureError("Token signature mismatch") from exc
        except _jwt.InvalidTokenError as exc:
            raise TokenMalformedError(f"Token could not be decoded: {exc}") from exc

        user_id = payload.get("user_id")
        # bool is an int subclass; reject it explicitly
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise TokenMalformedError("Token carries no user id")
        return user_id
