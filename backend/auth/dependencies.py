# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
FastAPI dependency wiring and the access guards.

Handlers never read an "attached" user off the request: they declare
``current_user: User = Depends(get_current_user)`` (or ``require_admin``) and
receive the resolved identity as a parameter.

Guard outcomes
--------------
* no Authorization header / not a Bearer scheme  → 401 "Not authorized, no token"
* token fails verification (any reason)          → 401 "Not authorized, token failed"
  (the specific reason is logged, never returned)
* token valid but the user row is gone           → 401 "Not authorized, user not found"
* ``require_admin`` on a non-admin identity      → 403 "Not authorized as an admin"
"""

from datetime import timedelta
from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from auth.service import CredentialStore, PasswordResetService
from core.config import settings
from core.errors import AuthenticationRequiredError, AuthorizationError, TokenError
from core.logger import logger
from core.mailer import Mailer, SmtpMailer
from core.security import TokenIssuer
from database import get_db
from models.user import User

# auto_error=False: a missing or non-Bearer header yields None so the guard
# can answer with its own message instead of FastAPI's "Not authenticated".
bearer_scheme = HTTPBearer(auto_error=False)


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


@lru_cache
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer(
        settings.secret_key,
        lifetime=timedelta(days=settings.access_token_expire_days),
    )


def get_mailer() -> Mailer:
    return SmtpMailer.from_settings()


def get_credential_store(db: Session = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


def get_password_reset_service(
    store: CredentialStore = Depends(get_credential_store),
    mailer: Mailer = Depends(get_mailer),
) -> PasswordResetService:
    return PasswordResetService(
        store,
        mailer,
        reset_url_base=settings.reset_url_base,
        lifetime=timedelta(minutes=settings.reset_token_expire_minutes),
    )


# ---------------------------------------------------------------------------
# Guards
# ---------------------------------------------------------------------------


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    issuer: TokenIssuer = Depends(get_token_issuer),
    store: CredentialStore = Depends(get_credential_store),
) -> User:
    """Resolve the bearer token to a ``User`` or raise 401."""
    if credentials is None:
        raise AuthenticationRequiredError()

    try:
        user_id = issuer.verify(credentials.credentials)
    except TokenError as exc:
        logger.warning("Bearer token rejected: %s (%s)", exc, type(exc).__name__)
        raise AuthenticationRequiredError("Not authorized, token failed") from exc

    user = store.get(user_id)
    if user is None:
        logger.warning("Bearer token for missing user_id=%s", user_id)
        raise AuthenticationRequiredError("Not authorized, user not found")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Wraps :func:`get_current_user` and additionally asserts ``is_admin``."""
    if not current_user.is_admin:
        logger.warning("Admin route refused for user_id=%s", current_user.id)
        raise AuthorizationError()
    return current_user
