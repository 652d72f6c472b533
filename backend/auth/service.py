# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Identity services.

CredentialStore
    Owns the ``User`` row: registration, login, profile edits and lookups.
    A password hash is computed only where a new plaintext is supplied;
    nothing ever re-hashes an existing hash.

PasswordResetService
    The forgot-password handshake.  Mints a one-time secret, stores its
    digest with a short expiry, mails the secret, and later trades it for a
    new password.

Both raise ``core.errors.AppError`` subclasses; the HTTP layer renders them.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.errors import (
    DeliveryFailureError,
    DuplicateResourceError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    NotFoundError,
)
from core.logger import logger
from core.mailer import MailDeliveryError, Mailer
from core.security import (
    generate_reset_secret,
    hash_password,
    hash_reset_secret,
    verify_password,
)
from models.user import User


def normalise_email(email: str) -> str:
    return email.strip().lower()


class CredentialStore:
    def __init__(self, db: Session):
        self.db = db

    # -- lookups -----------------------------------------------------------

    def get(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def require(self, user_id: int) -> User:
        user = self.get(user_id)
        if user is None:
            raise NotFoundError()
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == normalise_email(email)).first()

    def list_users(self) -> list[User]:
        return self.db.query(User).order_by(User.id).all()

    def find_by_reset_digest(self, digest: str, now: datetime) -> Optional[User]:
        """The user holding reset digest *digest*, provided it expires after *now*."""
        return (
            self.db.query(User)
            .filter(User.reset_token_hash == digest, User.reset_token_expiry > now)
            .first()
        )

    # -- writes ------------------------------------------------------------

    def save(self, user: User) -> User:
        """
        Commit *user*.  A unique-index violation on email (two writers racing
        past the pre-check) is reported as the same duplicate error the
        pre-check raises.
        """
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateResourceError() from exc
        self.db.refresh(user)
        return user

    def register(self, name: str, email: str, password: str) -> User:
        email = normalise_email(email)
        if self.find_by_email(email):
            raise DuplicateResourceError()

        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            is_admin=False,
        )
        user = self.save(user)
        logger.info("Registered user id=%s", user.id)
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.find_by_email(email)
        # Unified failure path – no information leaks about whether the email exists
        if not user or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        return user

    def set_password(self, user: User, plain: str) -> None:
        """Replace the password hash.  Caller commits."""
        user.password_hash = hash_password(plain)

    def update_profile(self, user_id: int, changes: dict) -> User:
        """
        Apply the non-empty values among ``name``, ``email`` and ``password``
        in *changes*.  Missing, None or empty values leave the field alone.
        """
        user = self.require(user_id)

        name = changes.get("name")
        if name:
            user.name = name

        email = changes.get("email")
        if email:
            email = normalise_email(email)
            if email != user.email:
                other = self.find_by_email(email)
                if other is not None and other.id != user.id:
                    raise DuplicateResourceError()
                user.email = email

        password = changes.get("password")
        if password:
            self.set_password(user, password)

        user = self.save(user)
        logger.info(
            "Updated profile user_id=%s fields=%s",
            user.id,
            sorted(k for k in ("name", "email", "password") if changes.get(k)),
        )
        return user


# ---------------------------------------------------------------------------
# Password reset
# ---------------------------------------------------------------------------

_RESET_SUBJECT = "Password Reset Token"

_RESET_BODY = """\
<p>You are receiving this email because you (or someone else) has requested the reset of a password.</p>
<p>Please click on the following link to reset your password:</p>
<p><a href="{url}">{url}</a></p>
<p>This link is valid for {minutes} minutes.</p>
<p>If you did not request this, please ignore this email and your password will remain unchanged.</p>
"""


class PasswordResetService:
    def __init__(
        self,
        store: CredentialStore,
        mailer: Mailer,
        reset_url_base: str,
        lifetime: timedelta = timedelta(minutes=10),
    ):
        self.store = store
        self.mailer = mailer
        self.reset_url_base = reset_url_base.rstrip("/")
        self.lifetime = lifetime

    def begin_reset(self, email: str, now: Optional[datetime] = None) -> None:
        """
        Start a reset for *email*.  Unknown addresses are a silent no-op so
        the caller cannot probe for accounts.  A pending reset is overwritten:
        only the newest secret is honoured.

        Raises DeliveryFailureError (after clearing the pending reset) when
        the mail cannot be sent.
        """
        user = self.store.find_by_email(email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return

        now = now or datetime.now(timezone.utc)
        secret, digest = generate_reset_secret()
        user.reset_token_hash = digest
        user.reset_token_expiry = now + self.lifetime
        self.store.save(user)

        url = f"{self.reset_url_base}/{secret}"
        body = _RESET_BODY.format(url=url, minutes=int(self.lifetime.total_seconds() // 60))
        try:
            self.mailer.deliver(user.email, _RESET_SUBJECT, body)
        except MailDeliveryError as exc:
            user.clear_reset_token()
            self.store.save(user)
            logger.error("Reset email to user_id=%s failed: %s", user.id, exc)
            raise DeliveryFailureError() from exc

        logger.info("Password reset issued user_id=%s", user.id)

    def complete_reset(self, secret: str, new_password: str, now: Optional[datetime] = None) -> User:
        """
        Trade a reset *secret* for a new password.  Wrong and expired secrets
        fail identically.  The secret is single use.
        """
        now = now or datetime.now(timezone.utc)
        user = self.store.find_by_reset_digest(hash_reset_secret(secret), now)
        if user is None:
            raise InvalidOrExpiredTokenError()

        self.store.set_password(user, new_password)
        user.clear_reset_token()
        user = self.store.save(user)
        logger.info("Password reset completed user_id=%s", user.id)
        return user
