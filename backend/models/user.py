# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""User ORM model – the persisted identity."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func

from database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    # Always stored lower-cased; the unique index is the final word on
    # duplicates when two registrations race.
    email = Column(String(255), unique=True, nullable=False, index=True)
    # passlib string – salt and round count are embedded
    password_hash = Column(String(255), nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)
    # SHA-256 hex of the outstanding reset secret.  Set and cleared together
    # with reset_token_expiry.
    reset_token_hash = Column(String(64), nullable=True, index=True)
    reset_token_expiry = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def clear_reset_token(self) -> None:
        self.reset_token_hash = None
        self.reset_token_expiry = None
