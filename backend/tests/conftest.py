"""Test fixtures for the identity service."""
import os
import re
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Settings are read at import time, so the environment must be in place
# before any application module is imported.  Assigned, not defaulted: the
# schema fixture drops every table afterwards.
_TMP = Path(tempfile.mkdtemp(prefix="storefront-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP / 'identity.db'}"
os.environ["SECRET_KEY"] = "test-signing-key-0123456789abcdef0123456789abcdef"
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"
os.environ["RESET_URL_BASE"] = "http://testserver/resetpassword"
os.environ["STOREFRONT_LOG_DIR"] = str(_TMP / "log")

from auth.dependencies import get_mailer  # noqa: E402
from core.mailer import MailDeliveryError  # noqa: E402
from database import Base, SessionLocal, engine  # noqa: E402
from main import app  # noqa: E402
import models.user  # noqa: F401, E402

_SECRET_IN_LINK = re.compile(r"/resetpassword/([0-9a-f]{40})")


class RecordingMailer:
    """Stands in for SMTP; records messages or fails on demand."""

    def __init__(self):
        self.sent = []
        self.fail = False

    def deliver(self, recipient, subject, body):
        if self.fail:
            raise MailDeliveryError("connection refused")
        self.sent.append((recipient, subject, body))

    def last_secret(self):
        match = _SECRET_IN_LINK.search(self.sent[-1][2])
        assert match, "no reset link in the last message"
        return match.group(1)


@pytest.fixture(autouse=True)
def schema():
    """Fresh tables for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def client(mailer):
    app.dependency_overrides[get_mailer] = lambda: mailer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
