"""Tests for the bin/seed_admin.py bootstrap script."""
import importlib.util
from pathlib import Path

import pytest

from auth.service import CredentialStore
from core.config import settings
from models.user import User

_SCRIPT = Path(__file__).resolve().parents[2] / "bin" / "seed_admin.py"


@pytest.fixture
def seed_admin():
    spec = importlib.util.spec_from_file_location("seed_admin", _SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def admin_settings(monkeypatch):
    monkeypatch.setattr(settings, "first_admin_name", "Root")
    monkeypatch.setattr(settings, "first_admin_email", "Root@Example.com")
    monkeypatch.setattr(settings, "first_admin_password", "bootstrap-pw")


def test_seed_does_nothing_when_unset(seed_admin, db, monkeypatch):
    monkeypatch.setattr(settings, "first_admin_email", "")
    monkeypatch.setattr(settings, "first_admin_password", "")

    assert seed_admin.seed() == 1
    assert db.query(User).count() == 0


def test_seed_creates_admin(seed_admin, db, admin_settings):
    assert seed_admin.seed() == 0

    admin = db.query(User).one()
    assert admin.name == "Root"
    assert admin.email == "root@example.com"
    assert admin.is_admin is True
    assert CredentialStore(db).authenticate("root@example.com", "bootstrap-pw").id == admin.id


def test_seed_skips_existing_account(seed_admin, db, admin_settings):
    existing = CredentialStore(db).register("Someone", "root@example.com", "their-pw")

    assert seed_admin.seed() == 0

    db.expire_all()
    assert db.query(User).count() == 1
    user = db.get(User, existing.id)
    assert user.name == "Someone"
    assert user.is_admin is False
    assert CredentialStore(db).authenticate("root@example.com", "their-pw").id == existing.id
