# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Bootstrap script – creates the first admin identity.

Run once after the initial migration:
    python bin/seed_admin.py

Reads FIRST_ADMIN_NAME, FIRST_ADMIN_EMAIL and FIRST_ADMIN_PASSWORD from
etc/app.conf (or the environment).  Registration defaults every account to
a regular user, so the new row is promoted explicitly afterwards.
"""

import os
import sys

# bin/seed_admin.py  →  ../backend
_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_BACKEND_DIR = os.path.join(_PROJECT_ROOT, "backend")
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from auth.service import CredentialStore  # noqa: E402
from core.config import settings          # noqa: E402
from core.logger import logger            # noqa: E402
from database import SessionLocal         # noqa: E402


def seed() -> int:
    if not settings.first_admin_email or not settings.first_admin_password:
        logger.warning("FIRST_ADMIN_EMAIL or FIRST_ADMIN_PASSWORD not set – nothing to do")
        return 1

    db = SessionLocal()
    try:
        store = CredentialStore(db)
        if store.find_by_email(settings.first_admin_email):
            logger.info("Admin '%s' already exists – skipping", settings.first_admin_email)
            return 0

        admin = store.register(
            settings.first_admin_name,
            settings.first_admin_email,
            settings.first_admin_password,
        )
        admin.is_admin = True
        store.save(admin)
        logger.info("Admin '%s' created (id=%s)", admin.email, admin.id)
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(seed())
