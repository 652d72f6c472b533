# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Alembic environment for the identity schema.

The connection string comes from the application's Settings (DATABASE_URL /
etc/app.conf), never from alembic.ini, so the app and its migrations cannot
point at different databases.
"""

import os
import sys

# ``backend/`` must be importable for ``core`` / ``models`` when alembic is
# run from the project root without the package installed.
_BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from alembic import context  # noqa: E402

from core.config import settings  # noqa: E402
from database import Base, engine  # noqa: E402

# Every ORM model must be imported so autogenerate sees its table.
import models.user  # noqa: F401, E402

# SQLite cannot ALTER most constraints in place; batch mode rebuilds the table.
_IS_SQLITE = settings.database_url.startswith("sqlite")


def run_migrations_online():
    with engine.connect() as conn:
        context.configure(
            connection=conn,
            target_metadata=Base.metadata,
            compare_type=True,
            render_as_batch=_IS_SQLITE,
        )
        with context.begin_transaction():
            context.run_migrations()


def run_migrations_offline():
    """Emit SQL to stdout instead of executing it (``alembic upgrade --sql``)."""
    context.configure(
        url=settings.database_url,
        target_metadata=Base.metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
