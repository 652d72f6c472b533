# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Admin endpoints – read-only user management.

Every endpoint in this router is guarded by ``require_admin``.  A request
that carries a valid token but belongs to a non-admin identity receives 403
before any business logic runs; a missing or bad token receives 401.
"""

from fastapi import APIRouter, Depends

from auth.dependencies import get_credential_store, require_admin
from auth.service import CredentialStore
from models.user import User
from admin.schemas import UserListResponse, UserRow

router = APIRouter(prefix="/api/users", tags=["admin"])


@router.get("", response_model=UserListResponse)
def list_users(
    admin: User = Depends(require_admin),
    store: CredentialStore = Depends(get_credential_store),
):
    """Return every user row (no password or reset data – handled by the schema)."""
    return UserListResponse(users=store.list_users())


@router.get("/{user_id}", response_model=UserRow)
def get_user(
    user_id: int,
    admin: User = Depends(require_admin),
    store: CredentialStore = Depends(get_credential_store),
):
    return store.require(user_id)
