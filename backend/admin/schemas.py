# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic response models for the admin user endpoints."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class UserRow(BaseModel):
    id: int
    name: str
    email: str
    is_admin: bool = Field(serialization_alias="isAdmin")
    created_at: datetime = Field(serialization_alias="createdAt")

    model_config = {"from_attributes": True}


class UserListResponse(BaseModel):
    users: List[UserRow]
