# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the auth endpoints."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


# passlib refuses to hash anything longer
MAX_PASSWORD_LENGTH = 4096


def _check_email(value: str) -> str:
    value = value.strip()
    local, _, domain = value.partition("@")
    if not local or not domain or " " in value:
        raise ValueError("Invalid email address")
    return value


# -- Requests --------------------------------------------------------------


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(max_length=255)
    password: str = Field(min_length=1, max_length=MAX_PASSWORD_LENGTH)

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return _check_email(value)


class LoginRequest(BaseModel):
    email: str
    password: str


class UpdateProfileRequest(BaseModel):
    # Omitted, null and empty values all mean "leave unchanged"
    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, max_length=MAX_PASSWORD_LENGTH)

    @field_validator("email")
    @classmethod
    def _email(cls, value: Optional[str]) -> Optional[str]:
        return _check_email(value) if value else value


class ForgotPasswordRequest(BaseModel):
    email: str


class ResetPasswordRequest(BaseModel):
    password: str = Field(min_length=1, max_length=MAX_PASSWORD_LENGTH)


# -- Responses -------------------------------------------------------------


class UserProfileResponse(BaseModel):
    id: int
    name: str
    email: str
    is_admin: bool = Field(serialization_alias="isAdmin")

    model_config = {"from_attributes": True}


class AuthResponse(UserProfileResponse):
    token: str


class MessageResponse(BaseModel):
    message: str
