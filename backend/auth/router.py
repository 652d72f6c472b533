# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Auth endpoints – register, login, profile, forgot / reset password.

Security notes
--------------
* Login returns the *same* error message whether the email doesn't exist or
  the password is wrong.  This prevents user-enumeration attacks.
* forgotpassword answers with one message whether or not the address is
  registered.  Only a mail-server failure is reported (500).
* Tokens are not revoked by a password change or reset; they run until
  their 30-day expiry.
"""

from fastapi import APIRouter, Depends, status

from auth.dependencies import (
    get_credential_store,
    get_current_user,
    get_password_reset_service,
    get_token_issuer,
)
from auth.schemas import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    UpdateProfileRequest,
    UserProfileResponse,
)
from auth.service import CredentialStore, PasswordResetService
from core.logger import logger
from core.security import TokenIssuer
from models.user import User

router = APIRouter(prefix="/api/auth", tags=["auth"])

_FORGOT_OK = "If a user with that email exists, a password reset email has been sent."


def _auth_response(user: User, issuer: TokenIssuer) -> AuthResponse:
    return AuthResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        is_admin=user.is_admin,
        token=issuer.issue(user.id),
    )


# ---------------------------------------------------------------------------
# POST /api/auth/register
# ---------------------------------------------------------------------------


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    store: CredentialStore = Depends(get_credential_store),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    """Create an account and return it with a signed token."""
    user = store.register(body.name, body.email, body.password)
    return _auth_response(user, issuer)


# ---------------------------------------------------------------------------
# POST /api/auth/login
# ---------------------------------------------------------------------------


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    store: CredentialStore = Depends(get_credential_store),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    """Authenticate and return a signed token."""
    user = store.authenticate(body.email, body.password)
    logger.info("Login user_id=%s", user.id)
    return _auth_response(user, issuer)


# ---------------------------------------------------------------------------
# GET / PUT /api/auth/profile
# ---------------------------------------------------------------------------


@router.get("/profile", response_model=UserProfileResponse)
def get_profile(
    current_user: User = Depends(get_current_user),
    store: CredentialStore = Depends(get_credential_store),
):
    """Return the authenticated user's public profile (no secrets)."""
    return store.require(current_user.id)


@router.put("/profile", response_model=AuthResponse)
def update_profile(
    body: UpdateProfileRequest,
    current_user: User = Depends(get_current_user),
    store: CredentialStore = Depends(get_credential_store),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    """Apply the supplied fields and reissue a token."""
    user = store.update_profile(current_user.id, body.model_dump(exclude_unset=True))
    return _auth_response(user, issuer)


# ---------------------------------------------------------------------------
# POST /api/auth/forgotpassword
# ---------------------------------------------------------------------------


@router.post("/forgotpassword", response_model=MessageResponse)
def forgot_password(
    body: ForgotPasswordRequest,
    resets: PasswordResetService = Depends(get_password_reset_service),
):
    resets.begin_reset(body.email)
    return MessageResponse(message=_FORGOT_OK)


# ---------------------------------------------------------------------------
# PUT /api/auth/resetpassword/{secret}
# ---------------------------------------------------------------------------


@router.put("/resetpassword/{secret}", response_model=MessageResponse)
def reset_password(
    secret: str,
    body: ResetPasswordRequest,
    resets: PasswordResetService = Depends(get_password_reset_service),
):
    """Trade the emailed reset secret for a new password."""
    resets.complete_reset(secret, body.password)
    return MessageResponse(message="Password reset successfully")
