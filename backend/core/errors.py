# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Error taxonomy for the identity service.

``AppError`` subclasses are raised by services and guards and rendered by the
handler registered in ``main.py`` as ``{"detail": ...}`` with the class's
status code.  Messages for credential and reset failures are deliberately
generic so a caller cannot tell an unknown account from a wrong secret.

``TokenError`` and its subclasses never reach the client; the access guard
logs the specific reason and answers with a uniform 401.
"""

from typing import Optional

from fastapi import status


class AppError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Request failed"

    def __init__(self, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ValidationError(AppError):
    detail = "Invalid user data"


class DuplicateResourceError(AppError):
    detail = "User already exists"


class InvalidCredentialsError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid email or password"


class InvalidOrExpiredTokenError(AppError):
    detail = "Invalid or expired reset token"


class AuthenticationRequiredError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Not authorized, no token"


class AuthorizationError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Not authorized as an admin"


class DeliveryFailureError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Email could not be sent"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "User not found"


# -- Bearer token verification ---------------------------------------------


class TokenError(Exception):
    """Base class for bearer-token verification failures."""


class TokenMalformedError(TokenError):
    pass


class TokenSignatureError(TokenError):
    pass


class TokenExpiredError(TokenError):
    pass
