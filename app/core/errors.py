from typing import Optional, Dict

from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base for every error the API answers on purpose.

    ``detail`` carries the short ``error`` label; ``message`` is the
    human readable explanation shown next to it in the JSON body.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Internal server error"
    message = "Something went wrong"

    def __init__(
        self,
        message: Optional[str] = None,
        error: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.error = error or self.error
        self.message = message or self.message
        super().__init__(status_code=self.status_code, detail=self.error, headers=headers)


# --------------------------------------------------------------------
# Auth gate failures
# --------------------------------------------------------------------
class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: Optional[str] = None, error: Optional[str] = None):
        super().__init__(message, error, headers={"WWW-Authenticate": "Bearer"})


class MissingTokenError(AuthError):
    error = "Access token required"
    message = "Please provide Authorization header with Bearer token"


class MalformedHeaderError(AuthError):
    error = "Invalid token format"
    message = "Use format: Authorization: Bearer <token>"


class TokenExpiredError(AuthError):
    error = "Token expired"
    message = "Please login again"


class TokenRevokedError(AuthError):
    error = "Token revoked"
    message = "Please login again"


class TokenInvalidError(AuthError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Invalid token"
    message = "Token verification failed"


class InvalidCredentialsError(AuthError):
    error = "Invalid credentials"
    message = "Email or password is incorrect"


class PermissionDeniedError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"
    message = "Not enough permissions"


# --------------------------------------------------------------------
# Store failures
# --------------------------------------------------------------------
class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"
    message = "Resource not found"


class DuplicateEmailError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "User already exists"
    message = "An account with this email already exists"
