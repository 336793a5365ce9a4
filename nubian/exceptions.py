"""Application exception hierarchy.

Every exception raised deliberately by routers and services derives from
``BaseAPIException`` and is rendered into the standard error envelope by
``nubian.middleware.error_handler``.
"""

from typing import Any, Optional


class BaseAPIException(Exception):
    """Base class for all API errors."""

    status_code: int = 500
    error_code: str = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        if status_code is not None:
            self.status_code = status_code
        self.details = details


# ============================================================================
# 400
# ============================================================================


class ValidationError(BaseAPIException):
    """Payload is well-formed but semantically invalid."""

    status_code = 400
    error_code = "VALIDATION_ERROR"


class InvalidSignatureError(BaseAPIException):
    """Webhook payload signature did not verify."""

    status_code = 400
    error_code = "INVALID_SIGNATURE"

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message)


# ============================================================================
# 401 / 403
# ============================================================================


class MissingTokenError(BaseAPIException):
    """No credentials were supplied."""

    status_code = 401
    error_code = "MISSING_TOKEN"

    def __init__(self, message: str = "Authentication required. Please sign in to continue."):
        super().__init__(message)


class InvalidTokenError(BaseAPIException):
    """Credentials were supplied but could not be verified."""

    status_code = 401
    error_code = "INVALID_TOKEN"

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class ForbiddenError(BaseAPIException):
    """Authenticated but not permitted."""

    status_code = 403
    error_code = "FORBIDDEN"

    def __init__(self, message: str = "Forbidden request"):
        super().__init__(message)


# ============================================================================
# 404
# ============================================================================


class ResourceNotFoundError(BaseAPIException):
    """Referenced resource does not exist (or is not visible)."""

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, resource: str, identifier: Optional[str] = None):
        message = f"{resource} not found"
        details = {"resource": resource}
        if identifier is not None:
            details["id"] = identifier
        super().__init__(message, details=details)


# ============================================================================
# 500
# ============================================================================


class ContentStoreError(BaseAPIException):
    """Content-addressable file store call failed."""

    status_code = 500
    error_code = "CONTENT_STORE_ERROR"


class DatabaseError(BaseAPIException):
    """Database operation failed."""

    status_code = 500
    error_code = "DATABASE_ERROR"

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message)
