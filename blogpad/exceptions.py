"""Application exception hierarchy.

Every error the API can return maps to one of these classes. Handlers in
``blogpad.main`` render them as ``{"message": ...}`` bodies (plus ``errors``
for validation failures) with the class's status code.

    BlogpadError (base)
    ├── ValidationError          → 400
    ├── ConflictError            → 400
    ├── InvalidCredentialsError  → 400
    ├── AuthError                → 401
    │   └── InvalidTokenError    → 403
    ├── NotFoundError            → 404
    └── InternalError            → 500
"""

from typing import Any

from fastapi import status


class BlogpadError(Exception):
    """Base exception for all application errors.

    ``message`` is safe to return to the client; ``context`` is only logged.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str | None = None, context: dict[str, Any] | None = None):
        self.message = message or self.default_message
        self.context = context or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message}


class ValidationError(BlogpadError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context)
        self.errors = errors or []

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body


class ConflictError(BlogpadError):
    """A unique value (such as an email) is already taken."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class InvalidCredentialsError(BlogpadError):
    """Login failed. Raised identically for unknown email and wrong password."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid credentials"


class AuthError(BlogpadError):
    """No usable credential was presented."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access token required"


class InvalidTokenError(AuthError):
    """The bearer token is malformed, badly signed or expired."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid token"


class NotFoundError(BlogpadError):
    """The resource is absent or not owned by the caller."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Resource", context: dict[str, Any] | None = None):
        super().__init__(f"{resource} not found", context)
        self.resource = resource


class InternalError(BlogpadError):
    """Unexpected store or runtime failure. Details stay in the logs."""
