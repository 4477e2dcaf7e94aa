"""Typed application errors. Raised by services and dependencies, mapped to HTTP once."""

from typing import Any


class AppError(Exception):
    """Base class for errors with a public message and an HTTP status."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationFailedError(AppError):
    """Field-level validation failure; details is a list of {field, message}."""

    status_code = 400
    message = "Validation failed"

    def __init__(self, details: list[dict[str, str]]) -> None:
        super().__init__()
        self.details = details

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationFailedError":
        return cls([{"field": field, "message": message}])

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message, "details": self.details}


class DuplicateKeyError(AppError):
    """A unique constraint rejected the write; names the offending field."""

    status_code = 400

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} already exists")


class DuplicateUserError(AppError):
    status_code = 400
    message = "User with this email or username already exists"


class MalformedIdError(AppError):
    status_code = 400
    message = "Invalid ID format"


class UnauthenticatedError(AppError):
    status_code = 401
    message = "Authentication required"


class InvalidCredentialsError(UnauthenticatedError):
    message = "Invalid email or password"


class InvalidTokenError(UnauthenticatedError):
    """Token is malformed, forged, or missing required claims."""

    message = "Invalid or expired token"
    reason = "invalid"


class ExpiredTokenError(InvalidTokenError):
    """Token signature is valid but its exp claim is in the past."""

    reason = "expired"


class ForbiddenError(AppError):
    status_code = 403
    message = "Forbidden"


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"{resource} not found")
