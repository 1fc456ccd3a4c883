"""Application error hierarchy.

Services raise these; the REST error handlers and the GraphQL error formatter
turn them into responses. Nothing here depends on a web framework.
"""

from typing import Any


class AppError(Exception):
    """Base error carrying an HTTP-style status code and optional field details."""

    status_code: int = 500
    default_message: str = "An error occurred."

    def __init__(self, message: str | None = None, data: list[dict[str, Any]] | None = None):
        self.message = message or self.default_message
        self.data = data
        super().__init__(self.message)

    def to_response(self) -> dict[str, Any]:
        """Convert to the JSON error body returned by the REST API."""
        body: dict[str, Any] = {"message": self.message}
        if self.data:
            body["data"] = self.data
        return body


class ValidationError(AppError):
    """Input failed validation; ``data`` lists every violated field."""

    status_code = 422
    default_message = "Validation failed."


class AuthError(AppError):
    """Missing, invalid or wrong credentials."""

    status_code = 401
    default_message = "Not authenticated."


class ForbiddenError(AppError):
    """Authenticated user does not own the resource."""

    status_code = 403
    default_message = "Not authorized."


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found."


class ConflictError(AppError):
    """Unique constraint would be violated (e.g. email already registered)."""

    status_code = 409
    default_message = "Resource already exists."
