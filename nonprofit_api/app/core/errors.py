"""
Error taxonomy shared by services and the HTTP layer.

Services raise these exceptions; ``main.create_app`` registers a single
handler that turns them into ``{"error": ...}`` responses with the
status code carried by the exception class.
"""

from typing import Any


class ServiceError(Exception):
    """Base class for failures that map to a client-visible response."""

    status_code: int = 400

    def __init__(self, message: Any) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Malformed or missing input."""

    status_code = 400


class BusinessRuleError(ServiceError):
    """A well-formed request that the current state does not allow."""

    status_code = 400


class AuthenticationError(ServiceError):
    """Missing, invalid or expired credentials."""

    status_code = 401


class AuthorizationError(ServiceError):
    """Valid identity without the required role."""

    status_code = 403


class NotFoundError(ServiceError):
    """Referenced entity does not exist."""

    status_code = 404
