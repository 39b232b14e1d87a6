"""
Exception hierarchy shared by services and the HTTP layer.

Services raise these; nothing here retries. The API maps each class to a
status code and a sanitized message.
"""

from __future__ import annotations


class CorpSocialError(Exception):
    """Base class for application errors."""


class BackendError(CorpSocialError):
    """The managed backend returned an error for a call."""

    def __init__(self, message: str, *, operation: str | None = None):
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        if self.operation:
            return f"{self.operation}: {self.message}"
        return self.message


class NotAuthenticatedError(CorpSocialError):
    """No signed-in user for an operation that needs one."""


class ValidationError(CorpSocialError, ValueError):
    """User input was rejected. The message is safe to show to the user."""


class NotFoundError(CorpSocialError):
    """A referenced row does not exist or is not visible to the caller."""
