"""
Exception hierarchy shared by the repository, service and API layers.

The repository translates driver errors into ``StorageError`` and
missing rows into ``UserNotFoundError``; the service lets both
propagate; the endpoints map them to HTTP status codes.
"""

from typing import Optional


class UserApiError(Exception):
    """Base class for errors raised by the user API."""


class UserNotFoundError(UserApiError, LookupError):
    """No stored user has the requested identifier."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class StorageError(UserApiError):
    """The database rejected or failed to execute a statement."""

    def __init__(self, message: str, operation: Optional[str] = None) -> None:
        super().__init__(message)
        self.operation = operation


class DatabaseStartupError(StorageError):
    """The database could not be opened when the application started."""
