"""Typed failures raised by the record store and the user directory."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    DUPLICATE_USER = "duplicate_user"
    STORE_FAILURE = "store_failure"


class UserDirectoryError(ValueError):
    """Base class for failures surfaced by user registration and lookup."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DuplicateUserError(UserDirectoryError):
    """Raised when a registration targets an email that is already taken."""

    kind = ErrorKind.DUPLICATE_USER

    def __init__(self, email: str) -> None:
        super().__init__(f"A user with email '{email}' already exists")
        self.email = email


class StoreFailure(UserDirectoryError):
    """Wraps an error raised by the underlying storage engine."""

    kind = ErrorKind.STORE_FAILURE


__all__ = ["ErrorKind", "UserDirectoryError", "DuplicateUserError", "StoreFailure"]
