"""User directory backend for the taskboard service."""

from __future__ import annotations

from typing import Any

from .database import Database, resolve_database_path
from .directory import UserDirectory
from .errors import DuplicateUserError, ErrorKind, StoreFailure, UserDirectoryError


def create_app(*args: Any, **kwargs: Any):
    """Factory function that returns the HTTP application."""

    from .api import create_app as _create_app

    return _create_app(*args, **kwargs)


def create_application(*args: Any, **kwargs: Any):
    """Factory function that builds the application from the environment."""

    from .application import create_application as _create_application

    return _create_application(*args, **kwargs)


__all__ = [
    "Database",
    "DuplicateUserError",
    "ErrorKind",
    "StoreFailure",
    "UserDirectory",
    "UserDirectoryError",
    "create_app",
    "create_application",
    "resolve_database_path",
]
