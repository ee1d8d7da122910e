"""User registration and lookup on top of the record store."""

from __future__ import annotations

import logging
from typing import List, NoReturn, Optional, Protocol

from .errors import DuplicateUserError
from .models import User

logger = logging.getLogger("taskboard.directory")


class UserStore(Protocol):
    """Operations the directory needs from a record store."""

    def create_user(self, name: str, email: str, password: str) -> User: ...

    def create_user_if_absent(self, name: str, email: str, password: str) -> Optional[User]: ...

    def list_users(self) -> List[User]: ...

    def get_user_by_email(self, email: str) -> Optional[User]: ...


class UserDirectory:
    """Enforce that no two users share an email before creating them.

    By default registration is a lookup followed by an insert. The two steps are
    not atomic, so concurrent registrations for the same email may both succeed.
    Pass ``atomic=True`` to register through the store's insert-if-absent
    operation instead.
    """

    def __init__(self, store: UserStore, *, atomic: bool = False) -> None:
        self._store = store
        self._atomic = atomic

    @property
    def atomic(self) -> bool:
        return self._atomic

    def register_user(self, name: str, email: str, password: str) -> User:
        if self._atomic:
            user = self._store.create_user_if_absent(name, email, password)
            if user is None:
                self._reject(email)
        else:
            if self._store.get_user_by_email(email) is not None:
                self._reject(email)
            user = self._store.create_user(name, email, password)

        logger.info("Registered user #%s <%s>", user.id, user.email)
        return user

    def list_users(self) -> List[User]:
        return self._store.list_users()

    @staticmethod
    def _reject(email: str) -> NoReturn:
        logger.warning("Rejected registration for existing email %s", email)
        raise DuplicateUserError(email)


__all__ = ["UserDirectory", "UserStore"]
