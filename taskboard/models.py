"""Domain models persisted by the taskboard record store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class User:
    """Represents a user account stored in the taskboard database."""

    id: int
    name: str
    email: str
    password: str
    created_at: datetime


__all__ = ["User"]
