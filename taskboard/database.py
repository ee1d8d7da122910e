"""SQLite-backed persistence for users."""
from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional

from .errors import StoreFailure
from .models import User


def _ensure_directory(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def resolve_database_path(env_value: Optional[str]) -> Path:
    """Resolve the on-disk path for the application database."""

    if env_value:
        return Path(env_value).expanduser().resolve(strict=False)
    base_dir = Path(__file__).resolve().parent.parent / "data"
    return (base_dir / "taskboard.sqlite3").resolve(strict=False)


def _current_timestamp() -> datetime:
    return datetime.now(timezone.utc)


def _serialize_datetime(value: datetime) -> str:
    return value.isoformat()


def _parse_datetime(value: str) -> datetime:
    return datetime.fromisoformat(value)


class Database:
    """Simple wrapper around SQLite for persisting users.

    The store does not enforce email uniqueness; that rule lives in
    :class:`taskboard.directory.UserDirectory`.
    """

    def __init__(self, path: Path) -> None:
        _ensure_directory(path)
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _connect(self, *, autocommit: bool = False) -> sqlite3.Connection:
        conn = sqlite3.connect(self._path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        if autocommit:
            conn.isolation_level = None
        return conn

    @contextmanager
    def _transaction(self, *, autocommit: bool = False) -> Iterator[sqlite3.Connection]:
        conn: sqlite3.Connection | None = None
        try:
            conn = self._connect(autocommit=autocommit)
            with conn:
                yield conn
        except sqlite3.Error as exc:
            raise StoreFailure(f"Database operation failed: {exc}") from exc
        finally:
            if conn is not None:
                conn.close()

    def initialize(self) -> None:
        """Create the required tables if they do not already exist."""

        with self._transaction() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    email TEXT NOT NULL,
                    password TEXT NOT NULL,
                    created_at TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_users_email ON users(email);
                """
            )

    # ------------------------------------------------------------------
    # User management
    # ------------------------------------------------------------------
    def create_user(self, name: str, email: str, password: str) -> User:
        """Insert a new user and return the stored record."""

        created_at = _current_timestamp()
        with self._transaction() as conn:
            user_id = self._insert_user(conn, name, email, password, created_at)
        return User(id=user_id, name=name, email=email, password=password, created_at=created_at)

    def create_user_if_absent(self, name: str, email: str, password: str) -> Optional[User]:
        """Atomically insert a user unless one with ``email`` already exists.

        ``BEGIN IMMEDIATE`` takes the database write lock before the lookup, so
        concurrent callers are serialised. Returns ``None`` when the email is taken.
        """

        created_at = _current_timestamp()
        with self._transaction(autocommit=True) as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                existing = conn.execute(
                    "SELECT id FROM users WHERE email = ? LIMIT 1",
                    (email,),
                ).fetchone()
                if existing is not None:
                    conn.execute("ROLLBACK")
                    return None
                user_id = self._insert_user(conn, name, email, password, created_at)
            except BaseException:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")
        return User(id=user_id, name=name, email=email, password=password, created_at=created_at)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT * FROM users WHERE email = ? ORDER BY id LIMIT 1",
                (email,),
            ).fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    def list_users(self) -> List[User]:
        with self._transaction() as conn:
            rows = conn.execute("SELECT * FROM users ORDER BY id").fetchall()
        return [self._row_to_user(row) for row in rows]

    def count_users(self) -> int:
        with self._transaction() as conn:
            row = conn.execute("SELECT COUNT(*) AS total FROM users").fetchone()
        return int(row["total"])

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _insert_user(
        conn: sqlite3.Connection,
        name: str,
        email: str,
        password: str,
        created_at: datetime,
    ) -> int:
        cursor = conn.execute(
            """
            INSERT INTO users (name, email, password, created_at)
            VALUES (?, ?, ?, ?)
            """,
            (name, email, password, _serialize_datetime(created_at)),
        )
        return int(cursor.lastrowid)

    def _row_to_user(self, row: sqlite3.Row) -> User:
        return User(
            id=int(row["id"]),
            name=str(row["name"]),
            email=str(row["email"]),
            password=str(row["password"]),
            created_at=_parse_datetime(str(row["created_at"])),
        )


__all__ = ["Database", "resolve_database_path"]
