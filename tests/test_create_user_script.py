"""Tests for the command-line user creation helper."""

from __future__ import annotations

from pathlib import Path
from unittest import mock

from scripts import create_user
from taskboard.database import Database


def _run(db_path: Path, *args: str) -> int:
    with mock.patch("scripts.create_user.getpass.getpass", return_value="p1"):
        return create_user.main([*args, "--db", str(db_path)])


def test_creates_user(tmp_path: Path, capsys) -> None:
    db_path = tmp_path / "taskboard.sqlite3"

    assert _run(db_path, "Ana", "ana@x.com") == 0
    assert "Created user #1: Ana <ana@x.com>" in capsys.readouterr().out

    users = Database(db_path).list_users()
    assert [(user.name, user.email, user.password) for user in users] == [("Ana", "ana@x.com", "p1")]


def test_duplicate_email_fails(tmp_path: Path, capsys) -> None:
    db_path = tmp_path / "taskboard.sqlite3"

    assert _run(db_path, "Ana", "ana@x.com") == 0
    assert _run(db_path, "Other", "ana@x.com") == 1
    assert "already exists" in capsys.readouterr().err
    assert Database(db_path).count_users() == 1
