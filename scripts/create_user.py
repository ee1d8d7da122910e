import argparse
import getpass
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from taskboard.database import Database, resolve_database_path
from taskboard.directory import UserDirectory
from taskboard.errors import UserDirectoryError


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a taskboard user")
    parser.add_argument("name", help="Display name for the user")
    parser.add_argument("email", help="Unique email address for the user")
    parser.add_argument(
        "--db",
        dest="db_path",
        default=None,
        help="Path to the SQLite database (defaults to TASKBOARD_DB_PATH or data/taskboard.sqlite3)",
    )
    return parser.parse_args(argv)


def prompt_for_password() -> str:
    for _ in range(3):
        password = getpass.getpass("Password: ")
        confirm = getpass.getpass("Confirm password: ")
        if password != confirm:
            print("Passwords do not match. Try again.", file=sys.stderr)
            continue
        if not password:
            print("Password must not be empty.", file=sys.stderr)
            continue
        return password
    raise SystemExit("Failed to set password after three attempts.")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    password = prompt_for_password()

    db_env = args.db_path or os.getenv("TASKBOARD_DB_PATH")
    db_path = resolve_database_path(db_env)

    database = Database(db_path)
    database.initialize()
    directory = UserDirectory(database)

    try:
        user = directory.register_user(args.name.strip(), args.email.strip(), password)
    except UserDirectoryError as exc:  # duplicates, storage errors
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Created user #{user.id}: {user.name} <{user.email}>")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
