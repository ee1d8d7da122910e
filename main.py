"""Command-line interface for the taskboard service."""

from __future__ import annotations
import argparse
import logging
import sys
from getpass import getpass
from typing import Sequence

try:
    import httpx
except ImportError as exc:  # pragma: no cover - exercised in environments missing deps
    raise SystemExit(
        "The 'httpx' package is required. Install the project with `pip install -e .`."
    ) from exc

from taskboard.config import Settings, load_settings
from taskboard.database import Database
from taskboard.directory import UserDirectory
from taskboard.errors import UserDirectoryError

logger = logging.getLogger("taskboard.main")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Taskboard service utilities")
    subparsers = parser.add_subparsers(dest="command")

    parser.set_defaults(command="serve")

    subparsers.add_parser("init-db", help="Initialise the taskboard database")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API")
    serve_parser.add_argument(
        "--host",
        default=None,
        help="Bind address for the API (default: TASKBOARD_HOST or 0.0.0.0)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for the API (default: PORT or 3000)",
    )

    admin_parser = subparsers.add_parser(
        "admin", help="Launch the interactive administration console"
    )
    admin_parser.add_argument(
        "--service-url",
        default=None,
        help="Base URL of a running taskboard service to list users from over HTTP",
    )

    args_list = list(argv) if argv is not None else sys.argv[1:]
    known_commands = {"serve", "admin", "init-db"}

    if not args_list:
        args_list = ["serve"]
    else:
        first = args_list[0]
        if first in ("-h", "--help"):
            return parser.parse_args(args_list)
        if first not in known_commands:
            if any(flag in args_list for flag in ("-h", "--help")):
                return parser.parse_args(args_list)
            args_list = ["serve", *args_list]

    return parser.parse_args(args_list)


def _initialise_database(settings: Settings) -> Database:
    database = Database(settings.database_path)
    database.initialize()
    logger.info("Database initialised at %s", settings.database_path)
    return database


def _serve(*, settings: Settings, host: str, port: int) -> None:
    from taskboard.application import create_application
    import uvicorn

    logger.info("Starting taskboard API on http://%s:%s", host, port)

    app = create_application(settings=settings)
    uvicorn.run(app, host=host, port=port, log_level="info")


def _run_admin_cli(directory: UserDirectory, *, service_url: str | None = None) -> None:
    """Provide an interactive console for administrators."""

    print("Taskboard Administration Console")
    print("Press Ctrl+C at any time to exit.\n")

    try:
        while True:
            print("Select an option:")
            print("  1) List all users")
            print("  2) Add a new user")
            print("  3) List users from a running service")
            print("  4) Exit")

            choice = input("Enter choice [1-4]: ").strip()

            if choice == "1":
                _list_users(directory)
            elif choice == "2":
                _add_user(directory)
            elif choice == "3":
                _list_remote_users(service_url)
            elif choice == "4":
                print("Goodbye!")
                return
            else:
                print("Invalid selection. Please choose a number from the menu.\n")

            print()
    except KeyboardInterrupt:
        print("\nExiting administration console.")


def _list_users(directory: UserDirectory) -> None:
    users = directory.list_users()
    if not users:
        print("No users are currently registered.")
        return

    print(f"{len(users)} user(s) found:")
    print(f"{'ID':>4}  {'Name':<24}  {'Email':<32}  Created")
    print("-" * 80)
    for user in users:
        created = user.created_at.strftime("%Y-%m-%d %H:%M:%S %Z")
        print(f"{user.id:>4}  {user.name:<24}  {user.email:<32}  {created}")


def _add_user(directory: UserDirectory) -> None:
    print("\nCreate a new user (leave the name blank to cancel).")
    name = input("Name: ").strip()
    if not name:
        print("User creation cancelled.")
        return

    email = input("Email address: ").strip()
    if not email:
        print("An email address is required.")
        return

    password = _prompt_for_password()
    if password is None:
        print("Aborted creating user.")
        return

    try:
        user = directory.register_user(name, email, password)
    except UserDirectoryError as exc:
        print(f"Failed to create user: {exc}")
        return

    print(f"Created user #{user.id}: {user.name} <{user.email}>")


def _prompt_for_password() -> str | None:
    for _ in range(3):
        password = getpass("Password: ")
        if not password:
            print("Password must not be empty. Please try again.")
            continue
        confirmation = getpass("Confirm password: ")
        if password != confirmation:
            print("Passwords do not match. Please try again.")
            continue
        return password
    return None


def _list_remote_users(service_url: str | None) -> None:
    if not service_url:
        print("No service URL configured. Provide --service-url when launching the admin console.")
        return

    endpoint = service_url.rstrip("/") + "/api/users"

    try:
        response = httpx.get(endpoint, timeout=10.0)
    except httpx.HTTPError as exc:
        print(f"Failed to contact taskboard service: {exc}")
        return

    if response.status_code != 200:
        print(f"Service responded with {response.status_code}: {response.text.strip()}")
        return

    try:
        users = response.json()
    except ValueError:
        print("Service returned an unexpected response format.")
        return

    if not isinstance(users, list) or not users:
        print("The service has no registered users.")
        return

    print(f"Found {len(users)} user(s) at {service_url}:")
    for user in users:
        user_id = user.get("id", "?")
        name = user.get("name", "unknown")
        email = user.get("email", "unknown")
        print(f"- #{user_id} {name} <{email}>")


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for CLI usage."""

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

    args = _parse_args(argv)
    settings = load_settings()
    database = _initialise_database(settings)

    if args.command == "serve":
        _serve(
            settings=settings,
            host=args.host or settings.host,
            port=args.port or settings.port,
        )
    elif args.command == "admin":
        directory = UserDirectory(database, atomic=settings.atomic_registration)
        _run_admin_cli(directory, service_url=args.service_url)
    elif args.command == "init-db":
        print("Database initialisation complete.")


if __name__ == "__main__":
    main()
