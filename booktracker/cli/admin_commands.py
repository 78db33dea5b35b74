"""Administrative commands: migrations, account provisioning, session purge."""

from __future__ import annotations

import argparse
import getpass
import sys
from typing import Callable, Dict, Optional, Sequence

from .. import logging_manager as log_mgr
from ..bootstrap import Services, build_services
from ..config_manager import Settings, get_settings
from ..database import Database, run_migrations
from ..errors import UsernameTakenError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="booktracker", description="booktracker administration")
    parser.add_argument(
        "--database-url",
        help="Override BOOKTRACKER_DATABASE_URL for this invocation.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("migrate", help="Apply pending schema migrations.")

    create_user = subparsers.add_parser("create-user", help="Create a user account.")
    create_user.add_argument("username")
    create_user.add_argument(
        "--password",
        help="Password for the new account; prompted for when omitted.",
    )

    subparsers.add_parser("purge-sessions", help="Delete expired session tokens.")
    return parser


def _resolve_settings(args: argparse.Namespace) -> Settings:
    settings = get_settings()
    if args.database_url:
        settings = settings.model_copy(update={"database_url": args.database_url})
    return settings


def _prompt_password(username: str) -> str:
    password = getpass.getpass(f"Password for {username}: ")
    confirmation = getpass.getpass("Repeat password: ")
    if password != confirmation:
        raise ValueError("Passwords do not match")
    return password


def _cmd_migrate(settings: Settings, args: argparse.Namespace) -> int:
    database = Database(settings.database_url)
    try:
        applied = run_migrations(database.engine)
    finally:
        database.dispose()
    if applied:
        print("Applied migrations: " + ", ".join(f"{version:03d}" for version in applied))
    else:
        print("Schema is up to date.")
    return 0


def _with_services(settings: Settings, action: Callable[[Services], int]) -> int:
    services = build_services(settings)
    try:
        return action(services)
    finally:
        services.close()


def _cmd_create_user(settings: Settings, args: argparse.Namespace) -> int:
    password = args.password if args.password is not None else _prompt_password(args.username)

    def _create(services: Services) -> int:
        try:
            record = services.credential_store.create_user(args.username, password)
        except UsernameTakenError as exc:
            print(str(exc), file=sys.stderr)
            return 1
        print(f"Created user '{record.username}' (id {record.id}).")
        return 0

    return _with_services(settings, _create)


def _cmd_purge_sessions(settings: Settings, args: argparse.Namespace) -> int:
    def _purge(services: Services) -> int:
        purged = services.session_manager.purge_expired()
        print(f"Purged {purged} expired session(s).")
        return 0

    return _with_services(settings, _purge)


_COMMANDS: Dict[str, Callable[[Settings, argparse.Namespace], int]] = {
    "migrate": _cmd_migrate,
    "create-user": _cmd_create_user,
    "purge-sessions": _cmd_purge_sessions,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = _resolve_settings(args)
    log_mgr.setup_logging(settings.log_level, settings.log_file)
    try:
        return _COMMANDS[args.command](settings, args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover - manual execution
    sys.exit(main())
