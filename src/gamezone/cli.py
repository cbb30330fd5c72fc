"""
Command-line interface for the GameZone core.

Provides CLI commands for store management:
- init-store: Create the store and seed the administrator account
- list-users: Print registered accounts (no secrets)
- best-label: Print the best-record label for an account
- run: Start the HTTP API

Usage:
    gamezone init-store
    gamezone list-users
    gamezone best-label user@example.com
    gamezone run [--host HOST] [--port PORT]

Environment Variables:
    GZ_STORE_PATH: Store file location (default: data/gamezone.db)
    GZ_ADMIN_EMAIL / GZ_ADMIN_PASSWORD: Seed administrator credentials
    GZ_HOST / GZ_PORT: API bind address (default: 127.0.0.1:8000)
"""

import argparse
import asyncio
import sys

from gamezone.app import GameZoneApp
from gamezone.config import config
from gamezone.logging_setup import configure_logging
from gamezone.store import StoreError


def cmd_init_store(args: argparse.Namespace) -> int:
    """
    Create the store and seed the administrator account.

    Running it again is harmless: an existing administrator is never changed.

    Returns:
        0 on success, 1 on error
    """
    zone = GameZoneApp.from_config()
    try:
        admin = asyncio.run(zone.startup())
    except StoreError as e:
        print(f"Error initializing store: {e}", file=sys.stderr)
        return 1

    print(f"Store ready at {zone.store.path}")
    print(f"Administrator: {admin.email}")
    return 0


def cmd_list_users(args: argparse.Namespace) -> int:
    """Print one line per registered account."""
    zone = GameZoneApp.from_config()
    users = zone.users.list_users()
    if not users:
        print("No users registered.")
        return 0

    for user in users:
        print(f"{user.id}\t{user.role.value:<5}\t{user.email}\t{user.name}")
    return 0


def cmd_best_label(args: argparse.Namespace) -> int:
    """Print the best-record label for the account with ``args.email``."""
    zone = GameZoneApp.from_config()
    user = zone.users.find_by_email(args.email)
    if user is None:
        print(f"Error: no account with email '{args.email}'.", file=sys.stderr)
        return 1

    print(zone.records.best_label_for_user(user.id))
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Start the HTTP API (blocks until interrupted)."""
    from gamezone.api.server import start_server

    try:
        start_server(host=args.host, port=args.port)
    except KeyboardInterrupt:
        print("\nShutting down.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gamezone",
        description="GameZone accounts, sessions and personal bests",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser(
        "init-store",
        help="Create the store and seed the administrator account",
    )
    init_parser.set_defaults(func=cmd_init_store)

    list_parser = subparsers.add_parser("list-users", help="List registered accounts")
    list_parser.set_defaults(func=cmd_list_users)

    label_parser = subparsers.add_parser(
        "best-label",
        help="Show the best-record label for an account",
    )
    label_parser.add_argument("email", help="Account email")
    label_parser.set_defaults(func=cmd_best_label)

    run_parser = subparsers.add_parser("run", help="Start the HTTP API")
    run_parser.add_argument("--host", default=None, help="Host to bind (default from config)")
    run_parser.add_argument(
        "--port", type=int, default=None, help="Port to bind (default from config)"
    )
    run_parser.set_defaults(func=cmd_run)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(config.logging)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
