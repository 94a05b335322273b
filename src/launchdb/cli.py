"""
launchdb command line interface.

Usage:
    launchdb handle PATH...    # Register live paths, drop dead ones
    launchdb list              # All applications, .desktop entries last
    launchdb exists PATH       # Exit 1 if PATH is not registered
    launchdb count             # Number of registered applications
    launchdb clear             # Remove every application
    launchdb can-open PATH     # Print the can-open mime list of PATH
    launchdb for MIME          # Applications that can open MIME
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Sequence

from launchdb.config import Config
from launchdb.errors import ConfigError, ConfigNotFoundError
from launchdb.manager import LaunchDB
from launchdb.registry.resolver import canonicalize


def cmd_handle(db: LaunchDB, args: argparse.Namespace) -> int:
    for path in args.paths:
        db.handle_application(path)
    return 0


def cmd_list(db: LaunchDB, args: argparse.Namespace) -> int:
    for path in db.all_applications():
        print(path)
    return 0


def cmd_exists(db: LaunchDB, args: argparse.Namespace) -> int:
    return 0 if db.application_exists(canonicalize(args.path)) else 1


def cmd_count(db: LaunchDB, args: argparse.Namespace) -> int:
    print(db.application_count())
    return 0


def cmd_clear(db: LaunchDB, args: argparse.Namespace) -> int:
    return 0 if db.remove_all_applications() else 1


def cmd_can_open(db: LaunchDB, args: argparse.Namespace) -> int:
    value = db.can_open(args.path)
    if value is None:
        return 1
    sys.stdout.write(value if value.endswith("\n") else value + "\n")
    return 0


def cmd_for(db: LaunchDB, args: argparse.Namespace) -> int:
    matches = db.applications_for(args.mime_type)
    for path in matches:
        print(path)
    return 0 if matches else 1


COMMANDS: dict[str, Callable[[LaunchDB, argparse.Namespace], int]] = {
    "handle": cmd_handle,
    "list": cmd_list,
    "exists": cmd_exists,
    "count": cmd_count,
    "clear": cmd_clear,
    "can-open": cmd_can_open,
    "for": cmd_for,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="launchdb", description="Launchable application database")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--database", help="Path of the SQLite database")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    handle = sub.add_parser("handle", help="Register or drop application paths")
    handle.add_argument("paths", nargs="+")
    sub.add_parser("list", help="List applications")
    exists = sub.add_parser("exists", help="Check whether a path is registered")
    exists.add_argument("path")
    sub.add_parser("count", help="Count applications")
    sub.add_parser("clear", help="Remove all applications")
    can_open = sub.add_parser("can-open", help="Show what an application can open")
    can_open.add_argument("path")
    for_mime = sub.add_parser("for", help="Applications that can open a mime type")
    for_mime.add_argument("mime_type")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = Config.load(args.config) if args.config else None
        db = LaunchDB(config=config, database_path=args.database)
    except (ConfigError, ConfigNotFoundError) as e:
        print(f"launchdb: {e}", file=sys.stderr)
        return 2

    if not db.open():
        print(f"launchdb: cannot open database {db.settings.database_path}", file=sys.stderr)
        return 1
    try:
        return COMMANDS[args.command](db, args)
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
