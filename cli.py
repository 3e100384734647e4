#!/usr/bin/env python3
"""Boya extracurricular course selection CLI."""

import argparse
import logging
import sys

from config import COOKIE_FILE, CONFIG_FILE
from boya import booking
from boya.api import BoyaApi
from boya.auth import Authenticator
from boya.clock import SystemClock
from boya.courses import format_table
from boya.store import close_context, open_context

EXIT_INTERRUPTED = 130


def prompt_choice(courses) -> str:
    """Show the courses and read one line with the chosen id."""
    print(format_table(courses))
    try:
        return input("Type ID to select course: ")
    except EOFError:
        # Closed stdin reads as an empty line, which is an invalid id
        print()
        return ""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Boya extracurricular course selection",
    )
    parser.add_argument("--config", default=CONFIG_FILE, help=f"Config file (default: {CONFIG_FILE})")
    parser.add_argument("--cookies", default=COOKIE_FILE, help=f"Cookie file (default: {COOKIE_FILE})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser(
        "login",
        help="Log in to Boya. Username and password are saved in the config file.",
        description="Log in to Boya. The token expires easily, so you may need to log in again.",
    )
    login.add_argument("-u", "--username")
    login.add_argument("-p", "--password")

    query = sub.add_parser("query", help="Query courses and select one by ID")
    query.add_argument(
        "-a", "--all",
        action="store_true",
        help="Show all courses instead of only selectable ones",
    )

    drop = sub.add_parser("drop", help="Drop a course by ID")
    drop.add_argument("-i", "--id", type=int, required=True)
    return parser


def run(args) -> booking.RunResult:
    ctx = open_context(args.config, args.cookies)
    try:
        api = BoyaApi(ctx.session)
        auth = Authenticator(ctx.session)
        if args.command == "login":
            if args.username:
                ctx.credentials.username = args.username
            if args.password:
                ctx.credentials.password = args.password
            return booking.login(ctx, auth)
        if args.command == "query":
            return booking.run_selection(ctx, api, auth, prompt_choice, SystemClock(), include_all=args.all)
        return booking.run_drop(ctx, api, args.id)
    finally:
        close_context(ctx, args.config, args.cookies)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        result = run(args)
    except KeyboardInterrupt:
        print("\nAborted.")
        return EXIT_INTERRUPTED

    if result.ok:
        print(f"\n{args.command.capitalize()} successful.")
        return 0
    print(f"\nERROR: {result.error}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
