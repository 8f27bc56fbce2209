"""Command-line front door for ocflview.

Parses global and ``ls`` options, merges them over config-file defaults, and
dispatches the listing against a filesystem OCFL repository.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .config import DEFAULT_COLOR, Settings, load_settings
from .display import DisplayConfig, resolve_color
from .errors import OcflViewError
from .listing import ListingRequest, SortField, run_listing
from .report import ErrorReporter
from .repository import FsOcflRepository

LOG_FORMAT = "%(levelname)s %(name)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ocflview", description="A CLI for OCFL repositories.")
    parser.add_argument(
        "-R",
        "--root",
        metavar="PATH",
        default=None,
        help="Path to the OCFL storage root. Default: configured root, else the current directory.",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress error messages.")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    ls = subparsers.add_parser("ls", help="List objects or files within objects.")
    ls.add_argument("-l", "--long", action="store_true", help="Enable long output format.")
    ls.add_argument("-p", "--physical", action="store_true", help="Display the physical path to the resource.")
    ls.add_argument("-d", "--digest", action="store_true", help="Display the file digest.")
    ls.add_argument(
        "-v",
        "--version",
        metavar="NUM",
        default=None,
        help="Version of the object to list. Default: HEAD version.",
    )
    ls.add_argument(
        "-s",
        "--sort",
        choices=[field.value for field in SortField],
        default=None,
        help="Field to sort object contents by (default: name).",
    )
    ls.add_argument("-r", "--reverse", action="store_true", help="Reverse the sort order.")
    ls.add_argument("object_id", nargs="?", default=None, metavar="OBJECT", help="ID of the object to list.")
    return parser


def listing_request(args: argparse.Namespace, settings: Settings) -> ListingRequest:
    return ListingRequest(
        long=args.long,
        physical=args.physical,
        digest=args.digest,
        version=args.version,
        sort=SortField.parse(args.sort) if args.sort is not None else settings.sort,
        reverse=args.reverse,
        object_id=args.object_id,
    )


def list_command(args: argparse.Namespace, settings: Settings, reporter: ErrorReporter) -> None:
    repo = FsOcflRepository(args.root or settings.root)
    run_listing(repo, listing_request(args, settings), reporter)


COMMANDS = {
    "ls": list_command,
}


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the selected command.

    Abort-level errors are reported on stderr (unless ``--quiet``) and exit
    with status 1. Per-object failures and not-found results do not.
    """
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except OcflViewError as exc:
        display = DisplayConfig(color=resolve_color(DEFAULT_COLOR, sys.stderr), quiet=args.quiet)
        ErrorReporter(display).error(exc)
        raise SystemExit(1) from None

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    display = DisplayConfig(color=resolve_color(settings.color, sys.stderr), quiet=args.quiet)
    reporter = ErrorReporter(display)

    try:
        COMMANDS[args.command](args, settings, reporter)
    except OcflViewError as exc:
        reporter.error(exc)
        raise SystemExit(1) from None


if __name__ == "__main__":
    main()
