"""Command-line entry point."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence

from termcolor import colored

from . import commands
from .errors import JdkError

VERSION = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for all sub-commands."""
    parser = argparse.ArgumentParser(
        prog="jsh", description="A tool to manage and switch between JDK installations"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    sub = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    sub.add_parser("list", help="List all installed JDKs")
    sub.add_parser("current", help="Show current active JDK")

    use = sub.add_parser("use", help="Switch to a specific JDK version")
    use.add_argument("version", help="Version identifier (e.g., 8, 11, 17, 21)")

    download = sub.add_parser("download", help="Download a specific JDK version")
    download.add_argument("version", help="Version to download (e.g., 17, 21)")
    download.add_argument("--vendor", default="temurin", help="JDK vendor (default: temurin)")

    search = sub.add_parser("search", help="Search available JDK versions for download")
    search.add_argument("keyword", nargs="?", default=None, help="Optional search keyword")
    return parser


def supports_color() -> bool:
    """Guess whether the terminal understands colour escape codes."""
    wt_session = os.environ.get("WT_SESSION")
    if wt_session is not None:
        return wt_session != ""
    term = os.environ.get("TERM")
    if term is not None:
        return term != "" and term != "dumb"
    if sys.platform.startswith("win"):
        return "ANSICON" in os.environ
    return True


def _run(args: argparse.Namespace) -> None:
    if args.command == "list":
        commands.list_command()
    elif args.command == "current":
        commands.current_command()
    elif args.command == "use":
        commands.use_command(args.version)
    elif args.command == "download":
        commands.download_command(args.version, args.vendor)
    elif args.command == "search":
        commands.search_command(args.keyword)


def main(argv: Sequence[str] | None = None) -> None:
    """Parse the command line and run the chosen command."""
    if "NO_COLOR" in os.environ or not supports_color():
        os.environ["ANSI_COLORS_DISABLED"] = "1"
    args = build_parser().parse_args(argv)
    try:
        _run(args)
    except JdkError as exc:
        print(f"{colored('Error:', 'red', attrs=['bold'])} {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()