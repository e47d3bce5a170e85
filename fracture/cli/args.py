"""Command-line argument parsing for fracture."""

import argparse

from fracture.__version__ import __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all fracture commands."""
    parser = argparse.ArgumentParser(
        prog="fracture",
        description="Quickly create git worktrees to work on multiple branches simultaneously",
        epilog="Fractures live in ~/.fracture/<repository>/<id> (override with FRACTURE_HOME).",
    )
    parser.add_argument("--version", action="version", version=f"fracture {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "-b", "--branch", metavar="NAME", help="Create a new branch with this name off the current HEAD"
    )
    parser.add_argument(
        "--no-install", action="store_true", help="Skip installing dependencies in the new fracture"
    )
    parser.add_argument(
        "--no-env", action="store_true", help="Skip copying .env files into the new fracture"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    subparsers.add_parser(
        "list", aliases=["ls"], help="List all fractures for the current repository"
    )

    enter_parser = subparsers.add_parser("enter", help="Enter an existing fracture")
    enter_parser.add_argument("id", nargs="?", help="Fracture id (pick interactively if omitted)")

    delete_parser = subparsers.add_parser("delete", help="Delete a fracture")
    delete_parser.add_argument("id", nargs="?", help="Fracture id (pick interactively if omitted)")
    delete_parser.add_argument(
        "-f", "--force", action="store_true", help="Force delete even with uncommitted changes"
    )
    delete_parser.add_argument("-a", "--all", action="store_true", help="Delete all fractures")

    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    args = build_parser().parse_args(argv)
    if args.command == "ls":
        args.command = "list"
    return args
