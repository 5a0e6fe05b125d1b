"""machi command-line interface."""

import argparse
import curses
import logging
import os
import sys
from typing import List, Optional, Sequence

from . import __version__
from .errors import LoadError, MachiError
from .models import DEFAULT_DIR, DIR_ENV_VAR, TodoList, default_dir
from .storage import load_lists

logger = logging.getLogger(__name__)


def print_lists(lists: Sequence[TodoList]) -> None:
    """Print every list and its items with checkbox markers."""
    for i, todo_list in enumerate(lists):
        if i:
            print()
        print(todo_list.name)
        if not todo_list.items:
            print("    (no items)")
        for item in todo_list.items:
            print(f"    {item.label}")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def load_or_exit(args: argparse.Namespace) -> List[TodoList]:
    """Load the collection; any startup error ends the process before the UI."""
    try:
        return load_lists(args.dir, skip_invalid=args.skip_invalid)
    except LoadError as e:
        sys.exit(f"machi: {e}")


def cmd_view(args: argparse.Namespace) -> None:
    """Interactive two-pane viewer (the default command)."""
    lists = load_or_exit(args)

    from .tui import start_curses

    try:
        start_curses(lists, os.path.abspath(args.dir))
    except KeyboardInterrupt:
        sys.exit(130)
    except (MachiError, curses.error) as e:
        # The terminal is already restored by the time this runs.
        print(f"machi: {e}")
        sys.exit(1)


def cmd_list(args: argparse.Namespace) -> None:
    lists = load_or_exit(args)
    if not lists:
        print(f"(no lists in {args.dir})")
        return
    print_lists(lists)


def cmd_path(args: argparse.Namespace) -> None:
    print(os.path.abspath(args.dir))


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    p = argparse.ArgumentParser(
        prog="machi", description="Browse the todo lists stored in a directory."
    )
    p.add_argument(
        "-d",
        "--dir",
        default=default_dir(),
        help=f"Directory of list files (default: ${DIR_ENV_VAR} or {DEFAULT_DIR})",
    )
    p.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Leave out unreadable or malformed list files instead of aborting",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log loading details to stderr")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.set_defaults(func=cmd_view)
    sub = p.add_subparsers(dest="cmd")

    s_view = sub.add_parser("view", help="Open the interactive viewer (default)")
    s_view.set_defaults(func=cmd_view)

    s_list = sub.add_parser("list", help="Print every list and its items")
    s_list.set_defaults(func=cmd_list)

    s_path = sub.add_parser("path", help="Show the absolute path to the lists directory")
    s_path.set_defaults(func=cmd_path)

    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point. Opens the viewer if no subcommand is given."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    logger.debug("lists directory: %s", os.path.abspath(args.dir))
    args.func(args)


if __name__ == "__main__":
    main()
