"""Command-line front door for lds.

Parses flags and root paths, picks the color theme for the output stream,
then prints one tree per root. Exits with status 1 when any root failed.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .entries import TreeOptions
from .log import configure_logging
from .theme import resolve_theme
from .tree import print_tree


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lds",
        description="Print a styled tree of directory contents.",
        allow_abbrev=False,
    )
    parser.add_argument("paths", nargs="*", metavar="path", help="Directories to list. Defaults to the current directory.")
    parser.add_argument("-a", dest="show_hidden", action="store_true", help="Show hidden files.")
    parser.add_argument("-l", dest="long_format", action="store_true", help="Show long listing.")
    parser.add_argument("-r", dest="reverse", action="store_true", help="Reverse order.")
    parser.add_argument("-L", dest="deref_links", action="store_true", help="Follow symlinks.")
    parser.add_argument("--no-symlink", action="store_true", help="Do not show or follow symlink targets.")
    parser.add_argument(
        "--max-depth",
        type=_positive_int,
        default=None,
        metavar="N",
        help="Descend at most N levels below each root.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    return parser


def options_from_args(args: argparse.Namespace) -> TreeOptions:
    return TreeOptions(
        show_hidden=args.show_hidden,
        long_format=args.long_format,
        reverse=args.reverse,
        deref_links=args.deref_links,
        no_symlink=args.no_symlink,
        max_depth=args.max_depth,
    )


def _discard_stdout() -> None:
    """Point stdout at devnull so the interpreter's final flush cannot fail again."""
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, sys.stdout.fileno())
    finally:
        os.close(devnull)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and print a tree for every requested root.

    Roots are processed in order; a root that cannot be listed is reported on
    stderr and the remaining roots still print. Usage errors exit with status
    2 through argparse before any output.
    """
    args = build_parser().parse_args(argv)
    configure_logging()
    options = options_from_args(args)

    out = sys.stdout
    theme = resolve_theme(no_color=args.no_color or not out.isatty())
    roots = args.paths or ["."]
    failed = 0
    try:
        for idx, root in enumerate(roots):
            if len(roots) > 1:
                if idx > 0:
                    out.write("\n")
                out.write(f"{root}:\n")
            if not print_tree(Path(root), options, theme, out):
                failed += 1
        out.flush()
    except BrokenPipeError:
        _discard_stdout()
        raise SystemExit(1) from None

    if failed:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
