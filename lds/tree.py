"""Depth-first tree traversal producing glyph-prefixed output lines.

Traversal keeps an explicit stack of frames instead of recursing, so very
deep directory trees do not run into the interpreter recursion limit.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from .entries import TreeEntry, TreeOptions, apply_symlink_policy, list_directory_children, read_entry
from .render import format_entry_line, format_root_line
from .theme import TreeTheme

logger = logging.getLogger(__name__)

BRANCH = "╰─ "
TEE = "├─ "
PIPE = "│  "
SPACE = "   "


@dataclass(frozen=True)
class TreeFrame:
    """A directory being listed: its path, inherited prefix and depth below the root."""

    path: Path
    prefix: str
    depth: int


@dataclass
class _PendingLevel:
    frame: TreeFrame
    children: list[TreeEntry]
    ancestors: frozenset[tuple[int, int]] = frozenset()
    index: int = 0


def branch_glyph(is_last: bool) -> str:
    return BRANCH if is_last else TEE


def child_prefix(prefix: str, is_last: bool) -> str:
    """Extend ``prefix`` for the children of an entry drawn after it."""
    return prefix + (SPACE if is_last else PIPE)


def root_label(root: Path) -> str:
    return root.name or str(root)


def should_descend(frame: TreeFrame, max_depth: int | None) -> bool:
    """Whether children listed from ``frame`` may themselves be expanded."""
    if max_depth is None:
        return True
    return frame.depth + 1 < max_depth


def is_cycle(entry: TreeEntry, ancestors: frozenset[tuple[int, int]]) -> bool:
    """Whether ``entry`` is a directory already open higher up the current branch."""
    # st_ino is 0 where the platform does not report it; nothing to compare then.
    return entry.inode != 0 and entry.identity in ancestors


def iter_tree_lines(root: Path, options: TreeOptions, theme: TreeTheme) -> Iterator[str]:
    """Yield the rendered lines for the tree rooted at ``root``.

    The root is stat'ed and listed before anything is yielded; failures there
    raise ``OSError``. Failures listing nested directories are logged and
    traversal continues with the remaining entries.
    """
    root = Path(root)
    root_entry = read_entry(root, follow_symlinks=True)
    children, scan_error = list_directory_children(root, options.show_hidden, options.reverse)
    if scan_error is not None:
        raise scan_error

    yield format_root_line(root_entry, root_label(root), theme)

    stack = [_PendingLevel(TreeFrame(root, "", 0), children, frozenset({root_entry.identity}))]
    while stack:
        level = stack[-1]
        if level.index >= len(level.children):
            stack.pop()
            continue

        child = level.children[level.index]
        level.index += 1
        is_last = level.index == len(level.children)
        frame = level.frame

        entry = apply_symlink_policy(child, options)
        yield format_entry_line(entry, frame.prefix + branch_glyph(is_last), theme, options.long_format)

        if not entry.is_dir or not should_descend(frame, options.max_depth):
            continue

        if is_cycle(entry, level.ancestors):
            logger.warning("Not descending into %s: directory cycle", entry.path)
            continue

        sub_frame = TreeFrame(entry.path, child_prefix(frame.prefix, is_last), frame.depth + 1)
        grandchildren, scan_error = list_directory_children(sub_frame.path, options.show_hidden, options.reverse)
        if scan_error is not None:
            logger.warning("Error reading directory %s: %s", sub_frame.path, scan_error)
            continue
        stack.append(_PendingLevel(sub_frame, grandchildren, level.ancestors | {entry.identity}))


def render_tree(root: Path, options: TreeOptions, theme: TreeTheme) -> str:
    """Return the whole tree as one newline-terminated string."""
    return "".join(f"{line}\n" for line in iter_tree_lines(root, options, theme))


def print_tree(root: Path, options: TreeOptions, theme: TreeTheme, stream: TextIO) -> bool:
    """Write the tree for ``root`` to ``stream``.

    Returns ``False`` when the root itself could not be listed; the failure
    is logged and nothing is written for that root.
    """
    lines = iter_tree_lines(root, options, theme)
    try:
        first = next(lines)
    except OSError as exc:
        logger.warning("Error listing %s: %s", root, exc)
        return False
    stream.write(f"{first}\n")
    for line in lines:
        stream.write(f"{line}\n")
    return True


__all__ = [
    "BRANCH",
    "TEE",
    "PIPE",
    "SPACE",
    "TreeFrame",
    "branch_glyph",
    "child_prefix",
    "root_label",
    "should_descend",
    "is_cycle",
    "iter_tree_lines",
    "render_tree",
    "print_tree",
]
