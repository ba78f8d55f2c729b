"""Format tree entries into styled output lines."""

from __future__ import annotations

import stat
import time

from .entries import TreeEntry
from .theme import TreeTheme

SIZE_WIDTH = 9
MTIME_FORMAT = "%Y-%m-%d %H:%M"


def entry_style(entry: TreeEntry, theme: TreeTheme) -> str:
    """Pick the name style: directory, then hidden, then symlink, then file."""
    if entry.is_dir:
        return theme.directory
    if entry.is_hidden:
        return theme.hidden
    if entry.is_symlink:
        return theme.symlink
    return theme.file


def display_name(entry: TreeEntry, name: str | None = None) -> str:
    text = entry.name if name is None else name
    if entry.link_target is not None:
        return f"{text} -> {entry.link_target}"
    return text


def format_mode(mode: int) -> str:
    return stat.filemode(mode)


def format_size(size: int) -> str:
    return f"{size:>{SIZE_WIDTH}d}"


def format_mtime(mtime: float) -> str:
    return time.strftime(MTIME_FORMAT, time.localtime(mtime))


def format_entry_line(entry: TreeEntry, prefix: str, theme: TreeTheme, long_format: bool = False) -> str:
    """Render one child row: glyph prefix, styled name and optional long columns."""
    name = theme.paint(entry_style(entry, theme), display_name(entry))
    if not long_format:
        return f"{prefix}{name}"
    mode_col = theme.paint(theme.permissions, format_mode(entry.mode))
    size_col = theme.paint(theme.size, format_size(entry.size))
    mtime_col = theme.paint(theme.mtime, format_mtime(entry.mtime))
    return f"{prefix}{name} {mode_col} {size_col} {mtime_col}"


def format_root_line(entry: TreeEntry, label: str, theme: TreeTheme) -> str:
    """Render the root row, which never carries a glyph or long-format columns."""
    return theme.paint(entry_style(entry, theme), display_name(entry, label))


__all__ = [
    "SIZE_WIDTH",
    "MTIME_FORMAT",
    "entry_style",
    "display_name",
    "format_mode",
    "format_size",
    "format_mtime",
    "format_entry_line",
    "format_root_line",
]
