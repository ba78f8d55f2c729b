"""Filesystem metadata records, directory listing, ordering and symlink policy."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable
from dataclasses import dataclass, replace
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreeOptions:
    """Traversal and rendering switches, fixed once arguments are parsed."""

    show_hidden: bool = False
    long_format: bool = False
    reverse: bool = False
    deref_links: bool = False
    no_symlink: bool = False
    max_depth: int | None = None


@dataclass(frozen=True)
class TreeEntry:
    """One filesystem entry as observed by ``lstat`` (or ``stat`` when dereferenced)."""

    name: str
    path: Path
    mode: int
    size: int
    mtime: float
    is_dir: bool
    is_symlink: bool
    link_target: str | None = None
    device: int = 0
    inode: int = 0

    @property
    def identity(self) -> tuple[int, int]:
        return (self.device, self.inode)

    @property
    def is_hidden(self) -> bool:
        return self.name.startswith(".")


def _entry_from_stat(name: str, path: Path, st: os.stat_result) -> TreeEntry:
    return TreeEntry(
        name=name,
        path=path,
        mode=st.st_mode,
        size=int(st.st_size),
        mtime=float(st.st_mtime),
        is_dir=stat.S_ISDIR(st.st_mode),
        is_symlink=stat.S_ISLNK(st.st_mode),
        device=int(st.st_dev),
        inode=int(st.st_ino),
    )


def read_entry(path: Path, follow_symlinks: bool = False) -> TreeEntry:
    """Stat ``path`` into a :class:`TreeEntry`; raises ``OSError`` on failure."""
    st = os.stat(path, follow_symlinks=follow_symlinks)
    return _entry_from_stat(path.name, path, st)


def sort_entries(entries: Iterable[TreeEntry], reverse: bool = False) -> list[TreeEntry]:
    """Order entries by case-insensitive name, descending when ``reverse``.

    The exact name breaks ties between names that only differ in case, so
    the descending order is always the ascending order reversed.
    """
    return sorted(entries, key=lambda entry: (entry.name.casefold(), entry.name), reverse=reverse)


def list_directory_children(
    directory: Path,
    show_hidden: bool,
    reverse: bool = False,
) -> tuple[list[TreeEntry], Exception | None]:
    """List visible immediate children of ``directory`` in display order.

    Returns ``(children, scan_error)``. ``scan_error`` is set when the
    directory cannot be opened or read; children whose metadata cannot be
    read are skipped with a warning.
    """
    children: list[TreeEntry] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                name = child.name
                if not show_hidden and name.startswith("."):
                    continue
                child_path = Path(child.path)
                try:
                    st = child.stat(follow_symlinks=False)
                except OSError as exc:
                    logger.warning("Error reading %s: %s", child_path, exc)
                    continue
                children.append(_entry_from_stat(name, child_path, st))
    except OSError as exc:
        return [], exc

    return sort_entries(children, reverse=reverse), None


def apply_symlink_policy(entry: TreeEntry, options: TreeOptions) -> TreeEntry:
    """Return the entry to display and descend into for ``entry``.

    With ``deref_links`` a symlink is replaced by its fully resolved target;
    an unresolvable link is kept as is. Otherwise, unless ``no_symlink`` is
    set, the immediate link target is attached for display only.
    """
    if not entry.is_symlink:
        return entry

    if options.deref_links:
        try:
            target = entry.path.resolve(strict=True)
            return read_entry(target, follow_symlinks=True)
        except (OSError, RuntimeError) as exc:
            logger.debug("Cannot dereference %s: %s", entry.path, exc)
            return entry

    if options.no_symlink:
        return entry

    try:
        link_target = os.readlink(entry.path)
    except OSError as exc:
        logger.debug("Cannot read link %s: %s", entry.path, exc)
        return entry
    return replace(entry, link_target=link_target)


__all__ = [
    "TreeOptions",
    "TreeEntry",
    "read_entry",
    "sort_entries",
    "list_directory_children",
    "apply_symlink_policy",
]
