"""Style tables for tree output.

Themes are immutable ANSI palettes built once at startup and handed to the
renderer. Color codes come from ``pygments.console`` so they match the
terminal palette Pygments uses for its own console output.
"""

from __future__ import annotations

from dataclasses import dataclass

from pygments.console import codes


@dataclass(frozen=True)
class TreeTheme:
    """Semantic ANSI palette used by the line renderer."""

    name: str
    directory: str
    file: str
    hidden: str
    symlink: str
    permissions: str
    size: str
    mtime: str
    reset: str

    def paint(self, style: str, text: str) -> str:
        """Wrap ``text`` in ``style`` and a reset, or return it bare when unstyled."""
        if not style:
            return text
        return f"{style}{text}{self.reset}"


DEFAULT_THEME = TreeTheme(
    name="default",
    directory=codes["green"],
    file=codes["brightblue"],
    hidden=codes["brightblack"],
    symlink=codes["magenta"],
    permissions=codes["yellow"],
    size=codes["blue"],
    mtime=codes["red"],
    reset=codes["reset"],
)

PLAIN_THEME = TreeTheme(
    name="plain",
    directory="",
    file="",
    hidden="",
    symlink="",
    permissions="",
    size="",
    mtime="",
    reset="",
)


def resolve_theme(*, no_color: bool = False) -> TreeTheme:
    """Return concrete theme for the requested color mode."""
    if no_color:
        return PLAIN_THEME
    return DEFAULT_THEME


__all__ = [
    "TreeTheme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "resolve_theme",
]
