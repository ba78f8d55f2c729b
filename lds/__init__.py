"""Public package surface for lds.

Exports ``main`` for programmatic CLI invocation.
Tree building and rendering live in submodules under ``lds``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
