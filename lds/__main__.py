"""Module entrypoint for ``python -m lds``.

All argument parsing and traversal happen in ``lds.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
