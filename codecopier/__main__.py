"""Module entrypoint for ``python -m codecopier``.

This keeps module-mode execution behavior identical to the console script.
All argument parsing and session setup happen in ``codecopier.cli``.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
