"""Public package surface for codecopier.

Exports ``main`` for programmatic CLI invocation and the ``Workspace``
session used by graphical front ends.
"""

from __future__ import annotations

__version__ = "0.1.0"


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


def __getattr__(name: str):
    if name == "Workspace":
        from .session import Workspace

        return Workspace
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["main", "Workspace", "__version__"]
