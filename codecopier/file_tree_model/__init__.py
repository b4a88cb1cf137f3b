"""Domain model for filesystem trees filtered by ignore rules.

This package contains non-UI tree primitives:
- the ``EntryDescriptor`` datatype with nested children
- filtered and unfiltered directory walks
"""

from __future__ import annotations

from .fs import (
    DirectoryChild,
    build_file_tree,
    child_sort_key,
    list_directory_children,
    relative_posix_path,
    walk,
)
from .types import EntryDescriptor

__all__ = [
    "EntryDescriptor",
    "DirectoryChild",
    "relative_posix_path",
    "child_sort_key",
    "list_directory_children",
    "walk",
    "build_file_tree",
]
