"""Filesystem scanning and domain-tree construction for file/directory models."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from ..ignore import EMPTY_RULE_SET, KIND_DIRECTORY, KIND_FILE, IgnoreRuleSet
from .types import EntryDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryChild:
    """One visible directory child row."""

    name: str
    path: Path
    relative_path: str
    is_dir: bool

    @property
    def kind(self) -> str:
        return KIND_DIRECTORY if self.is_dir else KIND_FILE


def relative_posix_path(path: Path | str, root: Path | str) -> str:
    """Return ``path`` relative to ``root`` with forward slashes.

    The root itself maps to an empty string.
    """
    rel = os.path.relpath(os.fspath(path), os.fspath(root))
    if rel == os.curdir:
        return ""
    return rel.replace(os.sep, "/")


def child_sort_key(child: DirectoryChild | EntryDescriptor) -> tuple[bool, str]:
    """Directories first, then case-sensitive by name."""
    return (not child.is_dir, child.name)


def _is_visible(child_name: str, kind: str, relative_path: str, rule_set: IgnoreRuleSet, filtered: bool) -> bool:
    if filtered:
        return not rule_set.should_ignore(child_name, kind, relative_path)
    # Unfiltered walks still drop dependency/build directories.
    return not (kind == KIND_DIRECTORY and rule_set.builtins.is_ignored_dir(child_name))


def list_directory_children(
    directory: Path,
    root: Path,
    rule_set: IgnoreRuleSet = EMPTY_RULE_SET,
    *,
    filtered: bool = True,
) -> tuple[list[DirectoryChild], Exception | None]:
    """List visible children of ``directory`` in tree order.

    Returns ``(children, scan_error)``. ``scan_error`` is set when the
    directory itself cannot be scanned; entries whose type cannot be
    determined are skipped individually. Symlinks are followed, and dangling
    links or special files are dropped.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    is_dir = entry.is_dir()
                    is_file = not is_dir and entry.is_file()
                except OSError as exc:
                    logger.debug("Skipping %s: %s", entry.path, exc)
                    continue
                if not is_dir and not is_file:
                    continue

                child_path = Path(entry.path)
                relative_path = relative_posix_path(child_path, root)
                kind = KIND_DIRECTORY if is_dir else KIND_FILE
                if not _is_visible(entry.name, kind, relative_path, rule_set, filtered):
                    continue
                children.append(
                    DirectoryChild(
                        name=entry.name,
                        path=child_path,
                        relative_path=relative_path,
                        is_dir=is_dir,
                    )
                )
    except OSError as exc:
        logger.debug("Could not scan %s: %s", directory, exc)
        return [], exc

    children.sort(key=child_sort_key)
    return children, None


def _real_path(path: Path) -> str:
    try:
        return os.path.realpath(path)
    except (OSError, ValueError):
        return os.fspath(path)


def walk(
    directory: Path,
    root: Path,
    rule_set: IgnoreRuleSet = EMPTY_RULE_SET,
    *,
    filtered: bool = True,
) -> tuple[EntryDescriptor, ...]:
    """Enumerate visible entries under ``directory`` at any depth.

    Never raises for filesystem errors: an unreadable directory contributes
    zero children and the rest of the walk continues. A directory whose real
    path is already an ancestor on the current branch is skipped, which
    terminates symlink loops.

    Directories are scanned from an explicit stack and the frozen entries are
    assembled bottom-up afterwards, so nesting depth is not bounded by the
    interpreter recursion limit.
    """
    directory = Path(directory)
    root = Path(root)

    # listings[i] holds the visible rows of the i-th scanned directory; a row
    # pairs a child with the listing index of its own children (None for files).
    listings: list[list[tuple[DirectoryChild, int | None]]] = [[]]
    pending: list[tuple[int, Path, frozenset[str]]] = [(0, directory, frozenset({_real_path(directory)}))]
    while pending:
        index, current, ancestors = pending.pop()
        children, _scan_error = list_directory_children(current, root, rule_set, filtered=filtered)
        rows = listings[index]
        for child in children:
            if not child.is_dir:
                rows.append((child, None))
                continue
            real = _real_path(child.path)
            if real in ancestors:
                logger.debug("Skipping directory cycle at %s", child.path)
                continue
            child_index = len(listings)
            listings.append([])
            rows.append((child, child_index))
            pending.append((child_index, child.path, ancestors | {real}))

    # Child listings always have higher indices than their parent's.
    built: list[tuple[EntryDescriptor, ...]] = [()] * len(listings)
    for index in range(len(listings) - 1, -1, -1):
        built[index] = tuple(
            EntryDescriptor(
                name=child.name,
                path=child.path,
                relative_path=child.relative_path,
                kind=child.kind,
                children=() if child_index is None else built[child_index],
            )
            for child, child_index in listings[index]
        )
    return built[0]


def build_file_tree(
    root: Path,
    rule_set: IgnoreRuleSet = EMPTY_RULE_SET,
    *,
    filtered: bool = True,
) -> EntryDescriptor | None:
    """Build the root descriptor for ``root``, or ``None`` if it is not a directory."""
    root = Path(root)
    if not root.is_dir():
        return None
    return EntryDescriptor(
        name=root.name or str(root),
        path=root,
        relative_path="",
        kind=KIND_DIRECTORY,
        children=walk(root, root, rule_set, filtered=filtered),
    )


__all__ = [
    "DirectoryChild",
    "relative_posix_path",
    "child_sort_key",
    "list_directory_children",
    "walk",
    "build_file_tree",
]
