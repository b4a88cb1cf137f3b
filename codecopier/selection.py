"""Staged-selection bookkeeping and inherited-selection tree annotation."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass, replace
from pathlib import Path

from .file_tree_model import EntryDescriptor
from .ignore import KIND_DIRECTORY, KIND_FILE


@dataclass(frozen=True)
class StagedItem:
    name: str
    kind: str


def normalize_path(path: Path | str) -> Path:
    return Path(os.path.abspath(os.fspath(path)))


class SelectionSet:
    """Insertion-ordered unique mapping of absolute path to staged metadata.

    Membership does not depend on ignore rules; paths are only revalidated
    when content is read.
    """

    def __init__(self) -> None:
        self._items: dict[Path, StagedItem] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        return normalize_path(path) in self._items

    def __iter__(self) -> Iterator[Path]:
        return iter(list(self._items))

    def add(self, path: Path | str, name: str | None = None, kind: str | None = None) -> bool:
        """Stage ``path``; returns ``False`` if it was already staged."""
        key = normalize_path(path)
        if key in self._items:
            return False
        if kind is None:
            kind = KIND_DIRECTORY if key.is_dir() else KIND_FILE
        self._items[key] = StagedItem(name=name or key.name, kind=kind)
        return True

    def remove(self, path: Path | str) -> bool:
        return self._items.pop(normalize_path(path), None) is not None

    def clear(self) -> None:
        self._items.clear()

    def get(self, path: Path | str) -> StagedItem | None:
        return self._items.get(normalize_path(path))

    def paths(self) -> list[Path]:
        return list(self._items)

    def items(self) -> list[tuple[Path, StagedItem]]:
        return list(self._items.items())


def annotate_selection(tree: EntryDescriptor, selection: SelectionSet) -> EntryDescriptor:
    """Return a copy of ``tree`` with selection flags set.

    ``selected`` marks explicitly staged entries; ``inherited_selection``
    marks every descendant of a selected directory.
    """

    # Flatten in pre-order first, then rebuild bottom-up; children always
    # receive higher indices than their parent.
    order: list[tuple[EntryDescriptor, bool, bool]] = []
    child_indices: list[list[int]] = []
    stack: list[tuple[EntryDescriptor, bool, int | None]] = [(tree, False, None)]
    while stack:
        entry, ancestor_selected, parent = stack.pop()
        index = len(order)
        explicit = entry.path in selection
        order.append((entry, explicit, ancestor_selected))
        child_indices.append([])
        if parent is not None:
            child_indices[parent].append(index)
        for child in reversed(entry.children):
            stack.append((child, ancestor_selected or explicit, index))

    built: list[EntryDescriptor | None] = [None] * len(order)
    for index in range(len(order) - 1, -1, -1):
        entry, explicit, ancestor_selected = order[index]
        built[index] = replace(
            entry,
            children=tuple(built[child] for child in child_indices[index]),
            selected=explicit,
            inherited_selection=ancestor_selected,
        )
    return built[0]


__all__ = [
    "StagedItem",
    "normalize_path",
    "SelectionSet",
    "annotate_selection",
]
