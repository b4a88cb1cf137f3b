"""Domain datatypes for filesystem-backed file tree entries."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from pathlib import Path

from ..ignore import KIND_DIRECTORY, KIND_FILE


@dataclass(frozen=True)
class EntryDescriptor:
    """One visible filesystem entry, with nested children for directories."""

    name: str
    path: Path
    relative_path: str
    kind: str
    children: tuple["EntryDescriptor", ...] = ()
    selected: bool = False
    inherited_selection: bool = False

    @property
    def is_dir(self) -> bool:
        return self.kind == KIND_DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind == KIND_FILE

    @cached_property
    def size(self) -> int | None:
        """File size in bytes, stat'd on first access; ``None`` for directories."""
        if self.is_dir:
            return None
        try:
            return int(self.path.stat().st_size)
        except OSError:
            return None

    def iter_entries(self):
        """Yield this entry and all descendants in pre-order."""
        stack = [self]
        while stack:
            entry = stack.pop()
            yield entry
            stack.extend(reversed(entry.children))

    def _row(self) -> dict[str, object]:
        data: dict[str, object] = {
            "name": self.name,
            "path": str(self.path),
            "relative_path": self.relative_path,
            "type": self.kind,
        }
        if self.selected or self.inherited_selection:
            data["selected"] = self.selected
            data["inherited_selection"] = self.inherited_selection
        return data

    def to_dict(self) -> dict[str, object]:
        """Return the plain-data shape handed to presentation collaborators."""
        top = self._row()
        stack = [(self, top)]
        while stack:
            entry, data = stack.pop()
            if not entry.is_dir:
                continue
            rows: list[dict[str, object]] = []
            data["children"] = rows
            for child in entry.children:
                row = child._row()
                rows.append(row)
                stack.append((child, row))
        return top


__all__ = [
    "EntryDescriptor",
]
