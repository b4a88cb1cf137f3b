"""Concatenation of selected files and directories into one text payload.

Explicitly selected items bypass ignore rules; their descendants do not.
Explicit files that cannot be read as text leave a placeholder block so the
user sees what was dropped, while unreadable descendants are omitted.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from ..file_tree_model import DirectoryChild, list_directory_children, relative_posix_path
from ..ignore import EMPTY_RULE_SET, IgnoreRuleSet
from .reader import (
    DEFAULT_MAX_FILE_BYTES,
    READ_BINARY,
    READ_TOO_LARGE,
    TextRead,
    read_text_file,
)

FILE_HEADER_TEMPLATE = "--- File: {path} ---\n"
PLACEHOLDER_TEMPLATE = "--- {reason}: {path} ---\n\n"

PLACEHOLDER_REASONS = {
    READ_BINARY: "Skipped binary file",
    READ_TOO_LARGE: "Skipped oversized file",
}
PLACEHOLDER_UNREADABLE = "Could not read file"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkippedFile:
    """A file dropped from the payload, or replaced with a placeholder."""

    relative_path: str
    reason: str
    placeholder: bool


@dataclass(frozen=True)
class AggregationResult:
    """Concatenated payload plus per-item bookkeeping."""

    text: str
    included_count: int
    empty_count: int
    file_count: int = 0
    skipped: tuple[SkippedFile, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        """True when no file contributed real text (placeholders do not count)."""
        return self.file_count == 0

    @property
    def char_count(self) -> int:
        return len(self.text)


def format_file_block(relative_path: str, text: str) -> str:
    return f"{FILE_HEADER_TEMPLATE.format(path=relative_path)}{text}\n\n"


def format_placeholder(relative_path: str, status: str) -> str:
    reason = PLACEHOLDER_REASONS.get(status, PLACEHOLDER_UNREADABLE)
    return PLACEHOLDER_TEMPLATE.format(reason=reason, path=relative_path)


class _Aggregation:
    """Mutable accumulator for one ``aggregate`` call."""

    def __init__(self, root: Path, rule_set: IgnoreRuleSet, max_file_bytes: int) -> None:
        self.root = root
        self.rule_set = rule_set
        self.max_file_bytes = max_file_bytes
        self.blocks: list[str] = []
        self.file_count = 0
        self.skipped: list[SkippedFile] = []

    def read(self, path: Path) -> TextRead:
        return read_text_file(path, self.max_file_bytes, self.rule_set.builtins)

    def add_file(self, path: Path, *, explicit: bool) -> bool:
        relative_path = relative_posix_path(path, self.root)
        result = self.read(path)
        if result.ok:
            assert result.text is not None
            self.blocks.append(format_file_block(relative_path, result.text))
            self.file_count += 1
            return True

        self.skipped.append(SkippedFile(relative_path=relative_path, reason=result.status, placeholder=explicit))
        if explicit:
            self.blocks.append(format_placeholder(relative_path, result.status))
        else:
            logger.debug("Omitting %s from payload (%s)", relative_path, result.status)
        return False

    def children_of(self, directory: Path) -> Iterator[DirectoryChild]:
        children, _scan_error = list_directory_children(directory, self.root, self.rule_set)
        return iter(children)

    def add_directory(self, directory: Path, ancestors: frozenset[str]) -> bool:
        """Add every readable descendant of ``directory`` in pre-order."""
        contributed = False
        stack = [(self.children_of(directory), ancestors)]
        while stack:
            children, ancestors = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                continue
            if not child.is_dir:
                contributed = self.add_file(child.path, explicit=False) or contributed
                continue
            real = os.path.realpath(child.path)
            if real in ancestors:
                logger.debug("Skipping directory cycle at %s", child.path)
                continue
            stack.append((self.children_of(child.path), ancestors | {real}))
        return contributed

    def add_item(self, path: Path) -> bool:
        try:
            if path.is_dir():
                return self.add_directory(path, frozenset({os.path.realpath(path)}))
            if path.is_file():
                return self.add_file(path, explicit=True)
        except OSError as exc:
            logger.debug("Skipping %s: %s", path, exc)
            return False
        logger.debug("Skipping missing path %s", path)
        return False

    def result(self, included_count: int, empty_count: int) -> AggregationResult:
        return AggregationResult(
            text="".join(self.blocks),
            included_count=included_count,
            empty_count=empty_count,
            file_count=self.file_count,
            skipped=tuple(self.skipped),
        )


def aggregate(
    paths: Iterable[Path | str],
    root: Path,
    rule_set: IgnoreRuleSet = EMPTY_RULE_SET,
    *,
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES,
) -> AggregationResult:
    """Concatenate file blocks for ``paths`` in input order.

    Directories expand in tree order (directories first, then files, by
    name) with ignore rules applied to every descendant. Missing paths are
    counted as empty items rather than raising.
    """
    state = _Aggregation(Path(root), rule_set, max_file_bytes)
    included_count = 0
    empty_count = 0
    for raw_path in paths:
        if state.add_item(Path(raw_path)):
            included_count += 1
        else:
            empty_count += 1
    return state.result(included_count, empty_count)


__all__ = [
    "FILE_HEADER_TEMPLATE",
    "PLACEHOLDER_TEMPLATE",
    "SkippedFile",
    "AggregationResult",
    "format_file_block",
    "format_placeholder",
    "aggregate",
]
