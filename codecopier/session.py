"""Workspace session exposing the boundary operations used by front ends.

The session owns the active root, the rule set compiled for it, and the
staged selection. Every traversal receives the rule set explicitly; the
session only swaps it at open/refresh boundaries, under a lock, so watcher
threads and request handlers never observe a half-built rule list.

All operations convert failures into ``None`` or a status string; status
strings start with ``STATUS_SUCCESS_PREFIX`` or ``STATUS_ERROR_PREFIX`` when
they report success or failure.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Iterable
from pathlib import Path

from .clipboard import copy_text_to_clipboard
from .config import Settings
from .content import AggregationResult, FileView, aggregate, read_file_for_view
from .errors import ClipboardUnavailableError, CodecopierError, GitDiffTooLargeError, GitError
from .file_tree_model import EntryDescriptor, build_file_tree
from .git import git_staged_diff, git_staged_files
from .ignore import DEFAULT_BUILTINS, EMPTY_RULE_SET, KIND_FILE, Builtins, IgnoreRuleSet, load_rule_set
from .selection import SelectionSet, annotate_selection
from .structure import render_structure
from .watch import TreeWatcher

STATUS_SUCCESS_PREFIX = "✅"
STATUS_ERROR_PREFIX = "❌"

NO_ROOT_MESSAGE = "Open a folder first"
NO_TEXT_CONTENT = "No text content found."
NO_STAGED_FILES = "No staged files found"
FILES_ALREADY_SELECTED = "Files already selected"
NO_STAGED_CHANGES = "No staged changes. (Did you run 'git add'?)"

logger = logging.getLogger(__name__)


def success_status(message: str) -> str:
    return f"{STATUS_SUCCESS_PREFIX} {message}"


def error_status(message: str) -> str:
    return f"{STATUS_ERROR_PREFIX} Error: {message}"


def is_error_status(status: str) -> bool:
    return status.startswith(STATUS_ERROR_PREFIX)


def _megabytes(num_bytes: int) -> str:
    return f"{num_bytes // (1024 * 1024)}MB"


class Workspace:
    """One open root plus its rule set, selection, and collaborators."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        clipboard: Callable[[str], bool] = copy_text_to_clipboard,
        builtins: Builtins = DEFAULT_BUILTINS,
    ) -> None:
        self.settings = settings or Settings()
        self.selection = SelectionSet()
        self._clipboard = clipboard
        self._builtins = builtins
        self._lock = threading.RLock()
        self._root: Path | None = None
        self._rule_set: IgnoreRuleSet = EMPTY_RULE_SET
        self._watcher: TreeWatcher | None = None

    @property
    def root(self) -> Path | None:
        with self._lock:
            return self._root

    @property
    def rule_set(self) -> IgnoreRuleSet:
        with self._lock:
            return self._rule_set

    def _resolve_root(self, root: Path | str | None) -> Path | None:
        if root is None:
            return self.root
        return Path(os.path.abspath(os.fspath(root)))

    def _rule_set_for(self, root: Path) -> IgnoreRuleSet:
        with self._lock:
            if root == self._root:
                return self._rule_set
        return load_rule_set(root, self._builtins)

    def _write_clipboard(self, text: str) -> None:
        if not self._clipboard(text):
            raise ClipboardUnavailableError("clipboard unavailable (install wl-copy, xclip or xsel)")

    # Root lifecycle

    def open_root(self, path: Path | str | None) -> EntryDescriptor | None:
        """Make ``path`` the active root and return its filtered tree.

        ``None`` (a cancelled picker) or an inaccessible directory returns
        ``None`` and leaves the current root untouched. Opening a root
        clears the selection.
        """
        if path is None:
            return None
        root = Path(os.path.abspath(os.fspath(path)))
        if not root.is_dir():
            logger.warning("Cannot open %s: not a directory", root)
            return None

        rule_set = load_rule_set(root, self._builtins)
        self.stop_watching()
        with self._lock:
            self._root = root
            self._rule_set = rule_set
            self.selection.clear()
        logger.info("Opened %s with %d custom rules", root, len(rule_set))
        return build_file_tree(root, rule_set)

    def refresh_tree(self, root: Path | str | None = None) -> EntryDescriptor | None:
        """Reload the rule file and rebuild the filtered tree, or ``None`` on failure."""
        target = self._resolve_root(root)
        if target is None or not target.is_dir():
            return None
        rule_set = load_rule_set(target, self._builtins)
        with self._lock:
            if target == self._root:
                self._rule_set = rule_set
        return build_file_tree(target, rule_set)

    def get_unfiltered_structure(self, root: Path | str | None = None) -> EntryDescriptor | None:
        """Tree with only built-in directory exclusions applied."""
        target = self._resolve_root(root)
        if target is None:
            return None
        return build_file_tree(target, self._rule_set_for(target), filtered=False)

    def annotated_tree(self, root: Path | str | None = None) -> EntryDescriptor | None:
        """Filtered tree with explicit and inherited selection flags."""
        tree = self.refresh_tree(root)
        if tree is None:
            return None
        return annotate_selection(tree, self.selection)

    # Selection

    def stage_item(self, path: Path | str, name: str | None = None, kind: str | None = None) -> int:
        with self._lock:
            self.selection.add(path, name=name, kind=kind)
            return len(self.selection)

    def unstage_item(self, path: Path | str) -> int:
        with self._lock:
            self.selection.remove(path)
            return len(self.selection)

    def clear_selection(self) -> int:
        with self._lock:
            self.selection.clear()
            return 0

    # Payloads

    def selection_payload(
        self,
        paths: Iterable[Path | str] | None = None,
        root: Path | str | None = None,
    ) -> AggregationResult | None:
        """Aggregate ``paths`` (default: the staged selection) under ``root``."""
        target = self._resolve_root(root)
        if target is None:
            return None
        if paths is None:
            with self._lock:
                paths = self.selection.paths()
        return aggregate(
            list(paths),
            target,
            self._rule_set_for(target),
            max_file_bytes=self.settings.max_file_bytes,
        )

    def structure_payload(self, root: Path | str | None = None) -> str | None:
        tree = self.get_unfiltered_structure(root)
        if tree is None:
            return None
        return render_structure(tree)

    def staged_diff_payload(self, root: Path | str | None = None) -> str:
        target = self._resolve_root(root)
        if target is None:
            raise GitError(NO_ROOT_MESSAGE)
        return git_staged_diff(target, max_bytes=self.settings.git_diff_max_bytes)

    # Clipboard operations

    def copy_selection(
        self,
        paths: Iterable[Path | str] | None = None,
        root: Path | str | None = None,
    ) -> str:
        """Copy aggregated content to the clipboard and describe the outcome."""
        try:
            result = self.selection_payload(paths, root)
            if result is None:
                return error_status(NO_ROOT_MESSAGE)
            if result.is_empty:
                return NO_TEXT_CONTENT
            self._write_clipboard(result.text)
        except (OSError, CodecopierError) as exc:
            logger.warning("Copy failed: %s", exc)
            return error_status(str(exc))
        if result.skipped:
            logger.info("Skipped %d files while copying", len(result.skipped))
        return success_status(
            f"Success! Copied {result.included_count} items ({result.char_count:,} chars)."
        )

    def copy_structure(self, root: Path | str | None = None) -> str:
        try:
            text = self.structure_payload(root)
            if text is None:
                return error_status(NO_ROOT_MESSAGE)
            self._write_clipboard(text)
        except (OSError, CodecopierError) as exc:
            logger.warning("Copy structure failed: %s", exc)
            return error_status(str(exc))
        return success_status("Copied directory structure.")

    def copy_git_diff(self, root: Path | str | None = None) -> str:
        try:
            diff_text = self.staged_diff_payload(root)
        except GitDiffTooLargeError as exc:
            return error_status(
                f"Staged content is too large (>{_megabytes(exc.max_bytes)}). "
                "Unstage large files like lock-files."
            )
        except GitError as exc:
            return error_status(f"Git error: {exc}")
        if not diff_text.strip():
            return NO_STAGED_CHANGES
        try:
            self._write_clipboard(diff_text)
        except ClipboardUnavailableError as exc:
            return error_status(str(exc))
        return success_status("Copied staged changes to clipboard")

    def stage_git_staged(self, root: Path | str | None = None) -> str:
        """Add every git-staged file to the selection."""
        target = self._resolve_root(root)
        if target is None:
            return error_status(NO_ROOT_MESSAGE)
        try:
            staged = git_staged_files(target)
        except GitError as exc:
            return error_status(f"Git error: {exc}")
        if not staged:
            return NO_STAGED_FILES
        added = 0
        with self._lock:
            for path in staged:
                if self.selection.add(path, name=path.name, kind=KIND_FILE):
                    added += 1
        if added == 0:
            return FILES_ALREADY_SELECTED
        return success_status(f"Added {added} staged files")

    def read_file(self, path: Path | str) -> FileView:
        return read_file_for_view(Path(path), self.settings.max_file_bytes, self._builtins)

    # Change notification

    def start_watching(self, on_change: Callable[[EntryDescriptor | None], None]) -> bool:
        """Refresh the tree after debounced filesystem changes under the root."""
        self.stop_watching()
        with self._lock:
            root = self._root
            if root is None:
                return False

            def handle_change() -> None:
                on_change(self.refresh_tree(root))

            self._watcher = TreeWatcher(
                root,
                handle_change,
                rule_set_provider=lambda: self.rule_set,
                poll_seconds=self.settings.watch_poll_seconds,
                debounce_seconds=self.settings.watch_debounce_seconds,
            )
            self._watcher.start()
            return True

    def stop_watching(self) -> None:
        with self._lock:
            watcher = self._watcher
            self._watcher = None
        if watcher is not None:
            watcher.stop()


__all__ = [
    "STATUS_SUCCESS_PREFIX",
    "STATUS_ERROR_PREFIX",
    "NO_TEXT_CONTENT",
    "NO_STAGED_CHANGES",
    "NO_STAGED_FILES",
    "FILES_ALREADY_SELECTED",
    "success_status",
    "error_status",
    "is_error_status",
    "Workspace",
]
