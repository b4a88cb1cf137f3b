"""Exception types raised by collaborators and caught at session boundaries."""

from __future__ import annotations


class CodecopierError(Exception):
    """Base class for recoverable codecopier failures."""


class GitError(CodecopierError):
    """Raised when a git shell-out fails or the root is not a repository."""


class GitDiffTooLargeError(GitError):
    """Raised when staged diff output exceeds the configured byte ceiling."""

    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes
        super().__init__(f"staged diff exceeds {max_bytes} bytes")


class ClipboardUnavailableError(CodecopierError):
    """Raised when no clipboard command accepted the payload."""


__all__ = [
    "CodecopierError",
    "GitError",
    "GitDiffTooLargeError",
    "ClipboardUnavailableError",
]
