"""Text-only file reading with binary detection and a per-file size ceiling."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..ignore import DEFAULT_BUILTINS, Builtins

DEFAULT_MAX_FILE_BYTES = 2 * 1024 * 1024

READ_OK = "ok"
READ_BINARY = "binary"
READ_TOO_LARGE = "too_large"
READ_UNREADABLE = "unreadable"

VIEW_ERROR_MESSAGES = {
    READ_BINARY: "Binary or ignored file type.",
    READ_TOO_LARGE: "File is too large to display.",
}

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextRead:
    """Outcome of reading one file as text."""

    path: Path
    status: str
    text: str | None = None
    size: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == READ_OK


def read_text_file(
    path: Path,
    max_bytes: int = DEFAULT_MAX_FILE_BYTES,
    builtins: Builtins = DEFAULT_BUILTINS,
) -> TextRead:
    """Read ``path`` as UTF-8 text.

    Files matching a built-in binary name, containing a NUL byte, or failing
    strict UTF-8 decoding are reported as binary. Files larger than
    ``max_bytes`` are reported without being loaded; a file of exactly
    ``max_bytes`` is read.
    """
    path = Path(path)
    if builtins.is_binary_name(path.name):
        return TextRead(path=path, status=READ_BINARY)

    try:
        size = int(path.stat().st_size)
    except OSError as exc:
        logger.debug("Could not stat %s: %s", path, exc)
        return TextRead(path=path, status=READ_UNREADABLE, error=str(exc))
    if size > max_bytes:
        return TextRead(path=path, status=READ_TOO_LARGE, size=size)

    try:
        with path.open("rb") as handle:
            # One extra byte detects files that grew after the stat call.
            raw = handle.read(max_bytes + 1)
    except OSError as exc:
        logger.debug("Could not read %s: %s", path, exc)
        return TextRead(path=path, status=READ_UNREADABLE, size=size, error=str(exc))
    if len(raw) > max_bytes:
        return TextRead(path=path, status=READ_TOO_LARGE, size=len(raw))
    if b"\x00" in raw:
        return TextRead(path=path, status=READ_BINARY, size=len(raw))
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        return TextRead(path=path, status=READ_BINARY, size=len(raw))
    return TextRead(path=path, status=READ_OK, text=text, size=len(raw))


@dataclass(frozen=True)
class FileView:
    """Raw file text for a viewer, or a short reason it cannot be shown."""

    path: Path
    content: str | None = None
    error: str | None = None


def read_file_for_view(
    path: Path,
    max_bytes: int = DEFAULT_MAX_FILE_BYTES,
    builtins: Builtins = DEFAULT_BUILTINS,
) -> FileView:
    """Load one file for display without highlighting."""
    path = Path(path)
    if not path.is_file():
        return FileView(path=path, error="File not found.")
    result = read_text_file(path, max_bytes, builtins)
    if result.ok:
        return FileView(path=path, content=result.text)
    message = VIEW_ERROR_MESSAGES.get(result.status) or result.error or "Unreadable file."
    return FileView(path=path, error=message)


__all__ = [
    "DEFAULT_MAX_FILE_BYTES",
    "READ_OK",
    "READ_BINARY",
    "READ_TOO_LARGE",
    "READ_UNREADABLE",
    "TextRead",
    "read_text_file",
    "FileView",
    "read_file_for_view",
]
