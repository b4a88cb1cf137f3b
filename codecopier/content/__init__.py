"""File-content reading and payload aggregation."""

from __future__ import annotations

from .aggregate import (
    AggregationResult,
    SkippedFile,
    aggregate,
    format_file_block,
    format_placeholder,
)
from .reader import (
    DEFAULT_MAX_FILE_BYTES,
    READ_BINARY,
    READ_OK,
    READ_TOO_LARGE,
    READ_UNREADABLE,
    FileView,
    TextRead,
    read_file_for_view,
    read_text_file,
)

__all__ = [
    "AggregationResult",
    "SkippedFile",
    "aggregate",
    "format_file_block",
    "format_placeholder",
    "DEFAULT_MAX_FILE_BYTES",
    "READ_OK",
    "READ_BINARY",
    "READ_TOO_LARGE",
    "READ_UNREADABLE",
    "FileView",
    "TextRead",
    "read_file_for_view",
    "read_text_file",
]
