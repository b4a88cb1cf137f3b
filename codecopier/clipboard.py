"""Clipboard sink backed by platform clipboard commands."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys

logger = logging.getLogger(__name__)


def clipboard_commands(platform: str | None = None, os_name: str | None = None) -> list[list[str]]:
    """Return candidate clipboard commands for the running platform, in preference order."""
    platform = sys.platform if platform is None else platform
    os_name = os.name if os_name is None else os_name
    if platform == "darwin":
        return [["pbcopy"]]
    if os_name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def copy_text_to_clipboard(text: str) -> bool:
    """Best-effort UTF-8 clipboard copy across macOS, Windows, and common Linux tools."""
    if not text:
        return False

    for command in clipboard_commands():
        if shutil.which(command[0]) is None:
            continue
        try:
            proc = subprocess.run(
                command,
                input=text.encode("utf-8"),
                check=False,
            )
        except OSError as exc:
            logger.debug("Clipboard command %s failed: %s", command[0], exc)
            continue
        if proc.returncode == 0:
            return True
        logger.debug("Clipboard command %s exited with %d", command[0], proc.returncode)
    logger.warning("No clipboard command accepted the payload")
    return False


__all__ = [
    "clipboard_commands",
    "copy_text_to_clipboard",
]
