"""Thin ``git`` shell-outs for staged files and the staged diff."""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
import threading
from pathlib import Path

from .errors import GitDiffTooLargeError, GitError

DEFAULT_GIT_DIFF_MAX_BYTES = 10 * 1024 * 1024
GIT_TIMEOUT_SECONDS = 10.0

logger = logging.getLogger(__name__)


def _run_git(cwd: Path, args: list[str], timeout_seconds: float) -> subprocess.CompletedProcess[str]:
    if shutil.which("git") is None:
        raise GitError("git executable not found")
    try:
        proc = subprocess.run(
            ["git", "-C", str(cwd), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        raise GitError(f"git {args[0]} failed: {exc}") from exc
    if proc.returncode != 0:
        detail = proc.stderr.strip() or f"exit status {proc.returncode}"
        logger.warning("git %s failed in %s: %s", " ".join(args), cwd, detail)
        raise GitError(detail)
    return proc


def resolve_repo_root(path: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> Path:
    """Return the top-level directory of the repository containing ``path``."""
    proc = _run_git(Path(path), ["rev-parse", "--show-toplevel"], timeout_seconds)
    top_level = proc.stdout.strip()
    if not top_level:
        raise GitError("not inside a git work tree")
    return Path(top_level)


def git_staged_files(root: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> list[Path]:
    """Return absolute paths of staged files that still exist on disk.

    Deleted-but-staged paths are left out since there is no content to copy.
    """
    repo_root = resolve_repo_root(root, timeout_seconds)
    proc = _run_git(repo_root, ["diff", "--name-only", "--cached", "-z"], timeout_seconds)
    staged: list[Path] = []
    for rel_path in proc.stdout.split("\0"):
        rel_path = rel_path.strip()
        if not rel_path:
            continue
        full_path = repo_root / rel_path
        if full_path.exists():
            staged.append(full_path)
    return staged


def _read_bounded(stream, limit: int, timeout_seconds: float) -> bytes | None:
    """Read up to ``limit`` bytes on a helper thread.

    Returns ``None`` when the read has not finished within ``timeout_seconds``.
    """
    chunks: list[bytes] = []
    reader = threading.Thread(
        target=lambda: chunks.append(stream.read(limit)),
        name="codecopier-git-diff",
        daemon=True,
    )
    reader.start()
    reader.join(timeout_seconds)
    if reader.is_alive():
        return None
    return chunks[0] if chunks else b""


def git_staged_diff(
    root: Path,
    max_bytes: int = DEFAULT_GIT_DIFF_MAX_BYTES,
    timeout_seconds: float = GIT_TIMEOUT_SECONDS,
) -> str:
    """Return ``git diff --cached`` output for the repository at ``root``.

    Output larger than ``max_bytes`` raises ``GitDiffTooLargeError``; the diff
    is never truncated. A git process that does not finish within
    ``timeout_seconds`` is killed and reported as a ``GitError``. Stderr goes
    to a temporary file so a chatty process cannot block on a full pipe.
    """
    if shutil.which("git") is None:
        raise GitError("git executable not found")

    with tempfile.TemporaryFile() as stderr_file:
        try:
            proc = subprocess.Popen(
                ["git", "-C", str(root), "diff", "--cached"],
                stdout=subprocess.PIPE,
                stderr=stderr_file,
            )
        except OSError as exc:
            raise GitError(f"git diff failed: {exc}") from exc

        with proc:
            data = _read_bounded(proc.stdout, max_bytes + 1, timeout_seconds)
            if data is None:
                proc.kill()
                raise GitError("git diff timed out")
            if len(data) > max_bytes:
                proc.kill()
                raise GitDiffTooLargeError(max_bytes)
            try:
                proc.wait(timeout=timeout_seconds)
            except subprocess.TimeoutExpired as exc:
                proc.kill()
                raise GitError("git diff timed out") from exc

        if proc.returncode != 0:
            stderr_file.seek(0)
            stderr = stderr_file.read().decode("utf-8", errors="replace").strip()
            detail = stderr or f"exit status {proc.returncode}"
            logger.warning("git diff --cached failed in %s: %s", root, detail)
            raise GitError(detail)
    return data.decode("utf-8", errors="replace")


__all__ = [
    "DEFAULT_GIT_DIFF_MAX_BYTES",
    "resolve_repo_root",
    "git_staged_files",
    "git_staged_diff",
]
