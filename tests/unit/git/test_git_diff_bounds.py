"""Staged-diff reads stay bounded when git hangs or floods its pipes."""

from __future__ import annotations

import subprocess
import threading
import unittest
from pathlib import Path
from unittest import mock

from codecopier.errors import GitDiffTooLargeError, GitError
from codecopier.git import git_staged_diff


class _FakeDiffProcess:
    """Popen stand-in whose stdout blocks until the process is killed."""

    def __init__(self, output: bytes | None = None, returncode: int = 0) -> None:
        self._output = output
        self._killed = threading.Event()
        self.stdout = self
        self.returncode = returncode
        self.kill_calls = 0

    def __call__(self, args, stdout=None, stderr=None):
        self.args = args
        self.stderr_target = stderr
        return self

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        return None

    def read(self, size: int) -> bytes:
        if self._output is None:
            self._killed.wait(5.0)
            return b""
        return self._output[:size]

    def kill(self) -> None:
        self.kill_calls += 1
        self.returncode = -9
        self._killed.set()

    def wait(self, timeout=None) -> int:
        return self.returncode


class GitDiffBoundsTests(unittest.TestCase):
    def _run(self, process: _FakeDiffProcess, **kwargs) -> str:
        with mock.patch("codecopier.git.shutil.which", return_value="/usr/bin/git"), mock.patch(
            "codecopier.git.subprocess.Popen", process
        ):
            return git_staged_diff(Path("/repo"), **kwargs)

    def test_hanging_git_is_killed_after_timeout(self) -> None:
        process = _FakeDiffProcess(output=None)

        with self.assertRaises(GitError) as ctx:
            self._run(process, timeout_seconds=0.05)

        self.assertIn("timed out", str(ctx.exception))
        self.assertEqual(process.kill_calls, 1)

    def test_stderr_is_not_a_pipe(self) -> None:
        process = _FakeDiffProcess(output=b"diff --git a/x b/x\n")

        self.assertEqual(self._run(process), "diff --git a/x b/x\n")
        self.assertIsNot(process.stderr_target, subprocess.PIPE)
        self.assertEqual(process.args, ["git", "-C", "/repo", "diff", "--cached"])

    def test_oversized_output_is_refused(self) -> None:
        process = _FakeDiffProcess(output=b"x" * 100)

        with self.assertRaises(GitDiffTooLargeError):
            self._run(process, max_bytes=10)
        self.assertEqual(process.kill_calls, 1)

    def test_nonzero_exit_becomes_git_error(self) -> None:
        process = _FakeDiffProcess(output=b"", returncode=128)

        with self.assertLogs("codecopier.git", level="WARNING"):
            with self.assertRaises(GitError) as ctx:
                self._run(process)
        self.assertIn("exit status 128", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
