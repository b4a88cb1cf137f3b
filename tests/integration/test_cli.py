"""CLI dispatch tests.

Runs ``codecopier.cli.main`` against temporary roots with printed output
instead of the clipboard.
"""

from __future__ import annotations

import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

from codecopier import cli
from codecopier.config import Settings
from codecopier.ignore import RULE_FILENAME


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name).resolve()
        patcher = mock.patch("codecopier.cli.load_settings", return_value=Settings())
        patcher.start()
        self.addCleanup(patcher.stop)

    def _run(self, *argv: str) -> tuple[int, str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            code = cli.main(["--root", str(self.root), *argv])
        return code, stdout.getvalue(), stderr.getvalue()

    def test_tree_json_lists_visible_entries(self) -> None:
        (self.root / "src").mkdir()
        (self.root / "src" / "app.py").write_text("", encoding="utf-8")
        (self.root / "debug.log").write_text("", encoding="utf-8")
        (self.root / RULE_FILENAME).write_text("*.log\n", encoding="utf-8")

        code, out, _err = self._run("tree", "--json")

        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual([child["name"] for child in data["children"]], ["src", RULE_FILENAME])
        self.assertEqual(data["children"][0]["children"][0]["relative_path"], "src/app.py")

    def test_copy_print_writes_payload(self) -> None:
        (self.root / "a.txt").write_text("alpha", encoding="utf-8")

        code, out, _err = self._run("copy", "--print", str(self.root / "a.txt"))

        self.assertEqual(code, 0)
        self.assertEqual(out, "--- File: a.txt ---\nalpha\n\n")

    def test_copy_print_of_binary_only_reports_no_content(self) -> None:
        (self.root / "a.png").write_bytes(b"\x89PNG")

        code, out, _err = self._run("copy", "--print", str(self.root / "a.png"))

        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "No text content found.")

    def test_structure_print_renders_diagram(self) -> None:
        (self.root / "b").mkdir()
        (self.root / "b" / "c.txt").write_text("", encoding="utf-8")
        (self.root / "a.txt").write_text("", encoding="utf-8")

        code, out, _err = self._run("structure", "--print")

        self.assertEqual(code, 0)
        self.assertEqual(out, f"{self.root.name}/\n├── b/\n│   └── c.txt\n└── a.txt\n")

    def test_show_reports_missing_file(self) -> None:
        code, _out, err = self._run("show", str(self.root / "missing.txt"))

        self.assertEqual(code, 1)
        self.assertIn("File not found.", err)

    def test_missing_root_exits_with_error(self) -> None:
        stderr = io.StringIO()
        with redirect_stdout(io.StringIO()), redirect_stderr(stderr):
            code = cli.main(["--root", str(self.root / "nope"), "tree"])

        self.assertEqual(code, 1)
        self.assertIn("Cannot open directory", stderr.getvalue())


class CliConfigTests(unittest.TestCase):
    def _run(self, config_path: Path, *argv: str) -> tuple[int, str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        with mock.patch("codecopier.config.CONFIG_PATH", config_path), redirect_stdout(stdout), redirect_stderr(stderr):
            code = cli.main(["config", *argv])
        return code, stdout.getvalue(), stderr.getvalue()

    def test_config_updates_are_persisted_and_reloaded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"

            code, out, _err = self._run(config_path, "--max-file-bytes", "4096", "--watch-poll-seconds", "0.25")
            shown_code, shown, _err = self._run(config_path)

            self.assertEqual(code, 0)
            self.assertEqual(json.loads(out)["max_file_bytes"], 4096)
            self.assertEqual(shown_code, 0)
            self.assertEqual(json.loads(shown)["max_file_bytes"], 4096)
            self.assertEqual(json.loads(shown)["watch_poll_seconds"], 0.25)
            self.assertEqual(json.loads(config_path.read_text(encoding="utf-8"))["max_file_bytes"], 4096)

    def test_config_rejects_non_positive_values(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"

            code, _out, err = self._run(config_path, "--git-diff-max-bytes", "0")

            self.assertEqual(code, 1)
            self.assertIn("git_diff_max_bytes", err)
            self.assertFalse(config_path.exists())


if __name__ == "__main__":
    unittest.main()
