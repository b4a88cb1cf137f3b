"""Tests for staged selection bookkeeping and tree annotation."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from codecopier.file_tree_model import build_file_tree
from codecopier.ignore import KIND_DIRECTORY, KIND_FILE
from codecopier.selection import SelectionSet, annotate_selection


class SelectionSetTests(unittest.TestCase):
    def test_add_deduplicates_and_keeps_insertion_order(self) -> None:
        selection = SelectionSet()

        self.assertTrue(selection.add("/proj/b.txt", kind=KIND_FILE))
        self.assertTrue(selection.add("/proj/a", kind=KIND_DIRECTORY))
        self.assertFalse(selection.add("/proj/./b.txt", kind=KIND_FILE))

        self.assertEqual(selection.paths(), [Path("/proj/b.txt"), Path("/proj/a")])
        self.assertEqual(len(selection), 2)
        self.assertIn("/proj/b.txt", selection)
        self.assertNotIn(42, selection)

    def test_add_infers_kind_and_name_from_disk(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "pkg").mkdir()
            (root / "main.py").write_text("", encoding="utf-8")
            selection = SelectionSet()

            selection.add(root / "pkg")
            selection.add(root / "main.py")

            self.assertEqual(selection.get(root / "pkg").kind, KIND_DIRECTORY)
            self.assertEqual(selection.get(root / "main.py").kind, KIND_FILE)
            self.assertEqual(selection.get(root / "main.py").name, "main.py")

    def test_remove_and_clear(self) -> None:
        selection = SelectionSet()
        selection.add("/proj/a.txt", kind=KIND_FILE)
        selection.add("/proj/b.txt", kind=KIND_FILE)

        self.assertTrue(selection.remove("/proj/a.txt"))
        self.assertFalse(selection.remove("/proj/a.txt"))
        self.assertEqual(list(selection), [Path("/proj/b.txt")])

        selection.clear()
        self.assertEqual(len(selection), 0)


class AnnotateSelectionTests(unittest.TestCase):
    def test_descendants_of_selected_directory_inherit_selection(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "src" / "lib").mkdir(parents=True)
            (root / "src" / "lib" / "util.py").write_text("", encoding="utf-8")
            (root / "README.md").write_text("", encoding="utf-8")
            tree = build_file_tree(root)
            assert tree is not None
            selection = SelectionSet()
            selection.add(root / "src")

            annotated = annotate_selection(tree, selection)

            flags = {
                entry.relative_path: (entry.selected, entry.inherited_selection)
                for entry in annotated.iter_entries()
            }
            self.assertEqual(flags["src"], (True, False))
            self.assertEqual(flags["src/lib"], (False, True))
            self.assertEqual(flags["src/lib/util.py"], (False, True))
            self.assertEqual(flags["README.md"], (False, False))
            self.assertFalse(tree.children[0].selected)


if __name__ == "__main__":
    unittest.main()
