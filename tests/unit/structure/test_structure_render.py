"""Tests for ASCII structure diagrams."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from codecopier.file_tree_model import EntryDescriptor, build_file_tree
from codecopier.ignore import KIND_DIRECTORY, KIND_FILE
from codecopier.structure import render_structure


def _file(name: str) -> EntryDescriptor:
    return EntryDescriptor(name=name, path=Path("/r") / name, relative_path=name, kind=KIND_FILE)


def _dir(name: str, *children: EntryDescriptor) -> EntryDescriptor:
    return EntryDescriptor(
        name=name,
        path=Path("/r") / name,
        relative_path=name,
        kind=KIND_DIRECTORY,
        children=tuple(children),
    )


class RenderStructureTests(unittest.TestCase):
    def test_render_of_walked_tree_puts_directories_first(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve() / "root"
            (root / "b").mkdir(parents=True)
            (root / "a.txt").write_text("a", encoding="utf-8")
            (root / "b" / "c.txt").write_text("c", encoding="utf-8")

            tree = build_file_tree(root, filtered=False)

            assert tree is not None
            self.assertEqual(
                render_structure(tree),
                "root/\n"
                "├── b/\n"
                "│   └── c.txt\n"
                "└── a.txt\n",
            )

    def test_render_sorts_case_insensitively_regardless_of_stored_order(self) -> None:
        tree = _dir("proj", _file("b.txt"), _file("A.txt"), _dir("src", _file("z.py")), _dir("Docs"))

        self.assertEqual(
            render_structure(tree),
            "proj/\n"
            "├── Docs/\n"
            "├── src/\n"
            "│   └── z.py\n"
            "├── A.txt\n"
            "└── b.txt\n",
        )

    def test_last_nested_child_extends_parent_prefix(self) -> None:
        tree = _dir("proj", _file("a.txt"), _dir("z", _dir("inner", _file("x"))))

        self.assertEqual(
            render_structure(tree),
            "proj/\n"
            "├── z/\n"
            "│   └── inner/\n"
            "│       └── x\n"
            "└── a.txt\n",
        )

    def test_empty_root_renders_single_line(self) -> None:
        self.assertEqual(render_structure(_dir("empty")), "empty/\n")


if __name__ == "__main__":
    unittest.main()
