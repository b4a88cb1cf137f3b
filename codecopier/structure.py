"""ASCII directory-structure diagrams in the style of the ``tree`` utility."""

from __future__ import annotations

from .file_tree_model import EntryDescriptor

CONNECTOR_MORE = "├── "
CONNECTOR_LAST = "└── "
INDENT_MORE = "│   "
INDENT_LAST = "    "


def structure_sort_key(entry: EntryDescriptor) -> tuple[bool, str, str]:
    """Directories first, then case-insensitive by name."""
    return (not entry.is_dir, entry.name.casefold(), entry.name)


def _display_name(entry: EntryDescriptor) -> str:
    return f"{entry.name}/" if entry.is_dir else entry.name


def render_structure(tree: EntryDescriptor) -> str:
    """Render ``tree`` as connector lines, one entry per line.

    Sibling order is recomputed here and does not depend on the order stored
    in ``tree``.
    """
    lines = [f"{tree.name}/"]

    root_children = sorted(tree.children, key=structure_sort_key)
    stack = [(root_children, "", iter(enumerate(root_children)))]
    while stack:
        children, prefix, positions = stack[-1]
        step = next(positions, None)
        if step is None:
            stack.pop()
            continue
        idx, child = step
        last = idx == len(children) - 1
        connector = CONNECTOR_LAST if last else CONNECTOR_MORE
        lines.append(f"{prefix}{connector}{_display_name(child)}")
        if child.is_dir and child.children:
            nested = sorted(child.children, key=structure_sort_key)
            stack.append((nested, prefix + (INDENT_LAST if last else INDENT_MORE), iter(enumerate(nested))))

    return "\n".join(lines) + "\n"


__all__ = [
    "CONNECTOR_MORE",
    "CONNECTOR_LAST",
    "structure_sort_key",
    "render_structure",
]
