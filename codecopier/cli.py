"""Command-line front door for codecopier.

Resolves the project root, opens it in a ``Workspace``, and dispatches one
subcommand. Clipboard-bound commands can print their payload instead.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import time
from dataclasses import asdict, fields, replace
from pathlib import Path

from .config import Settings, load_settings, save_settings
from .errors import GitError
from .file_tree_model import EntryDescriptor
from .session import NO_TEXT_CONTENT, NO_STAGED_CHANGES, Workspace, error_status, is_error_status
from .structure import render_structure

SETTING_KEYS = tuple(field.name for field in fields(Settings))


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codecopier",
        description="Copy project files, structure, or staged git changes as one text payload.",
    )
    parser.add_argument("--root", default=None, help="Project root directory. Defaults to current directory.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging on stderr.")
    sub = parser.add_subparsers(dest="command", required=True)

    tree = sub.add_parser("tree", help="Show the filtered file tree.")
    tree.add_argument("--json", action="store_true", help="Emit the tree as JSON.")
    tree.add_argument("--all", action="store_true", help="Only apply built-in directory exclusions.")

    structure = sub.add_parser("structure", help="Copy an ASCII directory diagram.")
    structure.add_argument("--print", action="store_true", help="Print instead of copying.")

    copy = sub.add_parser("copy", help="Copy the contents of files and directories.")
    copy.add_argument("paths", nargs="+", help="Files or directories, in output order.")
    copy.add_argument("--print", action="store_true", help="Print instead of copying.")

    diff = sub.add_parser("diff", help="Copy the staged git diff.")
    diff.add_argument("--print", action="store_true", help="Print instead of copying.")

    sub.add_parser("staged", help="Copy the contents of all git-staged files.")

    show = sub.add_parser("show", help="Print one file as the viewer would load it.")
    show.add_argument("file")

    sub.add_parser("watch", help="Print the tree again whenever something changes.")

    config = sub.add_parser("config", help="Show persisted settings, updating any that are given.")
    config.add_argument("--max-file-bytes", type=int, default=None)
    config.add_argument("--git-diff-max-bytes", type=int, default=None)
    config.add_argument("--watch-debounce-seconds", type=float, default=None)
    config.add_argument("--watch-poll-seconds", type=float, default=None)
    return parser


def _emit_status(status: str) -> int:
    print(status, file=sys.stderr if is_error_status(status) else sys.stdout)
    return 1 if is_error_status(status) else 0


def _command_tree(workspace: Workspace, args: argparse.Namespace, tree: EntryDescriptor) -> int:
    if args.all:
        tree = workspace.get_unfiltered_structure() or tree
    if args.json:
        print(json.dumps(tree.to_dict(), indent=2))
    else:
        sys.stdout.write(render_structure(tree))
    return 0


def _command_copy(workspace: Workspace, args: argparse.Namespace) -> int:
    paths = [Path(os.path.abspath(raw)) for raw in args.paths]
    if not args.print:
        return _emit_status(workspace.copy_selection(paths))
    result = workspace.selection_payload(paths)
    if result is None or result.is_empty:
        return _emit_status(NO_TEXT_CONTENT)
    sys.stdout.write(result.text)
    return 0


def _command_structure(workspace: Workspace, args: argparse.Namespace) -> int:
    if not args.print:
        return _emit_status(workspace.copy_structure())
    sys.stdout.write(workspace.structure_payload() or "")
    return 0


def _command_diff(workspace: Workspace, args: argparse.Namespace) -> int:
    if not args.print:
        return _emit_status(workspace.copy_git_diff())
    try:
        diff_text = workspace.staged_diff_payload()
    except GitError as exc:
        return _emit_status(error_status(str(exc)))
    if not diff_text.strip():
        return _emit_status(NO_STAGED_CHANGES)
    sys.stdout.write(diff_text)
    return 0


def _command_staged(workspace: Workspace) -> int:
    status = workspace.stage_git_staged()
    if is_error_status(status):
        return _emit_status(status)
    if not len(workspace.selection):
        return _emit_status(status)
    return _emit_status(workspace.copy_selection())


def _command_show(workspace: Workspace, args: argparse.Namespace) -> int:
    view = workspace.read_file(Path(os.path.abspath(args.file)))
    if view.error is not None:
        return _emit_status(error_status(view.error))
    sys.stdout.write(view.content or "")
    return 0


def _command_watch(workspace: Workspace) -> int:
    def on_change(tree: EntryDescriptor | None) -> None:
        if tree is None:
            print(error_status("root is no longer accessible"), file=sys.stderr)
            return
        sys.stdout.write(render_structure(tree))
        sys.stdout.flush()

    workspace.start_watching(on_change)
    try:
        while True:
            time.sleep(1.0)
    except KeyboardInterrupt:
        pass
    finally:
        workspace.stop_watching()
    return 0


def _command_config(args: argparse.Namespace) -> int:
    updates = {
        key: getattr(args, key)
        for key in SETTING_KEYS
        if getattr(args, key) is not None
    }
    invalid = sorted(key for key, value in updates.items() if value <= 0)
    if invalid:
        return _emit_status(error_status(f"Settings must be positive: {', '.join(invalid)}"))

    settings = load_settings()
    if updates:
        settings = replace(settings, **updates)
        save_settings(settings)
    print(json.dumps(asdict(settings), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, open the root, and run one subcommand.

    Returns the process exit status: ``1`` when the command reports an error.
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    if args.command == "config":
        return _command_config(args)

    root = Path(args.root) if args.root is not None else Path.cwd()
    workspace = Workspace(settings=load_settings())
    tree = workspace.open_root(root)
    if tree is None:
        return _emit_status(error_status(f"Cannot open directory: {root}"))

    if args.command == "tree":
        return _command_tree(workspace, args, tree)
    if args.command == "copy":
        return _command_copy(workspace, args)
    if args.command == "structure":
        return _command_structure(workspace, args)
    if args.command == "diff":
        return _command_diff(workspace, args)
    if args.command == "staged":
        return _command_staged(workspace)
    if args.command == "show":
        return _command_show(workspace, args)
    if args.command == "watch":
        sys.stdout.write(render_structure(tree))
        return _command_watch(workspace)
    raise SystemExit(f"Unknown command: {args.command}")


if __name__ == "__main__":
    raise SystemExit(main())
