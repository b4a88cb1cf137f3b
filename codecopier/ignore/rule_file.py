"""Loading of the per-root ``.codecopierignore`` rule file."""

from __future__ import annotations

import logging
from pathlib import Path

from .builtins import DEFAULT_BUILTINS, Builtins
from .resolver import IgnoreRuleSet

RULE_FILENAME = ".codecopierignore"

logger = logging.getLogger(__name__)


def rule_file_path(root: Path) -> Path:
    return Path(root) / RULE_FILENAME


def load_rule_set(root: Path, builtins: Builtins = DEFAULT_BUILTINS) -> IgnoreRuleSet:
    """Compile the rule file under ``root`` into a fresh ``IgnoreRuleSet``.

    A missing rule file yields an empty set. An unreadable or undecodable one
    is logged and also yields an empty set, so opening a root never fails on
    account of its rules.
    """
    path = rule_file_path(root)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return IgnoreRuleSet(source=None, builtins=builtins)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read rule file %s: %s", path, exc)
        return IgnoreRuleSet(source=None, builtins=builtins)

    rule_set = IgnoreRuleSet.from_lines(text.splitlines(), source=path, builtins=builtins)
    logger.debug("Loaded %d ignore rules from %s", len(rule_set), path)
    return rule_set


__all__ = [
    "RULE_FILENAME",
    "rule_file_path",
    "load_rule_set",
]
