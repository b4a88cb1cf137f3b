"""Per-entry exclusion decisions combining built-in lists and custom rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .builtins import DEFAULT_BUILTINS, Builtins
from .compiler import IgnoreRule, compile_rule

KIND_FILE = "file"
KIND_DIRECTORY = "directory"


@dataclass(frozen=True)
class IgnoreRuleSet:
    """Ordered custom rules loaded for one root.

    Values are immutable; reloading a root produces a new set instead of
    mutating a shared one.
    """

    rules: tuple[IgnoreRule, ...] = ()
    source: Path | None = None
    builtins: Builtins = field(default=DEFAULT_BUILTINS)

    @classmethod
    def from_lines(
        cls,
        lines,
        *,
        source: Path | None = None,
        builtins: Builtins = DEFAULT_BUILTINS,
    ) -> IgnoreRuleSet:
        """Compile raw rule-file lines, skipping blanks and ``#`` comments."""
        compiled: list[IgnoreRule] = []
        for raw in lines:
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            compiled.append(compile_rule(line))
        return cls(rules=tuple(compiled), source=source, builtins=builtins)

    def __len__(self) -> int:
        return len(self.rules)

    def should_ignore(self, name: str, kind: str, relative_path: str) -> bool:
        return should_ignore(name, kind, relative_path, self.builtins, self.rules)


EMPTY_RULE_SET = IgnoreRuleSet()


def matches_custom_rules(
    name: str,
    kind: str,
    relative_path: str,
    rules: tuple[IgnoreRule, ...] | list[IgnoreRule],
) -> bool:
    """Fold ``rules`` left to right; the last matching rule decides."""
    is_dir = kind == KIND_DIRECTORY
    ignored = False
    for rule in rules:
        if rule.matches(name, relative_path, is_dir):
            ignored = not rule.is_negation
    return ignored


def should_ignore(
    name: str,
    kind: str,
    relative_path: str,
    builtins: Builtins,
    rules: tuple[IgnoreRule, ...] | list[IgnoreRule],
) -> bool:
    """Return whether an entry is excluded.

    Built-in directory, filename and extension exclusions are absolute:
    negated custom rules cannot re-include them.
    """
    if kind == KIND_DIRECTORY:
        if builtins.is_ignored_dir(name):
            return True
    elif builtins.is_binary_name(name):
        return True
    return matches_custom_rules(name, kind, relative_path, rules)


__all__ = [
    "KIND_FILE",
    "KIND_DIRECTORY",
    "IgnoreRuleSet",
    "EMPTY_RULE_SET",
    "matches_custom_rules",
    "should_ignore",
]
