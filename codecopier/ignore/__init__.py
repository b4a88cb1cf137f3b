"""Ignore-rule compilation and resolution.

This package contains the filtering primitives shared by tree walks and
content aggregation:
- built-in directory/filename/extension exclusion lists
- glob-to-regex compilation of custom rule lines
- rule-set values and the per-entry ``should_ignore`` decision
- loading of the per-root rule file
"""

from __future__ import annotations

from .builtins import DEFAULT_BUILTINS, IGNORED_DIRS, IGNORED_EXTENSIONS, IGNORED_FILENAMES, Builtins
from .compiler import IgnoreRule, compile_rule
from .resolver import (
    EMPTY_RULE_SET,
    KIND_DIRECTORY,
    KIND_FILE,
    IgnoreRuleSet,
    matches_custom_rules,
    should_ignore,
)
from .rule_file import RULE_FILENAME, load_rule_set, rule_file_path

__all__ = [
    "Builtins",
    "DEFAULT_BUILTINS",
    "IGNORED_DIRS",
    "IGNORED_EXTENSIONS",
    "IGNORED_FILENAMES",
    "IgnoreRule",
    "compile_rule",
    "IgnoreRuleSet",
    "EMPTY_RULE_SET",
    "KIND_FILE",
    "KIND_DIRECTORY",
    "matches_custom_rules",
    "should_ignore",
    "RULE_FILENAME",
    "rule_file_path",
    "load_rule_set",
]
