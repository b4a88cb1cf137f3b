"""Glob-to-regex compilation for per-root ignore rules.

Supports a small glob subset: ``*`` (one path segment), ``**`` (any depth),
and ``?`` (one non-separator character). Everything else is literal.
A compiled rule matches the whole candidate or any ``/``-bounded suffix.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

NEGATION_PREFIX = "!"
PATH_SEPARATOR = "/"


@dataclass(frozen=True)
class IgnoreRule:
    """One compiled rule-file line."""

    pattern: str
    matcher: re.Pattern[str]
    is_negation: bool = False
    matches_full_path: bool = False
    directory_only: bool = False

    def matches(self, name: str, relative_path: str, is_dir: bool) -> bool:
        """Return whether this rule matches an entry, ignoring polarity."""
        if self.directory_only and not is_dir:
            return False
        candidate = relative_path if self.matches_full_path else name
        return self.matcher.fullmatch(candidate) is not None


def _translate_glob(body: str) -> str:
    out: list[str] = []
    idx = 0
    length = len(body)
    while idx < length:
        ch = body[idx]
        if ch == "*":
            if idx + 1 < length and body[idx + 1] == "*":
                idx += 2
                if idx < length and body[idx] == PATH_SEPARATOR:
                    # "**/" may also match zero directories
                    out.append("(?:.*/)?")
                    idx += 1
                else:
                    out.append(".*")
                continue
            out.append("[^/]*")
        elif ch == "?":
            out.append("[^/]")
        else:
            out.append(re.escape(ch))
        idx += 1
    return "".join(out)


def compile_rule(rule_text: str) -> IgnoreRule:
    """Compile one trimmed, non-comment rule line into an ``IgnoreRule``.

    Never raises: unusual glob syntax is treated literally.
    """
    body = rule_text
    is_negation = body.startswith(NEGATION_PREFIX)
    if is_negation:
        body = body[len(NEGATION_PREFIX) :]

    matches_full_path = PATH_SEPARATOR in body.rstrip(PATH_SEPARATOR)
    directory_only = body.endswith(PATH_SEPARATOR)

    if body.startswith(PATH_SEPARATOR):
        body = body[1:]
    if body.endswith(PATH_SEPARATOR):
        body = body[:-1]

    expression = "(?:.*/)?" + _translate_glob(body)
    return IgnoreRule(
        pattern=rule_text,
        matcher=re.compile(expression, re.DOTALL),
        is_negation=is_negation,
        matches_full_path=matches_full_path,
        directory_only=directory_only,
    )


__all__ = [
    "IgnoreRule",
    "compile_rule",
]
