"""Tests for glob-to-regex rule compilation."""

from __future__ import annotations

import unittest

from codecopier.ignore import compile_rule


class CompileRuleTests(unittest.TestCase):
    def test_plain_wildcard_matches_base_name_only(self) -> None:
        rule = compile_rule("*.log")

        self.assertFalse(rule.is_negation)
        self.assertFalse(rule.matches_full_path)
        self.assertTrue(rule.matches("a.log", "deep/nested/a.log", is_dir=False))
        self.assertFalse(rule.matches("a.txt", "a.txt", is_dir=False))
        self.assertFalse(rule.matches("a.log.txt", "a.log.txt", is_dir=False))

    def test_negation_prefix_is_stripped_and_flagged(self) -> None:
        rule = compile_rule("!keep.log")

        self.assertTrue(rule.is_negation)
        self.assertEqual(rule.pattern, "!keep.log")
        self.assertTrue(rule.matches("keep.log", "keep.log", is_dir=False))

    def test_inner_slash_makes_rule_path_shaped(self) -> None:
        rule = compile_rule("src/*.py")

        self.assertTrue(rule.matches_full_path)
        self.assertTrue(rule.matches("a.py", "src/a.py", is_dir=False))
        self.assertTrue(rule.matches("a.py", "pkg/src/a.py", is_dir=False))
        self.assertFalse(rule.matches("a.py", "src/sub/a.py", is_dir=False))
        self.assertFalse(rule.matches("a.py", "a.py", is_dir=False))

    def test_trailing_slash_only_is_not_path_shaped_and_targets_directories(self) -> None:
        rule = compile_rule("generated/")

        self.assertFalse(rule.matches_full_path)
        self.assertTrue(rule.directory_only)
        self.assertTrue(rule.matches("generated", "a/generated", is_dir=True))
        self.assertFalse(rule.matches("generated", "generated", is_dir=False))

    def test_leading_slash_is_stripped_from_match_body(self) -> None:
        rule = compile_rule("/secrets")

        self.assertTrue(rule.matches_full_path)
        self.assertTrue(rule.matches("secrets", "secrets", is_dir=True))

    def test_double_star_crosses_separators(self) -> None:
        rule = compile_rule("**/gen/*.ts")

        self.assertTrue(rule.matches("a.ts", "gen/a.ts", is_dir=False))
        self.assertTrue(rule.matches("a.ts", "x/y/gen/a.ts", is_dir=False))
        self.assertFalse(rule.matches("a.ts", "gen/sub/a.ts", is_dir=False))

        anywhere = compile_rule("docs/**")
        self.assertTrue(anywhere.matches("b.md", "docs/a/b.md", is_dir=False))

    def test_question_mark_matches_one_character(self) -> None:
        rule = compile_rule("?.txt")

        self.assertTrue(rule.matches("a.txt", "a.txt", is_dir=False))
        self.assertFalse(rule.matches("ab.txt", "ab.txt", is_dir=False))
        self.assertFalse(rule.matches(".txt", ".txt", is_dir=False))

    def test_regex_metacharacters_are_literal(self) -> None:
        rule = compile_rule("a+b(1).txt")

        self.assertTrue(rule.matches("a+b(1).txt", "a+b(1).txt", is_dir=False))
        self.assertFalse(rule.matches("aab1.txt", "aab1.txt", is_dir=False))

    def test_malformed_glob_degrades_to_literal_match(self) -> None:
        rule = compile_rule("[abc")

        self.assertTrue(rule.matches("[abc", "[abc", is_dir=False))
        self.assertFalse(rule.matches("a", "a", is_dir=False))

    def test_bare_name_matches_files_and_directories(self) -> None:
        rule = compile_rule("build.out")

        self.assertTrue(rule.matches("build.out", "build.out", is_dir=True))
        self.assertTrue(rule.matches("build.out", "x/build.out", is_dir=False))


if __name__ == "__main__":
    unittest.main()
