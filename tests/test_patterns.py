"""Tests for include/exclude filtering."""

from __future__ import annotations

import pytest

from filecopy.core.models import PatternSet
from filecopy.core.patterns import matches, should_include


class TestMatches:
    @pytest.mark.parametrize(
        "name, pattern",
        [
            ("report.txt", "*.txt"),
            ("a.c", "?.c"),
            ("data1.csv", "data[0-9].csv"),
            ("Makefile", "Makefile"),
        ],
    )
    def test_matching(self, name: str, pattern: str) -> None:
        assert matches(name, pattern)

    @pytest.mark.parametrize(
        "name, pattern",
        [
            ("report.txt", "*.pdf"),
            ("ab.c", "?.c"),
            ("datax.csv", "data[0-9].csv"),
        ],
    )
    def test_not_matching(self, name: str, pattern: str) -> None:
        assert not matches(name, pattern)

    def test_matches_name_not_full_path(self) -> None:
        assert matches("/some/dir/notes.txt", "*.txt")
        assert not matches("/some/dir/notes.txt", "/some/*")


class TestShouldInclude:
    def test_no_patterns_includes_everything(self) -> None:
        assert should_include("anything.bin", None)
        assert should_include("anything.bin", PatternSet())

    def test_empty_include_means_all(self) -> None:
        patterns = PatternSet.from_lists(exclude=["*.log"])
        assert should_include("a.txt", patterns)
        assert should_include("b.py", patterns)
        assert not should_include("c.log", patterns)

    def test_exclude_wins_over_include(self) -> None:
        patterns = PatternSet.from_lists(include=["*.txt"], exclude=["secret*"])
        assert should_include("notes.txt", patterns)
        assert not should_include("secret.txt", patterns)

    def test_include_requires_a_match(self) -> None:
        patterns = PatternSet.from_lists(include=["*.txt", "*.md"])
        assert should_include("README.md", patterns)
        assert not should_include("image.png", patterns)

    def test_many_patterns(self) -> None:
        patterns = PatternSet.from_lists(include=[f"*.ext{i}" for i in range(250)])
        assert should_include("file.ext249", patterns)


class TestPatternSetParse:
    def test_splits_and_strips(self) -> None:
        patterns = PatternSet.parse(" *.txt, *.pdf ,", "tmp*")
        assert patterns.include == ("*.txt", "*.pdf")
        assert patterns.exclude == ("tmp*",)

    def test_empty_text(self) -> None:
        patterns = PatternSet.parse("", "  ")
        assert patterns.is_empty
