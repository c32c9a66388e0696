"""Tests for byte-exact file and tree comparison."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import write_file
from filecopy.core import comparator
from filecopy.core.models import OperationResult


class TestCompare:
    def test_identical(self, tmp_path: Path) -> None:
        a = write_file(tmp_path / "a", b"same content" * 1000)
        b = write_file(tmp_path / "b", b"same content" * 1000)
        assert comparator.compare(a, b, chunk_size=100) == OperationResult.SUCCESS

    def test_empty_files_are_identical(self, tmp_path: Path) -> None:
        a = write_file(tmp_path / "a", b"")
        b = write_file(tmp_path / "b", b"")
        assert comparator.compare(a, b) == OperationResult.SUCCESS

    def test_same_size_different_bytes(self, tmp_path: Path) -> None:
        a = write_file(tmp_path / "a", b"abcdef")
        b = write_file(tmp_path / "b", b"abcdeX")
        assert comparator.compare(a, b) == OperationResult.FILES_DIFFER

    def test_size_mismatch_does_not_read(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        a = write_file(tmp_path / "a", b"short")
        b = write_file(tmp_path / "b", b"longer content")

        def fail_open(*args, **kwargs):
            raise AssertionError("content should not be read")

        monkeypatch.setattr(comparator, "open", fail_open, raising=False)
        assert comparator.compare(a, b) == OperationResult.FILES_DIFFER

    def test_missing_first(self, tmp_path: Path) -> None:
        b = write_file(tmp_path / "b", b"x")
        assert comparator.compare(tmp_path / "missing", b) == OperationResult.SOURCE_OPEN_FAILED

    def test_missing_second(self, tmp_path: Path) -> None:
        a = write_file(tmp_path / "a", b"x")
        assert comparator.compare(a, tmp_path / "missing") == OperationResult.DESTINATION_OPEN_FAILED


class TestCompareTrees:
    def test_identical_trees(self, make_tree) -> None:
        layout = {"a.txt": "a", "sub/b.txt": "b", "sub/deeper/c.txt": "c", "empty": None}
        src = make_tree("src", layout)
        dst = make_tree("dst", layout)
        assert comparator.compare_trees(src, dst) == OperationResult.SUCCESS

    def test_extra_destination_entries_allowed(self, make_tree) -> None:
        src = make_tree("src", {"a.txt": "a"})
        dst = make_tree("dst", {"a.txt": "a", "extra.txt": "extra"})
        assert comparator.compare_trees(src, dst) == OperationResult.SUCCESS

    def test_missing_file(self, make_tree) -> None:
        src = make_tree("src", {"a.txt": "a", "sub/b.txt": "b"})
        dst = make_tree("dst", {"a.txt": "a", "sub": None})
        assert comparator.compare_trees(src, dst) == OperationResult.FILES_DIFFER

    def test_content_differs(self, make_tree) -> None:
        src = make_tree("src", {"sub/b.txt": "b"})
        dst = make_tree("dst", {"sub/b.txt": "B"})
        assert comparator.compare_trees(src, dst) == OperationResult.FILES_DIFFER

    def test_kind_mismatch(self, make_tree) -> None:
        src = make_tree("src", {"thing": "a file"})
        dst = make_tree("dst", {"thing": None})
        assert comparator.compare_trees(src, dst) == OperationResult.FILES_DIFFER

    def test_missing_destination(self, make_tree, tmp_path: Path) -> None:
        src = make_tree("src", {"a.txt": "a"})
        assert comparator.compare_trees(src, tmp_path / "nowhere") == OperationResult.FILES_DIFFER
