"""Shared fixtures for the copy engine tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


def write_file(path: Path, content: bytes | str = b"") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, str):
        content = content.encode("utf-8")
    path.write_bytes(content)
    return path


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[str, dict], Path]:
    """
    Build a directory tree from a ``{relative path: content}`` mapping.

    A value of None creates an empty directory.
    """
    def _make(name: str, layout: dict) -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        for relative, content in layout.items():
            target = root / relative
            if content is None:
                target.mkdir(parents=True, exist_ok=True)
            else:
                write_file(target, content)
        return root

    return _make


def read_tree(root: Path) -> dict[str, bytes]:
    """Relative path to content for every file under ``root``."""
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }
