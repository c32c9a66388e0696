"""Tests for loading settings."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from filecopy.services.hashing import HashAlgorithm
from filecopy.services.settings import ApplicationSettings, CopySettings, SettingsManager


def write_settings(path: Path, data: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestSettingsManager:
    def test_no_path_gives_defaults(self) -> None:
        assert SettingsManager().settings == ApplicationSettings()

    def test_no_implicit_lookup(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        write_settings(tmp_path / "filecopy" / "settings.json", {"copy": {"buffer_size": 1}})
        write_settings(tmp_path / "FileCopy" / "settings.json", {"copy": {"buffer_size": 1}})
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        monkeypatch.setenv("APPDATA", str(tmp_path))
        monkeypatch.setenv("HOME", str(tmp_path))

        assert SettingsManager().settings == ApplicationSettings()

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        manager = SettingsManager(tmp_path / "settings.json")
        assert manager.settings == ApplicationSettings()

    def test_load_explicit_file(self, tmp_path: Path) -> None:
        path = write_settings(tmp_path / "conf" / "settings.json", {
            "copy": {"buffer_size": 8192, "preserve_permissions": False},
            "hashing": {"algorithm": "SHA256"},
            "filters": {"include_patterns": ["*.txt", "*.md"]},
            "ui": {"show_progress": False},
        })

        loaded = SettingsManager(path).load()

        assert loaded.copy.buffer_size == 8192
        assert loaded.copy.preserve_permissions is False
        assert loaded.hashing.algorithm == HashAlgorithm.SHA256
        assert loaded.filters.include_patterns == ["*.txt", "*.md"]
        assert loaded.ui.show_progress is False

    def test_move_verification_cannot_be_configured(self, tmp_path: Path) -> None:
        path = write_settings(tmp_path / "settings.json", {"copy": {"verify_moves": False}})

        loaded = SettingsManager(path).load()

        assert loaded.copy == CopySettings()
        assert not hasattr(loaded.copy, "verify_moves")

    def test_malformed_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        assert SettingsManager(path).load() == ApplicationSettings()

    def test_invalid_values_fall_back(self, tmp_path: Path) -> None:
        path = write_settings(tmp_path / "settings.json", {
            "copy": {"buffer_size": 0},
            "hashing": {"algorithm": "crc32"},
        })

        loaded = SettingsManager(path).load()

        assert loaded.copy.buffer_size == 65536
        assert loaded.hashing.algorithm == HashAlgorithm.XXH128

    def test_partial_file(self, tmp_path: Path) -> None:
        path = write_settings(tmp_path / "settings.json", {"filters": {"exclude_patterns": ["*.tmp"]}})

        loaded = SettingsManager(path).load()

        assert loaded.filters.exclude_patterns == ["*.tmp"]
        assert loaded.copy.preserve_permissions is True
