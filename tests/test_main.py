"""Tests for argument parsing and batch mode."""

from __future__ import annotations

import io
import logging
import sys
from pathlib import Path

import pytest
from rich.console import Console

from conftest import read_tree, write_file
from filecopy import main as app_main
from filecopy.main import CommandLineArgs, parse_arguments, run_batch
from filecopy.services.hashing import HashAlgorithm
from filecopy.services.settings import ApplicationSettings
from filecopy.ui.console import Terminal


@pytest.fixture
def terminal() -> Terminal:
    return Terminal(console=Console(file=io.StringIO(), width=200), stream=io.StringIO())


def output_of(terminal: Terminal) -> str:
    return terminal.console.file.getvalue()


def batch_args(source: Path, dest: Path, **kwargs) -> CommandLineArgs:
    return CommandLineArgs(source_path=str(source), dest_path=str(dest), show_progress=False, **kwargs)


class TestParseArguments:
    def test_interactive_by_default(self) -> None:
        args = parse_arguments([])
        assert not args.is_batch
        assert args.log_level == "WARNING"

    def test_batch_with_options(self) -> None:
        args = parse_arguments(["src", "dst", "--include", "*.py", "--no-progress", "-v"])
        assert args.is_batch
        assert args.is_filtered
        assert args.include == "*.py"
        assert args.show_progress is False
        assert args.log_level == "INFO"

    def test_debug_sets_debug_level(self) -> None:
        assert parse_arguments(["--debug"]).log_level == "DEBUG"

    def test_source_without_dest_is_not_batch(self) -> None:
        args = parse_arguments(["only-source"])
        assert args.source_path == "only-source"
        assert not args.is_batch

    def test_algorithm(self) -> None:
        assert parse_arguments([]).algorithm is None
        assert parse_arguments(["-a", "sha256"]).algorithm == HashAlgorithm.SHA256
        assert parse_arguments(["--algorithm", "MD5"]).algorithm == HashAlgorithm.MD5

    def test_unknown_algorithm_is_an_error(self) -> None:
        with pytest.raises(SystemExit):
            parse_arguments(["-a", "crc32"])

    def test_move_with_filters_is_an_error(self) -> None:
        with pytest.raises(SystemExit):
            parse_arguments(["a", "b", "--move", "--exclude", "*.log"])


class TestRunBatch:
    def test_copy_file(self, tmp_path: Path, terminal: Terminal) -> None:
        source = write_file(tmp_path / "a.txt", "data")
        dest = tmp_path / "b.txt"

        assert run_batch(batch_args(source, dest), ApplicationSettings(), terminal) == 0
        assert dest.read_text() == "data"

    def test_copy_directory(self, make_tree, tmp_path: Path, terminal: Terminal) -> None:
        src = make_tree("src", {"a.txt": "a", "sub/b.txt": "b"})
        dest = tmp_path / "dst"

        assert run_batch(batch_args(src, dest), ApplicationSettings(), terminal) == 0
        assert read_tree(dest) == read_tree(src)

    def test_missing_source(self, tmp_path: Path, terminal: Terminal) -> None:
        args = batch_args(tmp_path / "missing", tmp_path / "dst")
        assert run_batch(args, ApplicationSettings(), terminal) == 1
        assert "does not exist" in output_of(terminal)

    def test_failure_exit_code(self, tmp_path: Path, terminal: Terminal) -> None:
        source = write_file(tmp_path / "a.txt", "data")
        args = batch_args(source, tmp_path / "no" / "such" / "b.txt")

        assert run_batch(args, ApplicationSettings(), terminal) == 1
        assert "Error (copy file)" in output_of(terminal)

    def test_filtered_copy_prints_statistics(self, make_tree, tmp_path: Path, terminal: Terminal) -> None:
        src = make_tree("src", {"a.txt": "a", "b.log": "b"})
        dest = tmp_path / "dst"

        result = run_batch(batch_args(src, dest, exclude="*.log"), ApplicationSettings(), terminal)

        assert result == 0
        assert set(read_tree(dest)) == {"a.txt"}
        assert "Copy Statistics" in output_of(terminal)

    def test_move(self, make_tree, tmp_path: Path, terminal: Terminal) -> None:
        src = make_tree("src", {"a.txt": "a"})
        dest = tmp_path / "moved"

        assert run_batch(batch_args(src, dest, move=True), ApplicationSettings(), terminal) == 0
        assert not src.exists()
        assert (dest / "a.txt").read_text() == "a"


@pytest.fixture
def quiet_main(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    monkeypatch.setattr(app_main.faulthandler, "enable", lambda: None)
    monkeypatch.setattr(app_main, "setup_signal_handlers", lambda: None)
    monkeypatch.setattr(app_main, "setup_logging", lambda level, log_file=None: logging.getLogger())


def test_main_batch_mode(tmp_path: Path, quiet_main: None) -> None:
    source = write_file(tmp_path / "a.txt", "data")
    dest = tmp_path / "b.txt"

    exit_code = app_main.main([
        str(source), str(dest), "--no-progress", "--config", str(tmp_path / "settings.json"),
    ])

    assert exit_code == 0
    assert dest.read_text() == "data"


def test_main_source_without_dest(
    tmp_path: Path, quiet_main: None, capsys: pytest.CaptureFixture[str]
) -> None:
    source = write_file(tmp_path / "a.txt", "data")

    exit_code = app_main.main([str(source)])

    assert exit_code == 1
    assert "Both SOURCE and DEST are required" in capsys.readouterr().out
    assert list(tmp_path.iterdir()) == [source]


def test_main_ignores_settings_outside_config(
    tmp_path: Path, quiet_main: None, monkeypatch: pytest.MonkeyPatch
) -> None:
    config_dir = tmp_path / "xdg" / "filecopy"
    config_dir.mkdir(parents=True)
    (config_dir / "settings.json").write_text('{"copy": {"buffer_size": 7}}', encoding="utf-8")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    seen = []
    monkeypatch.setattr(app_main, "run_batch", lambda args, settings, terminal: seen.append(settings) or 0)

    assert app_main.main(["a", "b"]) == 0
    assert seen == [ApplicationSettings()]


def test_main_algorithm_overrides_settings(
    tmp_path: Path, quiet_main: None, monkeypatch: pytest.MonkeyPatch
) -> None:
    seen = []
    monkeypatch.setattr(app_main, "run_batch", lambda args, settings, terminal: seen.append(settings) or 0)

    assert app_main.main(["a", "b", "--algorithm", "sha256"]) == 0
    assert seen[0].hashing.algorithm == HashAlgorithm.SHA256
