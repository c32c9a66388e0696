"""
Directory listing and the interactive file explorer.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from rich import box
from rich.markup import escape
from rich.table import Table

from filecopy.core import inspector
from filecopy.core.models import FileType, OperationResult, PathEntry
from filecopy.ui.console import Terminal
from filecopy.ui.formatting import format_permissions, format_size, format_timestamp


TYPE_ICONS = {
    FileType.DIRECTORY: "📁",
    FileType.SYMLINK: "🔗",
    FileType.FILE: "📄",
    FileType.OTHER: "❔",
}


def _size_column(entry: PathEntry) -> str:
    if inspector.is_directory(entry.path):
        return "<DIR>"
    return format_size(entry.size)


def list_directory(terminal: Terminal, path: Path | str) -> OperationResult:
    """Print the contents of a directory with type, permissions, size and date."""
    try:
        entries = inspector.list_entries(path)
    except OSError as e:
        logging.debug(f"FileBrowser - Cannot list {path}: {e}")
        return OperationResult.DIRECTORY_OPEN_FAILED

    table = Table(title=f"Directory: {escape(str(path))}", box=box.SIMPLE_HEAD)
    table.add_column("Type")
    table.add_column("Perms")
    table.add_column("Size", justify="right")
    table.add_column("Modified")
    table.add_column("Name")

    for entry in entries:
        table.add_row(
            TYPE_ICONS[entry.file_type],
            format_permissions(entry.permissions),
            _size_column(entry),
            format_timestamp(entry.modified_time),
            escape(entry.name),
        )

    terminal.console.print(table)
    terminal.console.print(f"Total: {len(entries)} items")
    return OperationResult.SUCCESS


class FileBrowser:
    """
    Simple numbered file explorer.

    Commands: a number opens a directory or selects a file, ``0`` goes to
    the parent, ``p`` shows the current path and ``q`` quits.
    """

    def __init__(self, terminal: Terminal):
        self.terminal = terminal
        self.selected: Optional[Path] = None

    def browse(self, start_path: Path | str = "") -> Optional[Path]:
        """
        Run the explorer until the user quits.

        Returns:
            The last file selected, if any
        """
        current = str(start_path) if start_path else os.getcwd()

        while True:
            self.terminal.header("FILE EXPLORER - BROWSE MODE")
            self.terminal.info(f"Current Path: {current}")

            try:
                entries = inspector.list_entries(current)
            except OSError as e:
                logging.debug(f"FileBrowser - Cannot open {current}: {e}")
                self.terminal.error(f"Cannot open directory: {current}")
                self._wait()
                current = inspector.parent_directory(current)
                continue

            self._render(entries)

            try:
                choice = self.terminal.ask("Enter choice: ").strip()
            except EOFError:
                break

            if choice.lower() == 'q':
                break
            elif choice.lower() == 'p':
                self.terminal.info(f"Full Path: {current}")
                self._wait()
                continue

            try:
                index = int(choice)
            except ValueError:
                index = -1

            if index == 0:
                current = inspector.parent_directory(current)
            elif 0 < index <= len(entries):
                entry = entries[index - 1]
                if inspector.is_directory(entry.path):
                    current = str(entry.path)
                else:
                    self._select(entry)
            else:
                self.terminal.error("Invalid choice!")
                self._wait()

        self.terminal.success("Exited file explorer.")
        return self.selected

    def _render(self, entries: list[PathEntry]) -> None:
        table = Table(box=box.SIMPLE_HEAD)
        table.add_column("#", justify="right")
        table.add_column("Type")
        table.add_column("Size", justify="right")
        table.add_column("Name")

        table.add_row("0", TYPE_ICONS[FileType.DIRECTORY], "<UP>", ".. (Parent Directory)")
        for index, entry in enumerate(entries, start=1):
            table.add_row(str(index), TYPE_ICONS[entry.file_type], _size_column(entry), escape(entry.name))

        console = self.terminal.console
        console.print(table)
        console.print(f"Total: {len(entries)} items")
        console.print("Commands: number to navigate/select, 'p' to show full path, 'q' to quit")

    def _select(self, entry: PathEntry) -> None:
        self.selected = entry.path
        self.terminal.header("FILE SELECTED")
        self.terminal.info(f"File: {entry.name}")
        self.terminal.info(f"Full Path: {entry.path}")
        self.terminal.info(f"Size: {entry.size} bytes")
        self.terminal.success("Use this path for copy/move operations.")
        self._wait()

    def _wait(self) -> None:
        try:
            self.terminal.pause()
        except EOFError:
            pass
