"""
Interactive numbered menu.

Each action prompts for the paths it needs, runs the matching core
operation and reports the outcome. End of input at any prompt leaves
the menu.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from filecopy.core import comparator, inspector
from filecopy.core.copier import FileCopier
from filecopy.core.models import CopyStatistics, OperationResult, PatternSet
from filecopy.core.mover import MoveOrchestrator
from filecopy.core.walker import TreeCopier
from filecopy.services.hashing import HashingService
from filecopy.services.settings import ApplicationSettings
from filecopy.ui.browser import FileBrowser, list_directory
from filecopy.ui.console import Terminal
from filecopy.ui.formatting import format_time
from filecopy.ui.progress import ProgressReporter


MENU_ITEMS = [
    ("1", "Copy File"),
    ("2", "Copy Directory"),
    ("3", "Move File"),
    ("4", "Move Directory"),
    ("5", "Copy with Filters"),
    ("6", "Compare Files"),
    ("7", "Calculate Digest"),
    ("8", "Verify File Digest"),
    ("9", "Check if Path Exists"),
    ("10", "Show Path Information"),
    ("11", "Browse Filesystem"),
    ("12", "List Directory"),
    ("0", "Exit"),
]

# Answer to a pattern prompt that clears the configured default
NO_PATTERNS = "-"


class InteractiveMenu:
    """Prompt-driven front end over the copy, move and compare operations."""

    def __init__(
        self,
        terminal: Terminal,
        settings: Optional[ApplicationSettings] = None
    ):
        self.terminal = terminal
        self.settings = settings or ApplicationSettings()

        copy_settings = self.settings.copy
        self.copier = FileCopier(
            buffer_size=copy_settings.buffer_size,
            preserve_permissions=copy_settings.preserve_permissions,
        )
        self.tree_copier = TreeCopier(self.copier)
        self.mover = MoveOrchestrator(
            copier=self.copier,
            tree_copier=self.tree_copier,
        )
        self.hashing = HashingService(
            algorithm=self.settings.hashing.algorithm,
            chunk_size=copy_settings.buffer_size,
        )
        self.browser = FileBrowser(terminal)

        self._handlers: dict[str, Callable[[], None]] = {
            "1": self._on_copy_file,
            "2": self._on_copy_directory,
            "3": self._on_move_file,
            "4": self._on_move_directory,
            "5": self._on_filtered_copy,
            "6": self._on_compare_files,
            "7": self._on_calculate_digest,
            "8": self._on_verify_digest,
            "9": self._on_check_exists,
            "10": self._on_show_info,
            "11": self._on_browse,
            "12": self._on_list_directory,
        }

    def run(self) -> int:
        """Show the menu until the user exits or input ends."""
        logging.info("InteractiveMenu - Started")

        while True:
            self._show_menu()
            try:
                choice = self.terminal.ask("Enter your choice: ").strip()
            except EOFError:
                self.terminal.console.print()
                break

            if choice == "0":
                break

            handler = self._handlers.get(choice)
            if handler is None:
                self.terminal.error("Invalid choice!")
                continue

            try:
                handler()
            except EOFError:
                self.terminal.console.print()
                break

        self.terminal.success("Goodbye!")
        logging.info("InteractiveMenu - Exited")
        return 0

    def _show_menu(self) -> None:
        self.terminal.header("FILE COPY UTILITY - MAIN MENU")
        for key, label in MENU_ITEMS:
            self.terminal.console.print(f"  [bold]{key:>2}[/bold]. {label}")
        self.terminal.rule()

    def _progress(self) -> ProgressReporter:
        return ProgressReporter(
            console=self.terminal.console,
            enabled=self.settings.ui.show_progress,
        )

    def _report(self, result: OperationResult, success_message: str, context: str, started: float) -> None:
        if result.ok:
            self.terminal.success(f"{success_message} ({format_time(time.time() - started)})")
        else:
            self.terminal.report_error(result, context)

    # -------------------------------------------------------------------------
    # Copy / move
    # -------------------------------------------------------------------------

    def _on_copy_file(self) -> None:
        source = self.terminal.ask("Enter source file path: ").strip()
        dest = self.terminal.ask("Enter destination path: ").strip()

        if not inspector.exists(source):
            self.terminal.error("Source file does not exist!")
            return
        if inspector.is_directory(source):
            self.terminal.error("Source is a directory. Use 'Copy Directory' instead.")
            return
        if inspector.is_directory(dest):
            self.terminal.info("Destination is a folder; the file keeps its name inside it.")

        started = time.time()
        with self._progress() as progress:
            result = self.copier.copy_file(source, dest, progress)
        self._report(result, "File copied successfully!", "copy file", started)

    def _on_copy_directory(self) -> None:
        source = self.terminal.ask("Enter source directory path: ").strip()
        dest = self.terminal.ask("Enter destination directory path: ").strip()

        if not inspector.is_directory(source):
            self.terminal.error("Source directory does not exist!")
            return

        started = time.time()
        with self._progress() as progress:
            result = self.tree_copier.copy_tree(source, dest, progress_callback=progress)
        self._report(result, "Directory copied successfully!", "copy directory", started)

    def _on_move_file(self) -> None:
        source = self.terminal.ask("Enter source file path: ").strip()
        dest = self.terminal.ask("Enter destination path: ").strip()

        if not inspector.exists(source):
            self.terminal.error("Source file does not exist!")
            return
        if inspector.is_directory(source):
            self.terminal.error("Source is a directory. Use 'Move Directory' instead.")
            return

        started = time.time()
        with self._progress() as progress:
            result = self.mover.move_file(source, dest, progress)
        self._report(result, "File moved successfully!", "move file", started)

    def _on_move_directory(self) -> None:
        source = self.terminal.ask("Enter source directory path: ").strip()
        dest = self.terminal.ask("Enter destination directory path: ").strip()

        if not inspector.is_directory(source):
            self.terminal.error("Source directory does not exist!")
            return

        started = time.time()
        with self._progress() as progress:
            result = self.mover.move_directory(source, dest, progress)
        self._report(result, "Directory moved successfully!", "move directory", started)

    def _on_filtered_copy(self) -> None:
        source = self.terminal.ask("Enter source path: ").strip()
        dest = self.terminal.ask("Enter destination path: ").strip()

        if not inspector.exists(source):
            self.terminal.error("Source does not exist!")
            return

        filters = self.settings.filters
        default_include = ", ".join(filters.include_patterns)
        default_exclude = ", ".join(filters.exclude_patterns)

        self.terminal.info(f"Enter to keep the default, '{NO_PATTERNS}' for no patterns.")
        include_text = self._ask_patterns(
            f"Include patterns, comma separated [{default_include or 'all'}]: ", default_include
        )
        exclude_text = self._ask_patterns(
            f"Exclude patterns, comma separated [{default_exclude or 'none'}]: ", default_exclude
        )

        patterns = PatternSet.parse(include_text, exclude_text)
        if patterns.is_empty:
            self.terminal.info("No patterns given, copying every file.")
        stats = CopyStatistics()

        with self._progress() as progress:
            if inspector.is_directory(source):
                result = self.tree_copier.copy_tree(source, dest, patterns, stats, progress)
            else:
                result = self.tree_copier.copy_file_filtered(source, dest, patterns, stats, progress)

        if result.ok:
            self.terminal.success("Filtered copy completed!")
        else:
            self.terminal.report_error(result, "filtered copy")
        self.terminal.show_statistics(stats)

    def _ask_patterns(self, prompt: str, default: str) -> str:
        answer = self.terminal.ask(prompt).strip()
        if answer == NO_PATTERNS:
            return ""
        return answer or default

    # -------------------------------------------------------------------------
    # Compare / digest
    # -------------------------------------------------------------------------

    def _on_compare_files(self) -> None:
        first = self.terminal.ask("Enter first file path: ").strip()
        second = self.terminal.ask("Enter second file path: ").strip()

        result = comparator.compare(first, second, self.copier.buffer_size)
        if result.ok:
            self.terminal.success("Files are identical!")
        elif result == OperationResult.FILES_DIFFER:
            self.terminal.warning("Files are different!")
        else:
            self.terminal.report_error(result, "compare files")

    def _on_calculate_digest(self) -> None:
        path = self.terminal.ask("Enter file path: ").strip()

        with self._progress() as progress:
            digest = self.hashing.digest(path, progress)

        if digest.ok:
            self.terminal.info(f"{digest.algorithm.label}: {digest.hash_hex}")
        else:
            self.terminal.report_error(digest.result, "digest")

    def _on_verify_digest(self) -> None:
        path = self.terminal.ask("Enter file path: ").strip()
        expected = self.terminal.ask("Enter expected digest: ").strip()

        algorithm = self.hashing.algorithm
        if len(expected) != algorithm.hex_length:
            self.terminal.error(
                f"A {algorithm.label} digest has {algorithm.hex_length} hex characters, got {len(expected)}."
            )
            return

        result = self.hashing.verify(path, expected)
        if result.ok:
            self.terminal.success("Digest matches!")
        elif result == OperationResult.FILES_DIFFER:
            self.terminal.warning("Digest does not match!")
        else:
            self.terminal.report_error(result, "verify digest")

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------

    def _on_check_exists(self) -> None:
        path = self.terminal.ask("Enter path to check: ").strip()

        if not inspector.exists(path):
            self.terminal.warning("Path does not exist.")
        elif inspector.is_directory(path):
            self.terminal.success("Path exists (directory).")
        else:
            self.terminal.success("Path exists (file).")

    def _on_show_info(self) -> None:
        path = self.terminal.ask("Enter path: ").strip()

        entry = inspector.get_entry(path)
        if entry is None:
            self.terminal.report_error(OperationResult.INVALID_PATH, path)
            return
        self.terminal.show_entry(entry)

    def _on_browse(self) -> None:
        start = self.terminal.ask(
            "Enter starting path (empty for current directory): "
        ).strip() or self.settings.ui.browse_start
        self.browser.browse(start)

    def _on_list_directory(self) -> None:
        path = self.terminal.ask("Enter directory path: ").strip()

        result = list_directory(self.terminal, path or ".")
        if not result.ok:
            self.terminal.report_error(result, "list directory")
