"""
Terminal output and line-based input built on rich.
"""

from __future__ import annotations

from typing import Optional, TextIO

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from filecopy.core.models import CopyStatistics, OperationResult, PathEntry
from filecopy.ui.formatting import (
    format_permissions,
    format_size,
    format_speed,
    format_time,
    format_timestamp,
)


class Colors:
    """Color palette used for messages."""
    HEADER = "bold cyan"
    INFO = "blue"
    SUCCESS = "bold green"
    WARNING = "bold yellow"
    ERROR = "bold red"
    PROMPT = "bold magenta"
    DIM = "dim"


class Terminal:
    """
    Console wrapper shared by the menu and the browser.

    Input is read one line at a time from ``stream`` (stdin when None);
    end of input raises EOFError.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        stream: Optional[TextIO] = None,
        use_colors: bool = True
    ):
        self.console = console or Console(no_color=not use_colors, highlight=False)
        self.stream = stream

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def ask(self, prompt: str) -> str:
        """Prompt for one line of input, without the trailing newline."""
        value = self.console.input(f"[{Colors.PROMPT}]{escape(prompt)}[/]", stream=self.stream)
        if self.stream is not None and value == "":
            raise EOFError
        return value.rstrip("\r\n")

    def pause(self) -> None:
        self.ask("Press Enter to continue...")

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def header(self, title: str) -> None:
        self.console.print()
        self.console.print(Panel(title, style=Colors.HEADER, expand=False, padding=(0, 4)))

    def rule(self) -> None:
        self.console.rule(style=Colors.DIM)

    def info(self, message: str) -> None:
        self.console.print(f"[{Colors.INFO}]{escape(message)}[/]")

    def success(self, message: str) -> None:
        self.console.print(f"[{Colors.SUCCESS}]✓ {escape(message)}[/]")

    def warning(self, message: str) -> None:
        self.console.print(f"[{Colors.WARNING}]⚠ {escape(message)}[/]")

    def error(self, message: str) -> None:
        self.console.print(f"[{Colors.ERROR}]✗ {escape(message)}[/]")

    def report_error(self, result: OperationResult, context: str = "") -> None:
        """Report a failed operation with its kind and a caller context."""
        self.error(describe_error(result, context))

    def show_statistics(self, stats: CopyStatistics) -> None:
        """Print the summary of a filtered copy."""
        table = Table(title="Copy Statistics", box=box.ROUNDED, show_header=False)
        table.add_column("Metric", style=Colors.INFO)
        table.add_column("Value")

        table.add_row("Files copied", str(stats.total_files))
        table.add_row("Directories", str(stats.total_dirs))
        table.add_row("Total bytes", f"{stats.total_bytes} ({format_size(stats.total_bytes)})")
        table.add_row("Time elapsed", format_time(stats.elapsed))

        if stats.transfer_speed > 0:
            table.add_row("Transfer speed", format_speed(stats.transfer_speed))

        percent = stats.percent
        if percent is not None:
            table.add_row("Progress", f"{percent:.0f}%")
            eta = stats.estimate_time_remaining()
            if eta > 0:
                table.add_row("ETA", format_time(eta))

        self.console.print(table)

    def show_entry(self, entry: PathEntry) -> None:
        """Print the metadata of one path."""
        table = Table(title="Path Information", box=box.ROUNDED, show_header=False)
        table.add_column("Field", style=Colors.INFO)
        table.add_column("Value")

        table.add_row("Path", escape(str(entry.path)))
        table.add_row("Type", entry.file_type.name.capitalize())
        if entry.is_file or (entry.is_symlink and entry.size):
            table.add_row("Size", f"{entry.size} bytes ({format_size(entry.size)})")
        table.add_row("Permissions", format_permissions(entry.permissions))
        table.add_row("Last Modified", format_timestamp(entry.modified_time, with_seconds=True))

        self.console.print(table)


def describe_error(result: OperationResult, context: str = "") -> str:
    """``Error (<context>): <description>``"""
    if context:
        return f"Error ({context}): {result.description}"
    return f"Error: {result.description}"
