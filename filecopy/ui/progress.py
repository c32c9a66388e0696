"""
Progress bars for copy and digest operations.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

from filecopy.core.models import CopyProgress


class ProgressReporter:
    """
    Renders CopyProgress notifications as one bar per file.

    Instances are callables, so they can be passed directly as the
    ``progress_callback`` of the copier, tree copier, mover or hashing
    service. When disabled, notifications are dropped.
    """

    def __init__(self, console: Optional[Console] = None, enabled: bool = True):
        self.enabled = enabled
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=None),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=console,
            transient=True,
            expand=True,
            disable=not enabled,
        )
        self._tasks: dict[str, TaskID] = {}

    def __enter__(self):
        self.progress.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.progress.stop()

    def __call__(self, update: CopyProgress) -> None:
        if not self.enabled:
            return

        task_id = self._tasks.get(update.name)
        if task_id is None:
            task_id = self.progress.add_task(
                Path(update.name).name or update.name,
                total=update.total_bytes,
            )
            self._tasks[update.name] = task_id

        self.progress.update(task_id, completed=update.copied_bytes)

        if update.total_bytes and update.copied_bytes >= update.total_bytes:
            self.progress.remove_task(task_id)
            del self._tasks[update.name]
