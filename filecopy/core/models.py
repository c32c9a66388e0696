"""
Core data models for the file copy utility.

This module defines the data structures shared by the copy engine:
- Operation outcomes
- Path metadata snapshots
- Copy statistics
- Include/exclude pattern sets
- Progress notifications

All models are UI-agnostic; the terminal front end only reads them.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from pathlib import Path
from typing import Callable, Iterable, Optional


# =============================================================================
# Enumerations
# =============================================================================

class OperationResult(Enum):
    """Outcome of a copy, move, compare or digest operation."""
    SUCCESS = 0
    SOURCE_OPEN_FAILED = -1
    READ_FAILED = -2
    WRITE_FAILED = -3
    DIRECTORY_CREATE_FAILED = -4
    DIRECTORY_OPEN_FAILED = -5
    INVALID_PATH = -6
    MOVE_FAILED = -7
    FILES_DIFFER = -8
    DESTINATION_OPEN_FAILED = -9
    MOVE_VERIFICATION_FAILED = -10
    REMOVE_FAILED = -11

    @property
    def ok(self) -> bool:
        return self is OperationResult.SUCCESS

    @property
    def description(self) -> str:
        """Human-readable message for the outcome."""
        return _RESULT_DESCRIPTIONS[self]


_RESULT_DESCRIPTIONS = {
    OperationResult.SUCCESS: "Success",
    OperationResult.SOURCE_OPEN_FAILED: "Failed to open source file",
    OperationResult.READ_FAILED: "Failed to read file",
    OperationResult.WRITE_FAILED: "Failed to write file",
    OperationResult.DIRECTORY_CREATE_FAILED: "Failed to create directory",
    OperationResult.DIRECTORY_OPEN_FAILED: "Failed to open directory",
    OperationResult.INVALID_PATH: "Invalid path",
    OperationResult.MOVE_FAILED: "Failed to move file/directory",
    OperationResult.FILES_DIFFER: "Files are different",
    OperationResult.DESTINATION_OPEN_FAILED: "Failed to open destination file",
    OperationResult.MOVE_VERIFICATION_FAILED: "Copied data did not match the source, move aborted",
    OperationResult.REMOVE_FAILED: "Failed to remove file/directory",
}


class FileType(Enum):
    """Type of filesystem entry."""
    FILE = auto()
    DIRECTORY = auto()
    SYMLINK = auto()
    OTHER = auto()


# =============================================================================
# Path Metadata
# =============================================================================

@dataclass(frozen=True)
class PathEntry:
    """
    Snapshot of a filesystem location.

    Never cached: every operation re-queries the filesystem, since the
    state of a path can change between two calls.
    """
    path: Path
    name: str
    file_type: FileType
    size: int = 0
    permissions: int = 0
    modified_time: Optional[datetime] = None

    @property
    def is_directory(self) -> bool:
        return self.file_type == FileType.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.file_type == FileType.FILE

    @property
    def is_symlink(self) -> bool:
        return self.file_type == FileType.SYMLINK


# =============================================================================
# Progress & Statistics
# =============================================================================

@dataclass
class CopyProgress:
    """Progress information emitted after each copied chunk."""
    copied_bytes: int
    total_bytes: Optional[int]
    name: str

    @property
    def percent(self) -> Optional[float]:
        """Completion percentage, or None when the total is unknown."""
        if not self.total_bytes:
            return None
        return self.copied_bytes / self.total_bytes * 100


ProgressCallback = Callable[[CopyProgress], None]


@dataclass
class CopyStatistics:
    """
    Accumulator for one tree or filtered copy operation.

    Owned by the caller that started the operation and passed down
    explicitly; never shared between operations. ``total_bytes`` of 0
    means the expected size is unknown.
    """
    total_files: int = 0
    total_dirs: int = 0
    total_bytes: int = 0
    copied_bytes: int = 0
    start_time: float = field(default_factory=time.time)
    current_time: float = 0.0
    transfer_speed: float = 0.0  # bytes per second

    def __post_init__(self):
        if not self.current_time:
            self.current_time = self.start_time

    def update(self, num_bytes: int) -> None:
        """Account for ``num_bytes`` more copied bytes."""
        if num_bytes > 0:
            self.copied_bytes += num_bytes
        self.current_time = time.time()
        self.transfer_speed = self.calculate_speed()

    def record_file(self, size: int) -> None:
        """Account for one fully copied file of ``size`` bytes."""
        self.total_files += 1
        if size > 0:
            self.total_bytes += size
            self.update(size)

    def record_directory(self) -> None:
        self.total_dirs += 1

    @property
    def elapsed(self) -> float:
        return max(self.current_time - self.start_time, 0.0)

    @property
    def percent(self) -> Optional[float]:
        if self.total_bytes <= 0:
            return None
        return self.copied_bytes / self.total_bytes * 100

    def calculate_speed(self) -> float:
        elapsed = self.elapsed
        if elapsed <= 0:
            return 0.0
        return self.copied_bytes / elapsed

    def estimate_time_remaining(self) -> float:
        """Seconds left at the current rate; 0 if it cannot be estimated."""
        if self.transfer_speed <= 0 or self.total_bytes <= 0:
            return 0.0
        remaining = max(self.total_bytes - self.copied_bytes, 0)
        return remaining / self.transfer_speed


# =============================================================================
# Filtering
# =============================================================================

@dataclass(frozen=True)
class PatternSet:
    """
    Include and exclude glob patterns for one tree operation.

    Exclusion is evaluated before inclusion, and an empty include list
    means every file that is not excluded is copied.
    """
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()

    @classmethod
    def from_lists(
        cls,
        include: Optional[Iterable[str]] = None,
        exclude: Optional[Iterable[str]] = None
    ) -> 'PatternSet':
        return cls(
            include=tuple(p for p in (include or ()) if p),
            exclude=tuple(p for p in (exclude or ()) if p),
        )

    @classmethod
    def parse(cls, include_text: str = "", exclude_text: str = "") -> 'PatternSet':
        """Build a pattern set from comma-separated lists (e.g. ``*.txt, *.pdf``)."""
        return cls.from_lists(
            _split_patterns(include_text),
            _split_patterns(exclude_text),
        )

    @property
    def is_empty(self) -> bool:
        return not self.include and not self.exclude


def _split_patterns(text: str) -> list[str]:
    if not text:
        return []
    return [item.strip() for item in text.split(',') if item.strip()]
