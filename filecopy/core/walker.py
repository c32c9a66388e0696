"""
Recursive directory copy.

Walks a source tree in filesystem order, applies optional include/exclude
patterns to files, copies each file through a FileCopier and accounts for
the work in a caller-owned CopyStatistics. The first hard failure aborts
the whole walk.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from filecopy.core import inspector
from filecopy.core.copier import FileCopier
from filecopy.core.models import (
    CopyStatistics,
    OperationResult,
    PatternSet,
    ProgressCallback,
)
from filecopy.core.patterns import should_include


class TreeCopier:
    """
    Copies directory trees.

    The source directory must exist; callers check that before invoking
    ``copy_tree``.
    """

    def __init__(self, copier: Optional[FileCopier] = None):
        self.copier = copier or FileCopier()

    def copy_tree(
        self,
        source_dir: Path | str,
        dest_dir: Path | str,
        patterns: Optional[PatternSet] = None,
        stats: Optional[CopyStatistics] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> OperationResult:
        """
        Recursively copy ``source_dir`` into ``dest_dir``.

        Args:
            source_dir: Existing directory to copy
            dest_dir: Destination directory, created with its ancestors;
                must not lie inside ``source_dir``
            patterns: Optional filter applied to file names
            stats: Optional accumulator updated after every copied file
            progress_callback: Forwarded to the file copier

        Returns:
            SUCCESS, or the first failure encountered
        """
        source_dir = Path(source_dir)
        dest_dir = Path(dest_dir)

        if _is_within(dest_dir, source_dir):
            logging.warning(f"TreeCopier - Refusing to copy {source_dir} into itself ({dest_dir})")
            return OperationResult.INVALID_PATH

        return self._copy_tree(
            source_dir, dest_dir, patterns, stats, progress_callback, frozenset()
        )

    def _copy_tree(
        self,
        source_dir: Path,
        dest_dir: Path,
        patterns: Optional[PatternSet],
        stats: Optional[CopyStatistics],
        progress_callback: Optional[ProgressCallback],
        ancestors: frozenset
    ) -> OperationResult:
        result = inspector.ensure_directory_path(dest_dir)
        if not result.ok:
            return result

        try:
            it = os.scandir(source_dir)
        except OSError as e:
            logging.debug(f"TreeCopier - Cannot open directory {source_dir}: {e}")
            return OperationResult.DIRECTORY_OPEN_FAILED

        logging.info(f"TreeCopier - Copying directory: {source_dir} -> {dest_dir}")
        ancestors = ancestors | {_real_path(source_dir)}

        with it:
            for entry in it:
                src_path = source_dir / entry.name
                dest_path = dest_dir / entry.name

                if _entry_is_dir(entry):
                    if entry.is_symlink() and _real_path(src_path) in ancestors:
                        logging.warning(f"TreeCopier - Skipping symlink loop {src_path}")
                        continue
                    if stats is not None:
                        stats.record_directory()
                    result = self._copy_tree(
                        src_path, dest_path, patterns, stats, progress_callback, ancestors
                    )
                else:
                    result = self.copy_file_filtered(
                        src_path, dest_path, patterns, stats, progress_callback
                    )

                if not result.ok:
                    logging.debug(f"TreeCopier - Aborting walk at {src_path}: {result.name}")
                    return result

        return OperationResult.SUCCESS

    def copy_file_filtered(
        self,
        source: Path | str,
        destination: Path | str,
        patterns: Optional[PatternSet] = None,
        stats: Optional[CopyStatistics] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> OperationResult:
        """
        Copy one file if it passes the pattern filter.

        A file that is filtered out is skipped silently and reported as
        SUCCESS; it is not counted in the statistics.
        """
        source = Path(source)

        if not should_include(source.name, patterns):
            logging.debug(f"TreeCopier - Skipping filtered file {source}")
            return OperationResult.SUCCESS

        result = self.copier.copy_file(source, destination, progress_callback)

        if result.ok and stats is not None:
            target = inspector.resolve_copy_target(source, destination)
            stats.record_file(inspector.size_of(target) or 0)

        return result


def _entry_is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


def _real_path(path: Path) -> Path:
    return path.resolve()


def _is_within(path: Path, directory: Path) -> bool:
    """True if ``path`` is ``directory`` or lies below it, after resolving links."""
    real_path = _real_path(path)
    real_directory = _real_path(directory)
    return real_path == real_directory or real_directory in real_path.parents
