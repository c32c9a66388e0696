"""
Move files and directories.

A move is attempted as an atomic rename first. When the rename fails
because source and destination live on different volumes, the move
falls back to copy, verify, then delete the source. The source is never
deleted before the copy has been confirmed identical.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Callable, Optional

from filecopy.core import comparator, inspector
from filecopy.core.copier import FileCopier
from filecopy.core.models import OperationResult, ProgressCallback
from filecopy.core.walker import TreeCopier


RenameFunc = Callable[[str, str], None]


class MoveOrchestrator:
    """
    Moves files and directories, falling back to copy+verify+delete
    across filesystem boundaries.
    """

    def __init__(
        self,
        copier: Optional[FileCopier] = None,
        tree_copier: Optional[TreeCopier] = None,
        rename: RenameFunc = os.rename
    ):
        self.copier = copier or FileCopier()
        self.tree_copier = tree_copier or TreeCopier(self.copier)
        self.rename = rename

    def move_file(
        self,
        source: Path | str,
        destination: Path | str,
        progress_callback: Optional[ProgressCallback] = None
    ) -> OperationResult:
        """
        Move a single file.

        An existing directory as destination receives the file under its
        own name, as with a copy.
        """
        source = Path(source)
        target = inspector.resolve_copy_target(source, destination)

        try:
            self.rename(str(source), str(target))
            return OperationResult.SUCCESS
        except OSError as e:
            if not inspector.is_cross_device_error(e):
                logging.warning(f"MoveOrchestrator - Cannot move {source} to {target}: {e}")
                return OperationResult.MOVE_FAILED

        logging.info(f"MoveOrchestrator - {source} and {target} are on different volumes, copying")

        result = self.copier.copy_file(source, target, progress_callback)
        if not result.ok:
            if result in (OperationResult.READ_FAILED, OperationResult.WRITE_FAILED):
                self._discard_file(target)
            return result

        # Verify copy was successful before deleting
        result = comparator.compare(source, target)
        if not result.ok:
            logging.error(f"MoveOrchestrator - Verification of {target} failed: {result.name}")
            self._discard_file(target)
            return OperationResult.MOVE_VERIFICATION_FAILED

        try:
            os.unlink(source)
        except OSError as e:
            # The verified copy is kept; only the cleanup failed
            logging.error(f"MoveOrchestrator - Copied to {target} but cannot delete {source}: {e}")
            return OperationResult.MOVE_FAILED

        return OperationResult.SUCCESS

    def move_directory(
        self,
        source: Path | str,
        destination: Path | str,
        progress_callback: Optional[ProgressCallback] = None
    ) -> OperationResult:
        """Move a directory tree."""
        source = Path(source)
        destination = Path(destination)

        try:
            self.rename(str(source), str(destination))
            return OperationResult.SUCCESS
        except OSError as e:
            if not inspector.is_cross_device_error(e):
                logging.warning(f"MoveOrchestrator - Cannot move {source} to {destination}: {e}")
                return OperationResult.MOVE_FAILED

        logging.info(
            f"MoveOrchestrator - {source} and {destination} are on different volumes, copying tree"
        )

        destination_existed = inspector.exists(destination)

        result = self.tree_copier.copy_tree(
            source, destination, progress_callback=progress_callback
        )
        if not result.ok:
            return result

        result = comparator.compare_trees(source, destination)
        if not result.ok:
            logging.error(f"MoveOrchestrator - Verification of {destination} failed: {result.name}")
            if not destination_existed:
                self.remove_directory(destination)
            return OperationResult.MOVE_VERIFICATION_FAILED

        result = self.remove_directory(source)
        if not result.ok:
            logging.error(f"MoveOrchestrator - Copied to {destination} but cannot remove {source}")
            return OperationResult.MOVE_FAILED

        return OperationResult.SUCCESS

    def remove_directory(self, path: Path | str) -> OperationResult:
        """
        Remove a directory tree, children first.

        Keeps removing after a failure so as much as possible is cleaned
        up, and reports the first failure. Symlinked directories are
        unlinked, never descended into.
        """
        path = Path(path)

        try:
            with os.scandir(path):
                pass
        except OSError as e:
            logging.warning(f"MoveOrchestrator - Cannot open directory {path}: {e}")
            return OperationResult.DIRECTORY_OPEN_FAILED

        failures: list[str] = []

        def on_error(func, failed_path, exc) -> None:
            logging.warning(f"MoveOrchestrator - Cannot remove {failed_path}: {func.__name__} failed")
            failures.append(str(failed_path))

        if sys.version_info >= (3, 12):
            shutil.rmtree(path, onexc=on_error)
        else:
            shutil.rmtree(path, onerror=on_error)

        if failures:
            return OperationResult.REMOVE_FAILED
        return OperationResult.SUCCESS

    def _discard_file(self, target: Path) -> None:
        try:
            if target.exists():
                target.unlink()
        except OSError as e:
            logging.warning(f"MoveOrchestrator - Cannot remove incomplete copy {target}: {e}")
