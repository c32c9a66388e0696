"""
Single-file copy with progress reporting.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import BinaryIO, Optional

from filecopy.core import inspector
from filecopy.core.models import CopyProgress, OperationResult, ProgressCallback


DEFAULT_BUFFER_SIZE = 65536


class FileCopier:
    """
    Streams one file to a destination in fixed-size chunks.

    Only open, read and write failures fail a copy. Copying the permission
    bits afterwards is best effort.
    """

    def __init__(
        self,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        preserve_permissions: bool = True
    ):
        if buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")
        self.buffer_size = buffer_size
        self.preserve_permissions = preserve_permissions

    def copy_file(
        self,
        source: Path | str,
        destination: Path | str,
        progress_callback: Optional[ProgressCallback] = None
    ) -> OperationResult:
        """
        Copy a single file.

        Args:
            source: File to read
            destination: Target file path, or an existing directory that
                receives the file under its own name
            progress_callback: Called after every chunk

        Returns:
            OperationResult.SUCCESS or the failure kind
        """
        source = Path(source)
        total_size = inspector.size_of(source)

        try:
            src = open(source, 'rb')
        except OSError as e:
            logging.debug(f"FileCopier - Cannot open source {source}: {e}")
            return OperationResult.SOURCE_OPEN_FAILED

        with src:
            target = inspector.resolve_copy_target(source, destination)

            if _same_file(source, target):
                logging.warning(f"FileCopier - Refusing to copy {source} onto itself")
                return OperationResult.INVALID_PATH

            try:
                # Unbuffered, so a short write is visible to us
                dst = open(target, 'wb', buffering=0)
            except OSError as e:
                logging.debug(f"FileCopier - Cannot open destination {target}: {e}")
                return OperationResult.DESTINATION_OPEN_FAILED

            try:
                with dst:
                    result = self._stream(src, dst, source, total_size, progress_callback)
            except OSError as e:
                logging.debug(f"FileCopier - Failed to close {target}: {e}")
                return OperationResult.WRITE_FAILED

        if result.ok and self.preserve_permissions:
            self._copy_permissions(source, target)

        return result

    def _stream(
        self,
        src: BinaryIO,
        dst: BinaryIO,
        source: Path,
        total_size: Optional[int],
        progress_callback: Optional[ProgressCallback]
    ) -> OperationResult:
        copied = 0

        while True:
            try:
                chunk = src.read(self.buffer_size)
            except OSError as e:
                logging.debug(f"FileCopier - Read error in {source}: {e}")
                return OperationResult.READ_FAILED

            if not chunk:
                return OperationResult.SUCCESS

            try:
                written = dst.write(chunk)
            except OSError as e:
                logging.debug(f"FileCopier - Write error copying {source}: {e}")
                return OperationResult.WRITE_FAILED

            if written != len(chunk):
                logging.debug(
                    f"FileCopier - Short write copying {source}: {written} of {len(chunk)} bytes"
                )
                return OperationResult.WRITE_FAILED

            copied += written
            if progress_callback:
                progress_callback(CopyProgress(
                    copied_bytes=copied,
                    total_bytes=total_size,
                    name=str(source),
                ))

    def _copy_permissions(self, source: Path, target: Path) -> None:
        try:
            shutil.copymode(source, target)
        except OSError as e:
            logging.warning(f"FileCopier - Could not copy permissions to {target}: {e}")


def _same_file(source: Path, target: Path) -> bool:
    try:
        return target.exists() and source.samefile(target)
    except OSError:
        return False
