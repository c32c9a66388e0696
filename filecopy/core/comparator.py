"""
Byte-exact file and tree comparison.

Used by the move orchestrator to confirm a copy before the source is
deleted, and by the "compare two files" menu action.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from filecopy.core import inspector
from filecopy.core.models import OperationResult


DEFAULT_CHUNK_SIZE = 65536


def compare(
    file_a: Path | str,
    file_b: Path | str,
    chunk_size: int = DEFAULT_CHUNK_SIZE
) -> OperationResult:
    """
    Compare two files byte-by-byte.

    Returns:
        SUCCESS if identical, FILES_DIFFER if not, or the failure kind.
        Files of different sizes are reported as different without
        reading their content.
    """
    size_a = inspector.size_of(file_a)
    if size_a is None:
        return OperationResult.SOURCE_OPEN_FAILED

    size_b = inspector.size_of(file_b)
    if size_b is None:
        return OperationResult.DESTINATION_OPEN_FAILED

    # Quick size check
    if size_a != size_b:
        return OperationResult.FILES_DIFFER

    try:
        f1 = open(file_a, 'rb')
    except OSError as e:
        logging.debug(f"Comparator - Cannot open {file_a}: {e}")
        return OperationResult.SOURCE_OPEN_FAILED

    with f1:
        try:
            f2 = open(file_b, 'rb')
        except OSError as e:
            logging.debug(f"Comparator - Cannot open {file_b}: {e}")
            return OperationResult.DESTINATION_OPEN_FAILED

        with f2:
            while True:
                try:
                    chunk1 = f1.read(chunk_size)
                    chunk2 = f2.read(chunk_size)
                except OSError as e:
                    logging.debug(f"Comparator - Read error comparing {file_a} and {file_b}: {e}")
                    return OperationResult.READ_FAILED

                if chunk1 != chunk2:
                    return OperationResult.FILES_DIFFER

                if not chunk1:  # EOF on both
                    return OperationResult.SUCCESS


def compare_trees(source_dir: Path | str, dest_dir: Path | str) -> OperationResult:
    """
    Check that every entry under ``source_dir`` has an identical
    counterpart under ``dest_dir``.

    Extra entries in the destination are allowed; a missing counterpart
    or a file/directory mismatch counts as FILES_DIFFER.
    """
    source_dir = Path(source_dir)
    dest_dir = Path(dest_dir)

    if not inspector.is_directory(dest_dir):
        return OperationResult.FILES_DIFFER

    try:
        with os.scandir(source_dir) as it:
            entries = [(entry.name, entry.is_dir()) for entry in it]
    except OSError as e:
        logging.debug(f"Comparator - Cannot open directory {source_dir}: {e}")
        return OperationResult.DIRECTORY_OPEN_FAILED

    for name, is_dir in entries:
        source_path = source_dir / name
        dest_path = dest_dir / name

        if is_dir:
            result = compare_trees(source_path, dest_path)
        elif inspector.is_directory(dest_path):
            result = OperationResult.FILES_DIFFER
        else:
            result = compare(source_path, dest_path)
            if result == OperationResult.DESTINATION_OPEN_FAILED and not inspector.exists(dest_path):
                result = OperationResult.FILES_DIFFER

        if not result.ok:
            logging.debug(f"Comparator - Tree mismatch at {source_path}: {result.name}")
            return result

    return OperationResult.SUCCESS
