"""
Path and metadata queries.

Every function re-stats the path it is given; nothing is cached between
calls.
"""

from __future__ import annotations

import errno
import logging
import os
import stat
from datetime import datetime
from pathlib import Path
from typing import Optional

from filecopy.core.models import FileType, OperationResult, PathEntry


def exists(path: Path | str) -> bool:
    """True if the path can be stat'ed (missing and inaccessible look the same)."""
    try:
        os.stat(path)
    except (OSError, ValueError):
        return False
    return True


def is_directory(path: Path | str) -> bool:
    try:
        return stat.S_ISDIR(os.stat(path).st_mode)
    except (OSError, ValueError):
        return False


def size_of(path: Path | str) -> Optional[int]:
    """Size in bytes, or None if the path cannot be stat'ed."""
    try:
        return os.stat(path).st_size
    except (OSError, ValueError):
        return None


def ensure_directory_path(path: Path | str) -> OperationResult:
    """
    Create a directory and all of its missing ancestors.

    Already existing directories at any level are not an error, so the
    call is idempotent.
    """
    path = Path(path)
    try:
        path.mkdir(mode=0o755, parents=True, exist_ok=True)
    except OSError as e:
        # Includes FileExistsError when a non-directory is in the way
        logging.warning(f"Inspector - Cannot create directory {path}: {e}")
        return OperationResult.DIRECTORY_CREATE_FAILED
    return OperationResult.SUCCESS


def get_entry(path: Path | str) -> Optional[PathEntry]:
    """
    Build a metadata snapshot for a path.

    Returns None if the path cannot be stat'ed at all.
    """
    path = Path(path)
    try:
        # Use lstat to report symlinks as such
        link_stat = path.lstat()
    except (OSError, ValueError) as e:
        logging.debug(f"Inspector - Failed to stat {path}: {e}")
        return None

    stat_result = link_stat
    if stat.S_ISLNK(link_stat.st_mode):
        file_type = FileType.SYMLINK
        try:
            stat_result = path.stat()
        except OSError as e:
            logging.debug(f"Inspector - Broken symlink {path}: {e}")
    elif stat.S_ISDIR(link_stat.st_mode):
        file_type = FileType.DIRECTORY
    elif stat.S_ISREG(link_stat.st_mode):
        file_type = FileType.FILE
    else:
        file_type = FileType.OTHER

    size = stat_result.st_size if stat.S_ISREG(stat_result.st_mode) else 0

    return PathEntry(
        path=path,
        name=path.name or str(path),
        file_type=file_type,
        size=size,
        permissions=stat_result.st_mode,
        modified_time=datetime.fromtimestamp(stat_result.st_mtime),
    )


def list_entries(path: Path | str) -> list[PathEntry]:
    """
    List a directory for display: directories first, then by name.

    Entries that cannot be stat'ed are skipped. Raises OSError if the
    directory itself cannot be opened.
    """
    entries = []
    with os.scandir(path) as it:
        for dir_entry in it:
            entry = get_entry(dir_entry.path)
            if entry is not None:
                entries.append(entry)

    entries.sort(key=lambda e: (not _points_to_directory(e), e.name))
    return entries


def _points_to_directory(entry: PathEntry) -> bool:
    return stat.S_ISDIR(entry.permissions)


def parent_directory(path: Path | str) -> str:
    """
    Parent of a path as typed by the user.

    Trailing separators are ignored, the root stays the root and a bare
    name has ``.`` as its parent.
    """
    text = str(path)
    while len(text) > 1 and text.endswith(os.sep):
        text = text[:-1]

    index = text.rfind(os.sep)
    if index < 0:
        return "."
    if index == 0:
        return os.sep
    return text[:index]


def resolve_copy_target(source: Path | str, destination: Path | str) -> Path:
    """
    Effective file path written by a copy.

    An existing directory as destination receives the file under the
    source's own name; anything else is used verbatim.
    """
    destination = Path(destination)
    if is_directory(destination):
        return destination / Path(source).name
    return destination


def is_cross_device_error(error: OSError) -> bool:
    """True if a rename failed because source and target are on different volumes."""
    return error.errno == errno.EXDEV
