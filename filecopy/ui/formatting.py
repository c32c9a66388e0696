"""
Human-readable formatting of sizes, permissions, durations and speeds.
"""

from __future__ import annotations

import stat
from datetime import datetime
from typing import Optional


def format_size(num_bytes: float) -> str:
    """Format bytes into human-readable string."""
    if num_bytes < 1024:
        return f"{int(num_bytes)} B"
    for unit in ["KB", "MB", "GB", "TB"]:
        num_bytes /= 1024
        if num_bytes < 1024:
            return f"{num_bytes:.1f} {unit}"
    return f"{num_bytes / 1024:.1f} PB"


def format_permissions(mode: int) -> str:
    """Format mode bits like ``ls -l`` (e.g. ``drwxr-xr-x``)."""
    return stat.filemode(mode)


def format_time(seconds: float) -> str:
    """Format seconds into a human-readable time string."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        m, s = divmod(seconds, 60)
        return f"{int(m)}m {int(s)}s"
    else:
        h, rem = divmod(seconds, 3600)
        m, _ = divmod(rem, 60)
        return f"{int(h)}h {int(m)}m"


def format_speed(bytes_per_second: float) -> str:
    return f"{format_size(bytes_per_second)}/s"


def format_timestamp(value: Optional[datetime], with_seconds: bool = False) -> str:
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M:%S" if with_seconds else "%Y-%m-%d %H:%M")
