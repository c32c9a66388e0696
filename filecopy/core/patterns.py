"""
Glob-style include/exclude filtering.

Patterns are matched against the file name only, never the full path:
- * (matches any run of characters)
- ? (matches a single character)
- [abc] (character class)
"""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import Optional

from filecopy.core.models import PatternSet


def matches(filename: str, pattern: str) -> bool:
    """Check if a file name matches a shell glob pattern."""
    return fnmatch.fnmatch(_name_of(filename), pattern)


def should_include(filename: str, patterns: Optional[PatternSet]) -> bool:
    """
    Decide whether a file passes a pattern set.

    Exclude patterns are checked first and always win. With no include
    patterns everything else is included; otherwise at least one include
    pattern has to match.
    """
    if patterns is None or patterns.is_empty:
        return True

    name = _name_of(filename)

    for pattern in patterns.exclude:
        if fnmatch.fnmatch(name, pattern):
            return False

    if not patterns.include:
        return True

    for pattern in patterns.include:
        if fnmatch.fnmatch(name, pattern):
            return True

    return False


def _name_of(filename: str | Path) -> str:
    text = str(filename)
    if os.sep in text or (os.altsep and os.altsep in text):
        return Path(text).name
    return text
