"""
Copy engine.

Provides functionality for:
- Path and metadata queries
- Glob-style include/exclude filtering
- Streamed single-file copies
- Byte-exact comparison
- Recursive, filtered tree copies with statistics
- Moves with a verified cross-device fallback
"""

from filecopy.core.models import (
    CopyProgress,
    CopyStatistics,
    FileType,
    OperationResult,
    PathEntry,
    PatternSet,
)
from filecopy.core.copier import FileCopier
from filecopy.core.comparator import compare, compare_trees
from filecopy.core.patterns import matches, should_include
from filecopy.core.walker import TreeCopier
from filecopy.core.mover import MoveOrchestrator

__all__ = [
    # Models
    'CopyProgress',
    'CopyStatistics',
    'FileType',
    'OperationResult',
    'PathEntry',
    'PatternSet',
    # Operations
    'FileCopier',
    'TreeCopier',
    'MoveOrchestrator',
    'compare',
    'compare_trees',
    'matches',
    'should_include',
]
