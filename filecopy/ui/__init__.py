"""
Terminal user interface.

Provides the interactive menu, the file browser, progress bars and
human-readable formatting on top of rich.
"""

from filecopy.ui.console import Terminal, describe_error
from filecopy.ui.menu import InteractiveMenu
from filecopy.ui.progress import ProgressReporter

__all__ = [
    'Terminal',
    'describe_error',
    'InteractiveMenu',
    'ProgressReporter',
]
