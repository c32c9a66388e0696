"""
Main entry point for the FileCopy utility.

This module handles:
- Command line argument parsing
- Logging configuration
- Exception handling
- Batch copy/move from the command line
- Launching the interactive menu
"""

from __future__ import annotations

import argparse
import faulthandler
import logging
import os
import signal
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, List

from filecopy import __version__
from filecopy.core import inspector
from filecopy.core.copier import FileCopier
from filecopy.core.models import CopyStatistics, OperationResult, PatternSet
from filecopy.core.mover import MoveOrchestrator
from filecopy.core.walker import TreeCopier
from filecopy.services.hashing import HashAlgorithm
from filecopy.services.settings import ApplicationSettings, SettingsManager
from filecopy.ui.console import Terminal
from filecopy.ui.menu import InteractiveMenu
from filecopy.ui.progress import ProgressReporter


# =============================================================================
# Constants
# =============================================================================

APP_NAME = "FileCopy"
APP_VERSION = __version__

if getattr(sys, 'frozen', False):
    # Running as compiled executable
    APP_DIR = Path(sys.executable).parent
else:
    APP_DIR = Path(__file__).parent.parent

LOGS_DIR = APP_DIR / "logs"


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class CommandLineArgs:
    """Parsed command line arguments."""
    source_path: Optional[str] = None
    dest_path: Optional[str] = None
    include: str = ""
    exclude: str = ""
    move: bool = False
    show_progress: bool = True
    algorithm: Optional[HashAlgorithm] = None
    config_file: Optional[str] = None
    log_level: str = "WARNING"
    debug: bool = False

    @property
    def is_batch(self) -> bool:
        return bool(self.source_path and self.dest_path)

    @property
    def is_filtered(self) -> bool:
        return bool(self.include.strip() or self.exclude.strip())


# =============================================================================
# Logging Setup
# =============================================================================

class LogFormatter(logging.Formatter):
    """Custom log formatter with colors for console."""

    COLORS = {
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelno, '')
            return f"{color}{formatted}{self.RESET}"

        return formatted


def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure application logging.

    Log records go to stderr so they never interleave with menu output.

    Args:
        level: Log level string
        log_file: Optional file path for logging

    Returns:
        Root logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(LogFormatter(use_colors=True))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(LogFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    return root_logger


# =============================================================================
# Exception Handling
# =============================================================================

class ExceptionHandler:
    """
    Global exception handler for unhandled exceptions.

    Logs the exception and prints a one-line message instead of a traceback.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def handle_exception(
        self,
        exc_type: type,
        exc_value: BaseException,
        exc_tb
    ) -> None:
        """Handle an unhandled exception."""
        # Don't handle keyboard interrupt
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return

        self.logger.critical(
            "Unhandled exception",
            exc_info=(exc_type, exc_value, exc_tb)
        )
        sys.stderr.write(f"{APP_NAME}: unexpected error: {exc_type.__name__}: {exc_value}\n")


def setup_signal_handlers() -> None:
    """Set up Unix signal handlers."""
    if sys.platform != 'win32':
        signal.signal(signal.SIGTERM, _signal_handler)


def _signal_handler(signum, frame) -> None:
    logging.info(f"Received signal {signum}, shutting down...")
    raise SystemExit(128 + signum)


# =============================================================================
# Command Line Parsing
# =============================================================================

def parse_arguments(args: Optional[List[str]] = None) -> CommandLineArgs:
    """
    Parse command line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME.lower(),
        description="Copy, move, compare and browse files and directories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                  Start the interactive menu
  %(prog)s notes.txt backup/                Copy a file into a folder
  %(prog)s project/ /mnt/usb/project        Copy a directory tree
  %(prog)s src/ out/ --include "*.py"       Copy only Python files
  %(prog)s old/ /mnt/usb/old --move         Move a directory
        """
    )

    # Positional arguments
    parser.add_argument(
        'source',
        nargs='?',
        help='File or directory to copy'
    )
    parser.add_argument(
        'dest',
        nargs='?',
        help='Destination path'
    )

    # Copy options
    parser.add_argument(
        '-i', '--include',
        default='',
        help='Comma separated glob patterns of files to copy'
    )
    parser.add_argument(
        '-e', '--exclude',
        default='',
        help='Comma separated glob patterns of files to skip'
    )
    parser.add_argument(
        '--move',
        action='store_true',
        help='Move instead of copy'
    )
    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Do not show progress bars'
    )

    # Digest
    parser.add_argument(
        '-a', '--algorithm',
        type=HashAlgorithm.from_string,
        metavar='{xxh128,md5,sha256}',
        help='Digest algorithm for the compute/verify digest actions'
    )

    # Configuration
    parser.add_argument(
        '-c', '--config',
        help='JSON settings file (only read when given)'
    )

    # Logging
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='WARNING',
        help='Log level'
    )

    # Version
    parser.add_argument(
        '--version',
        action='version',
        version=f'{APP_NAME} {APP_VERSION}'
    )

    parsed = parser.parse_args(args)

    if parsed.move and (parsed.include or parsed.exclude):
        parser.error("--move cannot be combined with --include/--exclude")

    result = CommandLineArgs()
    result.source_path = parsed.source
    result.dest_path = parsed.dest
    result.include = parsed.include
    result.exclude = parsed.exclude
    result.move = parsed.move
    result.show_progress = not parsed.no_progress
    result.algorithm = parsed.algorithm
    result.config_file = parsed.config
    result.debug = parsed.debug

    # Log level
    if parsed.debug:
        result.log_level = 'DEBUG'
    elif parsed.verbose:
        result.log_level = 'INFO'
    else:
        result.log_level = parsed.log_level

    return result


# =============================================================================
# Batch Mode
# =============================================================================

def run_batch(
    args: CommandLineArgs,
    settings: ApplicationSettings,
    terminal: Terminal
) -> int:
    """
    Copy or move SOURCE to DEST without prompting.

    Returns:
        0 on success, 1 on any failure
    """
    source = args.source_path
    dest = args.dest_path

    if not inspector.exists(source):
        terminal.error(f"Source does not exist: {source}")
        return 1

    copier = FileCopier(
        buffer_size=settings.copy.buffer_size,
        preserve_permissions=settings.copy.preserve_permissions,
    )
    tree_copier = TreeCopier(copier)
    source_is_dir = inspector.is_directory(source)
    stats: Optional[CopyStatistics] = None

    show_progress = args.show_progress and settings.ui.show_progress
    with ProgressReporter(console=terminal.console, enabled=show_progress) as progress:
        if args.move:
            mover = MoveOrchestrator(
                copier=copier,
                tree_copier=tree_copier,
            )
            if source_is_dir:
                result = mover.move_directory(source, dest, progress)
            else:
                result = mover.move_file(source, dest, progress)
            action = "move"
        elif args.is_filtered:
            patterns = PatternSet.parse(args.include, args.exclude)
            stats = CopyStatistics()
            if source_is_dir:
                result = tree_copier.copy_tree(source, dest, patterns, stats, progress)
            else:
                result = tree_copier.copy_file_filtered(source, dest, patterns, stats, progress)
            action = "filtered copy"
        elif source_is_dir:
            result = tree_copier.copy_tree(source, dest, progress_callback=progress)
            action = "copy directory"
        else:
            result = copier.copy_file(source, dest, progress)
            action = "copy file"

    logging.info(f"Batch - {action} {source} -> {dest}: {result.name}")

    if stats is not None:
        terminal.show_statistics(stats)

    if result != OperationResult.SUCCESS:
        terminal.report_error(result, action)
        return 1

    terminal.success(f"{source} -> {dest}")
    return 0


# =============================================================================
# Main
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Application main entry point.

    Returns:
        Exit code (0 for success)
    """
    # Redirect stdout/stderr if None (common in frozen apps)
    if sys.stdout is None:
        sys.stdout = open(os.devnull, 'w')
    if sys.stderr is None:
        sys.stderr = open(os.devnull, 'w')

    faulthandler.enable()

    args = parse_arguments(argv)

    log_file = LOGS_DIR / f"{APP_NAME}_{datetime.now():%Y%m%d}.log" if args.debug else None
    logger = setup_logging(args.log_level, log_file)
    logger.info(f"Starting {APP_NAME} v{APP_VERSION}")

    exception_handler = ExceptionHandler(logger)
    sys.excepthook = exception_handler.handle_exception
    setup_signal_handlers()

    manager = SettingsManager(Path(args.config_file) if args.config_file else None)
    settings = manager.settings
    if args.algorithm is not None:
        settings.hashing.algorithm = args.algorithm

    terminal = Terminal(use_colors=settings.ui.use_colors)

    if args.source_path and not args.dest_path:
        terminal.error("Both SOURCE and DEST are required for batch mode.")
        return 1

    try:
        if args.is_batch:
            exit_code = run_batch(args, settings, terminal)
        else:
            exit_code = InteractiveMenu(terminal, settings).run()
    except KeyboardInterrupt:
        terminal.console.print()
        terminal.warning("Interrupted.")
        exit_code = 130

    logger.info(f"Application exiting with code {exit_code}")
    return exit_code


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == '__main__':
    sys.exit(main())
