"""
FileCopy - copy, move, compare and browse files from the terminal.
"""

__version__ = "1.0.0"
