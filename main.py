"""
Launcher for running FileCopy from a source checkout.
"""

import sys

from filecopy.main import main


if __name__ == '__main__':
    sys.exit(main())
