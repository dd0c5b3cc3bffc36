"""
Entry point for module execution (``python -m default_migrator``).

This module delegates execution to the CLI handler in ``default_migrator.cli.__main__``.
"""

import sys

from default_migrator.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
