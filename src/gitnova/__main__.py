"""Module entry point for ``python -m gitnova``."""

import sys

from gitnova.ui.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
