"""Entry point for ``python -m browser_data``."""

import sys

from browser_data.cli import main

if __name__ == "__main__":
    sys.exit(main())
