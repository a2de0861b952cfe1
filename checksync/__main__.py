"""
Entry point for ``python -m checksync``.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
