"""Pytest bootstrap for local source imports.

Puts the repository root and this directory on ``sys.path`` so ``import
checksync`` resolves to the local package and ``helpers`` is importable.
"""

from __future__ import annotations

import sys
from pathlib import Path


TESTS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = TESTS_DIR.parent

for entry in (str(PROJECT_ROOT), str(TESTS_DIR)):
    if entry not in sys.path:
        sys.path.insert(0, entry)
