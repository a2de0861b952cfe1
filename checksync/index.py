"""
History Layer - Build a per-file "last modified" index from git history.

Each allowed file under a subtree maps to the committer date of the newest
commit touching it, or to a ``LookupFailure`` when that history cannot be
read. A failure for one file never stops the scan.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterator, Union

from checksync.core import git as git_mod
from checksync.core.paths import relative_posix


logger = logging.getLogger(__name__)

ALLOWED_SUFFIXES = (".md", ".yaml", ".json", ".go", ".js")
ALLOWED_NAMES = ("Dockerfile",)


@dataclass(frozen=True)
class LookupFailure:
    """Marker stored instead of a timestamp when git history is unavailable."""
    message: str

    def __str__(self) -> str:
        return f"! {self.message}"


Stamp = Union[datetime, LookupFailure]


def is_tracked_kind(name: str) -> bool:
    """Check whether a file name belongs to the compared document set."""
    return name in ALLOWED_NAMES or name.endswith(ALLOWED_SUFFIXES)


def iter_candidates(root: str) -> Iterator[str]:
    """Yield relative, forward-slash paths of allowed files in lexical order.

    Hidden files and directories are skipped.
    """
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
        for name in sorted(filenames):
            if name.startswith(".") or not is_tracked_kind(name):
                continue
            yield relative_posix(os.path.join(dirpath, name), root)


def build_index(root: str, max_count: int = 10000) -> Dict[str, Stamp]:
    """Map each allowed file under ``root`` to its newest commit date.

    Args:
        root: Directory inside a git working copy to scan.
        max_count: Stop after this many files; ``0`` or less disables the cap.

    Returns:
        Dict keyed by path relative to ``root``.
    """
    logger.info("Scanning %s... (It takes a time)", root)
    files: Dict[str, Stamp] = {}
    for rel in iter_candidates(root):
        date, reason = git_mod.last_commit_time(root, rel)
        if date is None:
            logger.debug("history lookup failed for %s: %s", rel, reason)
            files[rel] = LookupFailure(reason)
        else:
            files[rel] = date
        if 0 < max_count <= len(files):
            logger.warning("Reached the %d file limit while scanning %s", max_count, root)
            break
    return files
