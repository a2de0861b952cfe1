from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime

from .util import first_line, from_epoch, run


@dataclass(frozen=True)
class CommitInfo:
    sha: str
    date: datetime


def repo_root(path: str) -> str | None:
    if not os.path.isdir(path):
        return None
    res = run(["git", "rev-parse", "--show-toplevel"], cwd=path)
    if not res.ok or not res.stdout:
        return None
    return res.stdout.strip()


def pull(repo: str) -> str | None:
    """Fast-forward the working copy. Returns an error message on failure."""
    res = run(["git", "pull", "--ff-only"], cwd=repo)
    if res.ok:
        return None
    return first_line(res.stderr) or first_line(res.stdout) or "git pull failed"


def newest_commit(repo: str, ref: str) -> CommitInfo | None:
    res = run(["git", "log", "-1", "--format=%H %ct", ref, "--"], cwd=repo)
    if not res.ok or not res.stdout:
        return None
    sha, _, stamp = res.stdout.partition(" ")
    date = from_epoch(stamp)
    if date is None:
        return None
    return CommitInfo(sha, date)


def last_commit_time(cwd: str, path: str) -> tuple[datetime | None, str]:
    """Committer date of the newest commit touching ``path``.

    Returns ``(date, "")`` on success and ``(None, reason)`` when history
    cannot be read for the path.
    """
    res = run(
        ["git", "--literal-pathspecs", "log", "-1", "--format=%ct", "--", path], cwd=cwd
    )
    if not res.ok:
        return None, first_line(res.stderr) or f"git log exited with {res.code}"
    if not res.stdout:
        return None, "no commit history"
    date = from_epoch(res.stdout)
    if date is None:
        return None, f"unexpected git log output: {first_line(res.stdout)}"
    return date, ""
