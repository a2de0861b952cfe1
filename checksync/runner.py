"""
Pipeline Layer - Refresh, index, compare and render in one sequential pass.

Fatal problems come back as a ``CheckResult`` carrying a ``Failure`` kind;
the first failing step ends the run and no HTML is produced.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from checksync.core import git as git_mod
from checksync.core import paths
from checksync.core.util import format_stamp

from .compare import ComparisonEntry, compare_indexes
from .config import CheckConfig, ReportOptions
from .index import build_index
from .render import render_report


logger = logging.getLogger(__name__)


class Failure(str, Enum):
    REPOSITORY_OPEN = "repository-open"
    REPOSITORY_REFRESH = "repository-refresh"
    MISSING_CONTENT = "missing-content"


@dataclass(frozen=True)
class CheckResult:
    html: str = ""
    failure: Optional[Failure] = None
    message: str = ""
    entries: Tuple[ComparisonEntry, ...] = ()

    @property
    def ok(self) -> bool:
        return self.failure is None


def _fail(failure: Failure, message: str) -> CheckResult:
    return CheckResult(failure=failure, message=message)


def refresh(config: CheckConfig, repo: str) -> Optional[CheckResult]:
    if config.skip_pull:
        logger.info("Skipping fetch of %s", config.upstream_branch)
    else:
        logger.info("Fetching %s...", config.upstream_branch)
        error = git_mod.pull(repo)
        if error:
            return _fail(
                Failure.REPOSITORY_REFRESH,
                f"Missing branch {config.upstream_branch} or something wrong. {error}",
            )

    commit = git_mod.newest_commit(repo, config.upstream_branch)
    if commit is None:
        return _fail(
            Failure.REPOSITORY_REFRESH,
            f"Cannot read the newest commit of {config.upstream_branch}",
        )
    logger.info(
        "Newest commit of %s is %s at %s",
        config.upstream_branch,
        commit.sha[:9],
        format_stamp(commit.date),
    )
    return None


def check_workdir(config: CheckConfig, repo: str) -> Optional[CheckResult]:
    for language in (config.origin, config.language):
        path = paths.language_dir(repo, config.content_dir, language)
        if not os.path.isdir(path):
            return _fail(
                Failure.MISSING_CONTENT,
                f"Missing content folder {paths.relative_posix(path, repo)}",
            )
    return None


def collect_entries(config: CheckConfig, repo: str) -> List[ComparisonEntry]:
    origin = build_index(
        paths.language_dir(repo, config.content_dir, config.origin),
        max_count=config.max_count,
    )
    translated = build_index(
        paths.language_dir(repo, config.content_dir, config.language),
        max_count=config.max_count,
    )
    return compare_indexes(origin, translated)


def run_check(config: CheckConfig) -> CheckResult:
    repo = git_mod.repo_root(config.repo_path)
    if repo is None:
        return _fail(
            Failure.REPOSITORY_OPEN,
            f"{config.repo_path} seems not a Git repository. Aborted.",
        )

    for step in (refresh, check_workdir):
        failed = step(config, repo)
        if failed is not None:
            return failed

    entries = collect_entries(config, repo)
    html = render_report(entries, ReportOptions.from_config(config))
    return CheckResult(html=html, entries=tuple(entries))
