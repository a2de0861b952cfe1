"""
Configuration Layer - Explicit settings for a single checksync run.

Everything a run depends on lives in ``CheckConfig``; environment toggles
are resolved by the CLI before the config is built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping


DEFAULT_LANGUAGE = "ja"
DEFAULT_ORIGIN = "en"
DEFAULT_CONTENT_DIR = "content"
DEFAULT_BRANCH = "main"
DEFAULT_MAX_COUNT = 10000
DEFAULT_WEB_BASE = "https://kubernetes.io"
DEFAULT_GIT_BASE = "https://github.com/kubernetes/website/tree/main/content"
DEFAULT_MESSAGE = (
    '<p>Translation may be in progress. Please check the '
    '<a href="https://github.com/kubernetes/website/issues" target="checksyncweb">'
    "GitHub issue</a> before working on it.</p>"
)


@dataclass(frozen=True)
class CheckConfig:
    """Settings for comparing one translated tree against the origin tree."""
    repo_path: str
    language: str = DEFAULT_LANGUAGE
    origin: str = DEFAULT_ORIGIN
    content_dir: str = DEFAULT_CONTENT_DIR
    upstream_branch: str = DEFAULT_BRANCH
    max_count: int = DEFAULT_MAX_COUNT
    web_base: str = DEFAULT_WEB_BASE
    git_base: str = DEFAULT_GIT_BASE
    message: str = DEFAULT_MESSAGE
    quiet: bool = False
    skip_pull: bool = False


@dataclass(frozen=True)
class ReportOptions:
    """Display parameters for the HTML report."""
    origin_name: str = DEFAULT_ORIGIN
    translated_name: str = DEFAULT_LANGUAGE
    web_base: str = DEFAULT_WEB_BASE
    git_base: str = DEFAULT_GIT_BASE
    message: str = ""
    generated_at: datetime = field(default_factory=lambda: datetime.now().astimezone())

    @classmethod
    def from_config(cls, config: CheckConfig) -> "ReportOptions":
        return cls(
            origin_name=config.origin,
            translated_name=config.language,
            web_base=config.web_base.rstrip("/"),
            git_base=config.git_base.rstrip("/"),
            message=config.message,
        )


def env_flag(environ: Mapping[str, str], name: str) -> bool:
    return bool(environ.get(name, ""))
