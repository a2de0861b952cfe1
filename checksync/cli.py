from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Mapping, Sequence

from . import config as config_mod
from .runner import run_check


VERSION = "checksync 0.1.0"
LOGGER_NAME = "checksync"


def setup_logging(quiet: bool) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = False
    if quiet:
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.CRITICAL + 1)
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="checksync",
        description="Report translated documents that are behind their origin.",
    )
    parser.add_argument("--version", action="version", version=VERSION)
    parser.add_argument("repo", help="path to the git working copy")
    parser.add_argument(
        "language", nargs="?", default=config_mod.DEFAULT_LANGUAGE,
        help="translated language code (default: %(default)s)",
    )
    parser.add_argument("--origin", default=config_mod.DEFAULT_ORIGIN)
    parser.add_argument("--content-dir", default=config_mod.DEFAULT_CONTENT_DIR)
    parser.add_argument("--branch", default=config_mod.DEFAULT_BRANCH)
    parser.add_argument("--max-count", type=int, default=config_mod.DEFAULT_MAX_COUNT)
    parser.add_argument("--web-base", default=config_mod.DEFAULT_WEB_BASE)
    parser.add_argument("--git-base", default=config_mod.DEFAULT_GIT_BASE)
    parser.add_argument("--message", default=config_mod.DEFAULT_MESSAGE)
    parser.add_argument("-o", "--output", default="", help="write HTML here instead of stdout")
    parser.add_argument("-q", "--quiet", action="store_true")
    parser.add_argument("--skip-pull", action="store_true")
    return parser


def config_from_args(
    args: argparse.Namespace, environ: Mapping[str, str]
) -> config_mod.CheckConfig:
    return config_mod.CheckConfig(
        repo_path=args.repo,
        language=args.language,
        origin=args.origin,
        content_dir=args.content_dir,
        upstream_branch=args.branch,
        max_count=args.max_count,
        web_base=args.web_base,
        git_base=args.git_base,
        message=args.message,
        quiet=args.quiet or config_mod.env_flag(environ, "QUIET"),
        skip_pull=args.skip_pull or config_mod.env_flag(environ, "SKIP_PULL"),
    )


def _write(html: str, output: str) -> None:
    if not html.endswith("\n"):
        html += "\n"
    if not output:
        sys.stdout.write(html)
        return
    with open(output, "w", encoding="utf-8") as f:
        f.write(html)


def main(argv: Sequence[str] | None = None, environ: Mapping[str, str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = config_from_args(args, os.environ if environ is None else environ)
    setup_logging(cfg.quiet)

    result = run_check(cfg)
    if not result.ok:
        logging.getLogger(LOGGER_NAME).error("Error: %s", result.message)
        return 1
    try:
        _write(result.html, args.output)
    except OSError as exc:
        logging.getLogger(LOGGER_NAME).error("Error: cannot write %s: %s", args.output, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
