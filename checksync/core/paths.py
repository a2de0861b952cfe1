from __future__ import annotations

import os


def content_root(repo_root: str, content_dir: str) -> str:
    return os.path.join(repo_root, content_dir)


def language_dir(repo_root: str, content_dir: str, language: str) -> str:
    return os.path.join(content_root(repo_root, content_dir), language)


def relative_posix(path: str, start: str) -> str:
    return os.path.relpath(path, start).replace(os.sep, "/")
