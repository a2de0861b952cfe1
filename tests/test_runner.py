"""End-to-end pipeline tests for ``checksync.runner.run_check``."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from helpers import GIT_MISSING, commit_files, day, git, init_repo

from checksync.compare import Status
from checksync.config import CheckConfig
from checksync.runner import Failure, run_check


def _seed(root: Path) -> None:
    commit_files(
        root,
        day(10),
        {
            "content/en/a.md": "a",
            "content/en/b.md": "b",
            "content/en/c.md": "c",
            "content/ja/a.md": "a-ja",
            "content/ja/b.md": "b-ja",
            "content/ja/only.md": "only-ja",
        },
    )
    commit_files(root, day(100), {"content/en/b.md": "b2"})


class RunCheckFailureTests(unittest.TestCase):
    def test_non_repository_path_fails_to_open(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            result = run_check(CheckConfig(repo_path=str(Path(tmp) / "nowhere")))
        self.assertFalse(result.ok)
        self.assertIs(result.failure, Failure.REPOSITORY_OPEN)
        self.assertEqual(result.html, "")

    @unittest.skipIf(GIT_MISSING, "git is required for pipeline tests")
    def test_pull_without_upstream_is_refresh_failure(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = init_repo(Path(tmp) / "repo")
            _seed(root)
            result = run_check(CheckConfig(repo_path=str(root)))
        self.assertIs(result.failure, Failure.REPOSITORY_REFRESH)
        self.assertIn("Missing branch main", result.message)

    @unittest.skipIf(GIT_MISSING, "git is required for pipeline tests")
    def test_unknown_upstream_branch_is_refresh_failure(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = init_repo(Path(tmp) / "repo")
            _seed(root)
            result = run_check(
                CheckConfig(repo_path=str(root), upstream_branch="release", skip_pull=True)
            )
        self.assertIs(result.failure, Failure.REPOSITORY_REFRESH)

    @unittest.skipIf(GIT_MISSING, "git is required for pipeline tests")
    def test_missing_origin_tree(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = init_repo(Path(tmp) / "repo")
            commit_files(root, day(1), {"content/ja/a.md": "a-ja"})
            result = run_check(CheckConfig(repo_path=str(root), skip_pull=True))
        self.assertIs(result.failure, Failure.MISSING_CONTENT)
        self.assertIn("content/en", result.message)
        self.assertEqual(result.html, "")

    @unittest.skipIf(GIT_MISSING, "git is required for pipeline tests")
    def test_missing_translated_tree(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = init_repo(Path(tmp) / "repo")
            _seed(root)
            result = run_check(CheckConfig(repo_path=str(root), language="ko", skip_pull=True))
        self.assertIs(result.failure, Failure.MISSING_CONTENT)
        self.assertIn("content/ko", result.message)


@unittest.skipIf(GIT_MISSING, "git is required for pipeline tests")
class RunCheckSuccessTests(unittest.TestCase):
    def test_skip_pull_classifies_and_renders(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = init_repo(Path(tmp) / "repo")
            _seed(root)
            result = run_check(CheckConfig(repo_path=str(root), skip_pull=True))

        self.assertTrue(result.ok)
        statuses = {entry.path: entry.status for entry in result.entries}
        self.assertEqual(
            statuses,
            {
                "a.md": Status.UP_TO_DATE,
                "b.md": Status.BEHIND,
                "c.md": Status.UNTRANSLATED,
                "only.md": Status.ORPHANED,
            },
        )
        self.assertIn('<td class="behind30">behind</td>', result.html)
        self.assertIn("Translation status: en -&gt; ja", result.html)

    def test_pull_from_tracked_clone(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            upstream = init_repo(Path(tmp) / "upstream")
            _seed(upstream)
            clone = Path(tmp) / "clone"
            git(Path(tmp), "clone", "-q", str(upstream), str(clone))
            commit_files(upstream, day(200), {"content/ja/b.md": "b2-ja"})

            result = run_check(CheckConfig(repo_path=str(clone)))

        self.assertTrue(result.ok, result.message)
        statuses = {entry.path: entry.status for entry in result.entries}
        self.assertEqual(statuses["b.md"], Status.UP_TO_DATE)


if __name__ == "__main__":
    unittest.main()
