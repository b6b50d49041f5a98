"""Git annotation tests against real temporary repositories.

Checks modified/clean/untracked detection, directory aggregation,
repositories without commits, and silent fallback outside a work tree.
"""

from __future__ import annotations

import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from rls import git_status
from rls.git_status import GitContext, annotate
from rls.listing import list_directory
from rls.models import ListingConfig, VcsState, VcsStatus

GIT_MISSING = shutil.which("git") is None


def _git(root: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=root, check=True, stdout=subprocess.DEVNULL)


def _init_repo(root: Path) -> None:
    _git(root, "init", "-q")
    _git(root, "config", "user.email", "tests@example.com")
    _git(root, "config", "user.name", "Tests")
    _git(root, "config", "commit.gpgsign", "false")


class VcsStatusSuffixTests(unittest.TestCase):
    def test_suffixes(self) -> None:
        self.assertEqual(VcsStatus(VcsState.MODIFIED, added=3, deleted=1).suffix, "(+3 -1)")
        self.assertEqual(VcsStatus(VcsState.CLEAN).suffix, "(clean)")
        self.assertEqual(VcsStatus(VcsState.UNTRACKED).suffix, "(untracked)")

    def test_annotate_without_context_is_none(self) -> None:
        self.assertIsNone(annotate(Path("/anywhere/file.txt"), None))

    def test_tracked_directory_with_new_file_is_untracked(self) -> None:
        root = Path("/repo")
        context = GitContext(
            repo_root=root,
            untracked={"steady/new.txt"},
            tracked={"steady", "steady/kept.txt", "other", "other/kept.txt"},
        )
        self.assertEqual(context.status_for(root / "steady", True), VcsStatus(VcsState.UNTRACKED))
        self.assertEqual(context.status_for(root / "other", True), VcsStatus(VcsState.CLEAN))
        self.assertEqual(context.status_for(root / "steady" / "kept.txt", False), VcsStatus(VcsState.CLEAN))


class PorcelainParsingTests(unittest.TestCase):
    def test_rename_source_token_is_skipped(self) -> None:
        output = "R  new.txt\0old.txt\0?? extra/\0 M changed.py\0"
        self.assertEqual(
            git_status._iter_porcelain_records(output),
            [("R ", "new.txt"), ("??", "extra/"), (" M", "changed.py")],
        )

    def test_numstat_binary_counts_are_zero(self) -> None:
        output = "2\t1\tsrc/a.py\0-\t-\timage.png\0"
        self.assertEqual(
            git_status._parse_numstat(output),
            {"src/a.py": (2, 1), "image.png": (0, 0)},
        )


@unittest.skipIf(GIT_MISSING, "git is required for repository annotation tests")
class GitRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _make_committed_repo(self) -> None:
        _init_repo(self.root)
        (self.root / ".gitignore").write_text("*.log\n", encoding="utf-8")
        (self.root / "changed.txt").write_text("one\ntwo\n", encoding="utf-8")
        (self.root / "clean.txt").write_text("same\n", encoding="utf-8")
        (self.root / "sub").mkdir()
        (self.root / "sub" / "inner.txt").write_text("x\n", encoding="utf-8")
        (self.root / "steady").mkdir()
        (self.root / "steady" / "kept.txt").write_text("k\n", encoding="utf-8")
        (self.root / "mixed").mkdir()
        (self.root / "mixed" / "base.txt").write_text("b\n", encoding="utf-8")
        _git(self.root, "add", "-A")
        _git(self.root, "commit", "-q", "-m", "initial")

        (self.root / "changed.txt").write_text("one\nTWO\nthree\n", encoding="utf-8")
        (self.root / "sub" / "inner.txt").write_text("y\n", encoding="utf-8")
        (self.root / "new.txt").write_text("fresh\n", encoding="utf-8")
        (self.root / "debug.log").write_text("noise\n", encoding="utf-8")
        (self.root / "extra").mkdir()
        (self.root / "extra" / "file.txt").write_text("e\n", encoding="utf-8")
        (self.root / "mixed" / "new.txt").write_text("n\n", encoding="utf-8")

    def test_statuses_for_each_kind_of_entry(self) -> None:
        self._make_committed_repo()
        rows = {r.name: r for r in list_directory(self.root, ListingConfig(git_enabled=True, show_hidden=True))}

        self.assertEqual(rows["changed.txt"].vcs_suffix, "(+2 -1)")
        self.assertEqual(rows["clean.txt"].vcs_suffix, "(clean)")
        self.assertEqual(rows["new.txt"].vcs_suffix, "(untracked)")
        self.assertEqual(rows["extra"].vcs_suffix, "(untracked)")
        self.assertEqual(rows["sub"].vcs_suffix, "(+1 -1)")
        self.assertEqual(rows["steady"].vcs_suffix, "(clean)")
        self.assertEqual(rows["mixed"].vcs_suffix, "(untracked)")
        self.assertEqual(rows[".gitignore"].vcs_suffix, "(clean)")
        self.assertIsNone(rows["debug.log"].vcs_suffix)
        self.assertIsNone(rows[".git"].vcs_suffix)

    def test_listing_a_subdirectory_uses_repository_paths(self) -> None:
        self._make_committed_repo()
        rows = list_directory(self.root / "sub", ListingConfig(git_enabled=True))
        self.assertEqual([(r.name, r.vcs_suffix) for r in rows], [("inner.txt", "(+1 -1)")])

    def test_files_inside_untracked_directory_are_untracked(self) -> None:
        self._make_committed_repo()
        rows = list_directory(self.root / "extra", ListingConfig(git_enabled=True))
        self.assertEqual(rows[0].vcs_suffix, "(untracked)")

    def test_repository_without_commits(self) -> None:
        _init_repo(self.root)
        (self.root / "staged.txt").write_text("a\nb\n", encoding="utf-8")
        (self.root / "loose.txt").write_text("c\n", encoding="utf-8")
        _git(self.root, "add", "staged.txt")

        context = GitContext.load(self.root)
        self.assertIsNotNone(context)
        self.assertEqual(annotate(self.root / "staged.txt", context), VcsStatus(VcsState.MODIFIED, 2, 0))
        self.assertEqual(annotate(self.root / "loose.txt", context), VcsStatus(VcsState.UNTRACKED))

    def test_directory_outside_repository_gets_no_annotation(self) -> None:
        (self.root / "plain.txt").write_text("x\n", encoding="utf-8")
        with mock.patch.dict("os.environ", {"GIT_CEILING_DIRECTORIES": str(self.root.parent)}):
            self.assertIsNone(GitContext.load(self.root))
            rows = list_directory(self.root, ListingConfig(git_enabled=True))
        self.assertEqual([(r.name, r.vcs_suffix) for r in rows], [("plain.txt", None)])


class GitFailureTests(unittest.TestCase):
    def test_missing_git_binary_is_silent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "file.txt").write_text("x\n", encoding="utf-8")
            with mock.patch("rls.git_status.subprocess.run", side_effect=FileNotFoundError("git")):
                rows = list_directory(root, ListingConfig(git_enabled=True))
            self.assertEqual([(r.name, r.vcs_suffix) for r in rows], [("file.txt", None)])

    def test_git_timeout_is_silent(self) -> None:
        timeout = subprocess.TimeoutExpired(cmd=["git"], timeout=0.1)
        with mock.patch("rls.git_status.subprocess.run", side_effect=timeout):
            self.assertIsNone(GitContext.load(Path(".")))


if __name__ == "__main__":
    unittest.main()
