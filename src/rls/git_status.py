"""Git status annotation for listed entries.

All git queries for one listing are made up front by ``GitContext.load``;
``annotate`` then answers per-entry lookups from that snapshot. Any git
failure means "no annotation", never an error.
"""

import pathlib
import subprocess
from dataclasses import dataclass, field

from rls.constants import GIT_EMPTY_TREE, GIT_TIMEOUT_SECONDS
from rls.models import VcsState, VcsStatus


def _run_git(
    cwd: pathlib.Path, args: list[str], timeout_seconds: float
) -> subprocess.CompletedProcess[str] | None:
    try:
        return subprocess.run(
            ["git", "-C", str(cwd), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError):
        return None


def _git_output(cwd: pathlib.Path, args: list[str], timeout_seconds: float) -> str | None:
    proc = _run_git(cwd, args, timeout_seconds)
    if proc is None or proc.returncode != 0:
        return None
    return proc.stdout


def _resolve_repo_root(directory: pathlib.Path, timeout_seconds: float) -> pathlib.Path | None:
    output = _git_output(directory, ["rev-parse", "--show-toplevel"], timeout_seconds)
    if output is None:
        return None
    top = output.strip()
    if not top:
        return None
    return pathlib.Path(top).resolve()


def _iter_porcelain_records(output: str) -> list[tuple[str, str]]:
    records: list[tuple[str, str]] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if len(token) < 4 or token[2] != " ":
            continue

        status = token[:2]
        records.append((status, token[3:]))

        # Renames and copies carry the source path as an extra token.
        if "R" in status or "C" in status:
            index += 1

    return records


def _parse_numstat(output: str) -> dict[str, tuple[int, int]]:
    """Parse ``git diff --numstat -z --no-renames`` output.

    Binary files report ``-`` for both counts and are recorded as 0/0.
    """
    changes: dict[str, tuple[int, int]] = {}
    for record in output.split("\0"):
        parts = record.split("\t", 2)
        if len(parts) != 3 or not parts[2]:
            continue
        added, deleted, rel_path = parts
        changes[rel_path] = (
            int(added) if added.isdigit() else 0,
            int(deleted) if deleted.isdigit() else 0,
        )
    return changes


def _ancestors(rel_path: str) -> list[str]:
    parts = rel_path.split("/")
    return ["/".join(parts[:i]) for i in range(1, len(parts))]


@dataclass
class GitContext:
    """Snapshot of git state for the children of one directory.

    Attributes:
        repo_root: Top-level directory of the repository
        changes: Repo-relative path -> (added, deleted) for modified files
        untracked: Repo-relative untracked paths (directories without trailing slash)
        tracked: Repo-relative paths of tracked files and every directory containing one
    """

    repo_root: pathlib.Path
    changes: dict[str, tuple[int, int]] = field(default_factory=dict)
    untracked: set[str] = field(default_factory=set)
    tracked: set[str] = field(default_factory=set)

    @classmethod
    def load(
        cls, directory: pathlib.Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS
    ) -> "GitContext | None":
        """Query git once for everything needed to annotate ``directory``.

        Args:
            directory: The directory being listed
            timeout_seconds: Timeout applied to each git invocation

        Returns:
            GitContext, or None if git is unavailable or the directory is not in a work tree
        """
        directory = directory.resolve()
        repo_root = _resolve_repo_root(directory, timeout_seconds)
        if repo_root is None:
            return None

        try:
            scope = directory.relative_to(repo_root).as_posix()
        except ValueError:
            return None

        has_head = _run_git(repo_root, ["rev-parse", "--verify", "-q", "HEAD"], timeout_seconds)
        if has_head is None:
            return None
        base = "HEAD" if has_head.returncode == 0 else GIT_EMPTY_TREE

        numstat = _git_output(
            repo_root,
            ["diff", "--numstat", "-z", "--no-renames", base, "--", scope],
            timeout_seconds,
        )
        status = _git_output(
            repo_root,
            ["status", "--porcelain=v1", "-z", "--untracked-files=normal", "--", scope],
            timeout_seconds,
        )
        ls_files = _git_output(repo_root, ["ls-files", "-z", "--", scope], timeout_seconds)
        if numstat is None or status is None or ls_files is None:
            return None

        context = cls(repo_root=repo_root, changes=_parse_numstat(numstat))
        for code, rel_path in _iter_porcelain_records(status):
            if code == "??":
                context.untracked.add(rel_path.rstrip("/"))
        for rel_path in ls_files.split("\0"):
            if rel_path:
                context.tracked.add(rel_path)
                context.tracked.update(_ancestors(rel_path))
        return context

    def relative(self, path: pathlib.Path) -> str | None:
        try:
            return path.relative_to(self.repo_root).as_posix()
        except ValueError:
            return None

    def status_for(self, path: pathlib.Path, is_directory: bool) -> VcsStatus | None:
        rel_path = self.relative(path)
        if rel_path is None or rel_path == ".":
            return None

        if rel_path in self.untracked or any(a in self.untracked for a in _ancestors(rel_path)):
            return VcsStatus(VcsState.UNTRACKED)

        if is_directory:
            prefix = f"{rel_path}/"
            counts = [c for p, c in self.changes.items() if p.startswith(prefix)]
            if counts:
                return VcsStatus(
                    VcsState.MODIFIED,
                    added=sum(a for a, _ in counts),
                    deleted=sum(d for _, d in counts),
                )
            # A tracked directory holding only new files is not clean.
            if any(p.startswith(prefix) for p in self.untracked):
                return VcsStatus(VcsState.UNTRACKED)
        elif rel_path in self.changes:
            added, deleted = self.changes[rel_path]
            return VcsStatus(VcsState.MODIFIED, added=added, deleted=deleted)

        if rel_path in self.tracked:
            return VcsStatus(VcsState.CLEAN)
        return None


def annotate(
    path: pathlib.Path, context: GitContext | None, is_directory: bool = False
) -> VcsStatus | None:
    """Look up the VCS status of one entry.

    Args:
        path: Absolute path of the entry
        context: Snapshot from GitContext.load, or None when git is unavailable
        is_directory: Whether to aggregate line counts of descendants

    Returns:
        VcsStatus, or None when the path has no status to show
    """
    if context is None:
        return None
    return context.status_for(path, is_directory)
