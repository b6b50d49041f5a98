"""File system operations: directory enumeration and ignore patterns."""

import os
import pathlib
import stat
import sys
from datetime import datetime, timezone

import pathspec

from rls.constants import ALWAYS_IGNORE_PATTERNS
from rls.models import RawEntry

EXECUTABLE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class ListingError(Exception):
    """Base class for errors that abort a listing."""


class ReadFailedError(ListingError):
    """The target directory could not be enumerated."""

    def __init__(self, path: pathlib.Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read directory {path}: {reason}")


def _describe_os_error(error: OSError) -> str:
    if isinstance(error, FileNotFoundError):
        return "no such file or directory"
    if isinstance(error, NotADirectoryError):
        return "not a directory"
    if isinstance(error, PermissionError):
        return "permission denied"
    return error.strerror or str(error)


def _stat_entry(dir_entry: os.DirEntry) -> os.stat_result | None:
    """Stat an entry, falling back to the link itself for dangling symlinks.

    Args:
        dir_entry: Entry yielded by os.scandir

    Returns:
        stat result, or None if the entry vanished or cannot be read
    """
    try:
        return dir_entry.stat()
    except FileNotFoundError:
        if not dir_entry.is_symlink():
            return None
    except OSError as e:
        print(f"Warning: Could not read metadata for {dir_entry.path}: {e}", file=sys.stderr)
        return None

    try:
        return dir_entry.stat(follow_symlinks=False)
    except OSError as e:
        print(f"Warning: Could not read metadata for {dir_entry.path}: {e}", file=sys.stderr)
        return None


def read_directory(directory: pathlib.Path) -> list[RawEntry]:
    """Enumerate the direct children of a directory.

    Entries that disappear or cannot be stat'ed between enumeration and stat
    are skipped; the rest of the listing is unaffected.

    Args:
        directory: Directory to list

    Returns:
        Unordered list of RawEntry objects

    Raises:
        ReadFailedError: If the directory itself cannot be enumerated
    """
    directory = directory.resolve()
    entries: list[RawEntry] = []

    try:
        with os.scandir(directory) as it:
            for dir_entry in it:
                st = _stat_entry(dir_entry)
                if st is None:
                    continue

                is_directory = stat.S_ISDIR(st.st_mode)
                entries.append(
                    RawEntry(
                        name=dir_entry.name,
                        path=directory / dir_entry.name,
                        is_directory=is_directory,
                        size_bytes=st.st_size,
                        modified_at=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
                        is_executable=not is_directory and bool(st.st_mode & EXECUTABLE_BITS),
                    )
                )
    except OSError as e:
        raise ReadFailedError(directory, _describe_os_error(e)) from e

    return entries


def find_project_root(start_dir: pathlib.Path) -> pathlib.Path | None:
    """Find the nearest parent directory containing .git.

    Args:
        start_dir: Starting directory for search

    Returns:
        Path to project root (directory containing .git) or None if not found
    """
    current = start_dir.resolve()
    while True:
        if (current / ".git").exists():
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _read_pattern_file(pattern_file: pathlib.Path) -> list[str]:
    if not pattern_file.is_file():
        return []
    try:
        with open(pattern_file, encoding="utf-8", errors="ignore") as f:
            return f.readlines()
    except OSError as e:
        print(f"Warning: Could not read {pattern_file}: {e}", file=sys.stderr)
        return []


IgnoreRules = list[tuple[pathlib.Path, pathspec.PathSpec]]


def _gitignore_bases(directory: pathlib.Path, project_root: pathlib.Path | None) -> list[pathlib.Path]:
    """Directories whose .gitignore applies to ``directory``, root first."""
    if project_root is None:
        return [directory]
    chain = [directory, *directory.parents]
    return [p for p in reversed(chain) if p == project_root or project_root in p.parents]


def get_ignore_rules(
    directory: pathlib.Path, ignore_globs: tuple[str, ...], respect_gitignore: bool
) -> IgnoreRules:
    """Collect ignore patterns, each paired with the directory it is relative to.

    Command-line globs and ALWAYS_IGNORE_PATTERNS are matched against entry
    names. With ``respect_gitignore`` every .gitignore from the repository
    root down to ``directory`` is loaded and matched against paths relative
    to its own directory, and .git/info/exclude against repo-relative paths,
    so anchored patterns like ``/dist`` only apply where git applies them.

    Args:
        directory: Directory being listed
        ignore_globs: Gitignore-style patterns given on the command line
        respect_gitignore: Whether to load .gitignore files

    Returns:
        List of (base directory, PathSpec) pairs; empty when there is nothing to match
    """
    directory = directory.resolve()
    rules: IgnoreRules = []

    if ignore_globs:
        rules.append((directory, pathspec.GitIgnoreSpec.from_lines(ignore_globs)))

    if respect_gitignore:
        rules.append((directory, pathspec.GitIgnoreSpec.from_lines(ALWAYS_IGNORE_PATTERNS)))
        project_root = find_project_root(directory)
        if project_root is not None:
            exclude = _read_pattern_file(project_root / ".git" / "info" / "exclude")
            if exclude:
                rules.append((project_root, pathspec.GitIgnoreSpec.from_lines(exclude)))
        for base in _gitignore_bases(directory, project_root):
            patterns = _read_pattern_file(base / ".gitignore")
            if patterns:
                rules.append((base, pathspec.GitIgnoreSpec.from_lines(patterns)))

    return rules


def is_ignored(entry: RawEntry, rules: IgnoreRules) -> bool:
    """Check an entry against every ignore rule.

    Directories are matched with a trailing slash so patterns like
    ``build/`` apply to them.
    """
    for base, spec in rules:
        try:
            rel_path = entry.path.relative_to(base).as_posix()
        except ValueError:
            continue
        if entry.is_directory:
            rel_path += "/"
        if spec.match_file(rel_path):
            return True
    return False
