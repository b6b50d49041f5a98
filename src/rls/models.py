"""Data models for rls."""

import pathlib
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Category(Enum):
    """Semantic class of an entry, listed in precedence order."""

    DIRECTORY = "directory"
    HIDDEN = "hidden"
    EXECUTABLE = "executable"
    CONFIG_OR_DOC = "config_or_doc"
    REGULAR_FILE = "regular_file"


class AgeBucket(Enum):
    """Coarse age of an entry, ordered from most to least recent."""

    FUTURE = 0
    SECONDS = 1
    MINUTES = 2
    HOURS = 3
    DAYS = 4
    WEEKS = 5
    MONTHS = 6
    YEARS = 7


class ColorMode(Enum):
    ALWAYS = "always"
    AUTO = "auto"
    NEVER = "never"


class VcsState(Enum):
    CLEAN = "clean"
    MODIFIED = "modified"
    UNTRACKED = "untracked"


@dataclass(frozen=True)
class RawEntry:
    """One directory entry as read from the filesystem.

    Attributes:
        name: Entry name (no directory component)
        path: Absolute path to the entry
        is_directory: Whether the entry is a directory (symlinks followed)
        size_bytes: Size in bytes
        modified_at: Last modification timestamp (timezone-aware, UTC)
        is_executable: Whether any execute bit is set on a non-directory
    """

    name: str
    path: pathlib.Path
    is_directory: bool
    size_bytes: int
    modified_at: datetime
    is_executable: bool = False

    @property
    def is_hidden(self) -> bool:
        return self.name.startswith(".")


@dataclass(frozen=True)
class AgeInfo:
    bucket: AgeBucket
    color: str
    text: str


@dataclass(frozen=True)
class VcsStatus:
    """Version-control state of a single path.

    Attributes:
        state: Clean, modified or untracked
        added: Lines added (modified only)
        deleted: Lines deleted (modified only)
    """

    state: VcsState
    added: int = 0
    deleted: int = 0

    @property
    def suffix(self) -> str:
        if self.state is VcsState.MODIFIED:
            return f"(+{self.added} -{self.deleted})"
        if self.state is VcsState.CLEAN:
            return "(clean)"
        return "(untracked)"


@dataclass(frozen=True)
class DisplayRow:
    """Render-ready row handed to the table renderer.

    ``is_directory`` and ``modified_at`` are kept so the sort policy can
    order rows without going back to the filesystem.
    """

    name: str
    category: Category
    name_color: str
    size_text: str
    age_text: str
    age_color: str
    is_directory: bool
    modified_at: datetime
    vcs_status: VcsStatus | None = None

    @property
    def vcs_suffix(self) -> str | None:
        if self.vcs_status is None:
            return None
        return self.vcs_status.suffix


@dataclass(frozen=True)
class ListingConfig:
    """Options for one listing, built by the CLI."""

    show_hidden: bool = False
    sort_by_modified: bool = False
    reverse: bool = False
    git_enabled: bool = False
    color_mode: ColorMode = ColorMode.AUTO
    ignore_globs: tuple[str, ...] = ()
    respect_gitignore: bool = False
