"""The listing pipeline: enumerate, filter, describe, annotate and sort."""

import pathlib
from datetime import datetime, timezone

from rls.classification import category_color, classify
from rls.constants import DIRECTORY_SIZE_PLACEHOLDER
from rls.file_operations import get_ignore_rules, is_ignored, read_directory
from rls.formatting import bucket_age, format_size
from rls.git_status import GitContext, annotate
from rls.models import DisplayRow, ListingConfig, RawEntry
from rls.sorting import sort_rows


def build_row(entry: RawEntry, now: datetime, git_context: GitContext | None = None) -> DisplayRow:
    """Turn one raw entry into a render-ready row.

    Args:
        entry: Entry read from the filesystem
        now: Reference time shared by the whole listing
        git_context: Git snapshot, or None when annotation is disabled or unavailable

    Returns:
        DisplayRow for the entry
    """
    category = classify(entry)
    age = bucket_age(entry.modified_at, now)
    size_text = DIRECTORY_SIZE_PLACEHOLDER if entry.is_directory else format_size(entry.size_bytes)

    return DisplayRow(
        name=entry.name,
        category=category,
        name_color=category_color(category),
        size_text=size_text,
        age_text=age.text,
        age_color=age.color,
        is_directory=entry.is_directory,
        modified_at=entry.modified_at,
        vcs_status=annotate(entry.path, git_context, entry.is_directory),
    )


def list_directory(
    directory: str | pathlib.Path,
    config: ListingConfig,
    now: datetime | None = None,
) -> list[DisplayRow]:
    """List one directory as ordered, render-ready rows.

    Args:
        directory: Directory to list
        config: Listing options
        now: Timezone-aware reference time for relative ages; captured once here if omitted

    Returns:
        Rows in display order

    Raises:
        ReadFailedError: If the directory cannot be enumerated
    """
    directory = pathlib.Path(directory)
    entries = read_directory(directory)
    if now is None:
        now = datetime.now(timezone.utc)

    if not config.show_hidden:
        entries = [e for e in entries if not e.is_hidden]

    ignore_rules = get_ignore_rules(directory, config.ignore_globs, config.respect_gitignore)
    if ignore_rules:
        entries = [e for e in entries if not is_ignored(e, ignore_rules)]

    git_context = GitContext.load(directory) if config.git_enabled and entries else None

    rows = [build_row(entry, now, git_context) for entry in entries]
    return sort_rows(rows, config)
