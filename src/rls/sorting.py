"""Ordering of display rows."""

from collections.abc import Iterable

from rls.models import DisplayRow, ListingConfig


def name_key(row: DisplayRow) -> tuple[str, str]:
    """Case-insensitive name, with the exact name as final tiebreak."""
    return (row.name.casefold(), row.name)


def sort_rows(rows: Iterable[DisplayRow], config: ListingConfig) -> list[DisplayRow]:
    """Order rows for display.

    Name mode puts directories first, then sorts by name. Modified mode sorts
    newest first with no directory priority; rows with the same timestamp
    fall back to name order. ``reverse`` flips the finished list.

    Args:
        rows: Rows to order
        config: Listing options (sort_by_modified, reverse)

    Returns:
        New list in display order
    """
    ordered = sorted(rows, key=name_key)

    if config.sort_by_modified:
        # sorted() is stable, so equal timestamps keep name order.
        ordered = sorted(ordered, key=lambda row: row.modified_at, reverse=True)
    else:
        ordered = sorted(ordered, key=lambda row: not row.is_directory)

    if config.reverse:
        ordered.reverse()
    return ordered
