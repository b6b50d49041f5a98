"""Table output generation utilities."""

import sys
from typing import TextIO

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from rls.constants import (
    HEADER_STYLE,
    SIZE_COLOR,
    VCS_ADDED_COLOR,
    VCS_CLEAN_COLOR,
    VCS_DELETED_COLOR,
    VCS_UNTRACKED_COLOR,
)
from rls.models import ColorMode, DisplayRow, VcsState, VcsStatus


def colors_enabled(color_mode: ColorMode, stream: TextIO | None = None) -> bool:
    """Resolve --color into a yes/no answer for the given output stream.

    Args:
        color_mode: Mode requested on the command line
        stream: Output stream checked in auto mode (defaults to stdout)

    Returns:
        True if ANSI colors should be emitted
    """
    if color_mode is ColorMode.ALWAYS:
        return True
    if color_mode is ColorMode.NEVER:
        return False
    stream = stream if stream is not None else sys.stdout
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def make_console(use_color: bool, stream: TextIO | None = None) -> Console:
    """Create a rich Console that honours the resolved color choice."""
    if use_color:
        # Palette colors all fall in the 256-color range.
        return Console(file=stream, force_terminal=True, color_system="256", highlight=False)
    return Console(file=stream, color_system=None, highlight=False)


def format_vcs_status(status: VcsStatus | None) -> Text:
    """Colorized VCS suffix; empty when there is no status."""
    if status is None:
        return Text("")
    if status.state is VcsState.MODIFIED:
        return Text.assemble(
            "(",
            (f"+{status.added}", VCS_ADDED_COLOR),
            " ",
            (f"-{status.deleted}", VCS_DELETED_COLOR),
            ")",
        )
    if status.state is VcsState.CLEAN:
        return Text(status.suffix, style=VCS_CLEAN_COLOR)
    return Text(status.suffix, style=VCS_UNTRACKED_COLOR)


def generate_table(rows: list[DisplayRow], show_vcs: bool = False) -> Table:
    """Build a box-drawn table from display rows.

    Args:
        rows: Rows in display order
        show_vcs: Whether to add the Git column

    Returns:
        rich Table ready to print
    """
    table = Table(box=box.ROUNDED, show_header=True, header_style=HEADER_STYLE)
    # Only Name may shrink; long names fold onto extra lines.
    table.add_column("Name", overflow="fold")
    table.add_column("Size", justify="right", style=SIZE_COLOR, no_wrap=True, min_width=9)
    table.add_column("Modified", no_wrap=True, min_width=14)
    if show_vcs:
        table.add_column("Git", no_wrap=True, min_width=11)

    for row in rows:
        name = f"{row.name}/" if row.is_directory else row.name
        cells = [
            Text(name, style=row.name_color),
            row.size_text,
            Text(row.age_text, style=row.age_color),
        ]
        if show_vcs:
            cells.append(format_vcs_status(row.vcs_status))
        table.add_row(*cells)

    return table


def render_listing(rows: list[DisplayRow], console: Console, show_vcs: bool = False) -> None:
    """Print the listing, or a short notice for an empty directory."""
    if not rows:
        console.print("(empty)", style="dim")
        return
    console.print(generate_table(rows, show_vcs))
