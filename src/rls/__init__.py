"""rls: a directory listing rendered as a colorized, box-drawn table.

This package classifies directory entries, formats their size and age,
optionally annotates them with git status, and prints them as a table.
"""

from rls.listing import list_directory
from rls.models import DisplayRow, ListingConfig

__version__ = "0.1.0"
__all__ = ["list_directory", "DisplayRow", "ListingConfig"]
