"""Entry classification utilities."""

from rls.constants import CATEGORY_COLORS, CONFIG_DOC_NAMES, CONFIG_DOC_SUFFIXES
from rls.models import Category, RawEntry


def is_config_or_doc(name: str) -> bool:
    """Check a file name against the documentation/config allowlist.

    Args:
        name: File name without directory component

    Returns:
        True if the name or its extension is in the allowlist

    Examples:
        >>> is_config_or_doc("README")
        True
        >>> is_config_or_doc("pyproject.toml")
        True
        >>> is_config_or_doc("main.py")
        False
    """
    name_lower = name.lower()
    if name_lower in CONFIG_DOC_NAMES:
        return True

    _, dot, extension = name_lower.rpartition(".")
    if not dot:
        return False
    return f".{extension}" in CONFIG_DOC_SUFFIXES


def classify(entry: RawEntry) -> Category:
    """Assign exactly one category to an entry.

    Precedence is Directory > Hidden > Executable > ConfigOrDoc > RegularFile,
    so a hidden directory such as ``.git`` is a Directory.

    Args:
        entry: The raw entry to classify

    Returns:
        The entry's category
    """
    if entry.is_directory:
        return Category.DIRECTORY
    if entry.is_hidden:
        return Category.HIDDEN
    if entry.is_executable:
        return Category.EXECUTABLE
    if is_config_or_doc(entry.name):
        return Category.CONFIG_OR_DOC
    return Category.REGULAR_FILE


def category_color(category: Category) -> str:
    """Rich style used for the name column of a category."""
    return CATEGORY_COLORS[category.value]
