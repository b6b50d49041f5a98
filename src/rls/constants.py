"""Static lookup tables and palette used by the listing pipeline."""

# --- Classification ---

CONFIG_DOC_SUFFIXES: set[str] = {
    # Documentation
    ".md", ".markdown", ".rst", ".txt", ".adoc", ".org", ".tex",
    # Config / data
    ".json", ".jsonc", ".toml", ".yaml", ".yml", ".ini", ".cfg", ".conf",
    ".config", ".properties", ".xml", ".lock", ".env", ".editorconfig",
}

CONFIG_DOC_NAMES: set[str] = {
    "readme", "license", "licence", "copying", "changelog", "changes",
    "authors", "contributors", "notice", "todo", "install",
    "makefile", "dockerfile", "containerfile", "justfile", "procfile",
    "gemfile", "pipfile", "vagrantfile",
}

# --- Palette (rich style strings) ---

CATEGORY_COLORS: dict[str, str] = {
    "directory": "bold blue",
    "executable": "bold green",
    "hidden": "grey50",
    "config_or_doc": "yellow",
    "regular_file": "default",
}

AGE_COLORS: dict[str, str] = {
    "future": "blue",
    "fresh": "green",
    "recent": "yellow",
    "today": "orange1",
    "days": "orange1",
    "weeks": "red",
    "old": "grey50",
}

SIZE_COLOR = "cyan"
VCS_ADDED_COLOR = "green"
VCS_DELETED_COLOR = "red"
VCS_CLEAN_COLOR = "grey50"
VCS_UNTRACKED_COLOR = "magenta"
HEADER_STYLE = "bold cyan"

# --- Recency thresholds (seconds) ---

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY
MONTH = 30 * DAY
YEAR = 365 * DAY

JUST_NOW_SECONDS = 5
MINUTES_YELLOW_AFTER = 30 * MINUTE
HOURS_ORANGE_AFTER = 12 * HOUR

# --- Size formatting ---

SIZE_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB", "TB")
DIRECTORY_SIZE_PLACEHOLDER = "-"

# --- Git ---

GIT_TIMEOUT_SECONDS = 2.0
# Hash of the empty tree, used as the diff base in repositories without commits.
GIT_EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

# Patterns always hidden when --git-ignore is active.
ALWAYS_IGNORE_PATTERNS: set[str] = {
    ".git/",
}
