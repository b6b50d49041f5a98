"""Command-line interface for rls."""

import argparse
import sys

from rls import __version__
from rls.file_operations import ListingError
from rls.listing import list_directory
from rls.models import ColorMode, ListingConfig
from rls.output_generators import colors_enabled, make_console, render_listing


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rls",
        description="List directory contents as a colorized table.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("directory", nargs="?", default=".", help="The directory to list.")
    parser.add_argument(
        "-a",
        "--all",
        action="store_true",
        help="Include entries whose names begin with a dot.",
    )
    parser.add_argument(
        "-l",
        "--long",
        action="store_true",
        help="Long listing (accepted for compatibility, output is always long).",
    )
    parser.add_argument(
        "-t",
        "--sort-modified",
        action="store_true",
        help="Sort by modification time, newest first.",
    )
    parser.add_argument(
        "-r",
        "--reverse",
        action="store_true",
        help="Reverse the sort order.",
    )
    parser.add_argument(
        "-g",
        "--git",
        action="store_true",
        help="Show git status for each entry.",
    )
    parser.add_argument(
        "--color",
        choices=[mode.value for mode in ColorMode],
        default=ColorMode.AUTO.value,
        help="When to use colors.",
    )
    parser.add_argument(
        "-I",
        "--ignore-glob",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Hide entries matching a gitignore-style pattern (repeatable).",
    )
    parser.add_argument(
        "--git-ignore",
        action="store_true",
        help="Hide entries ignored by .gitignore.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> ListingConfig:
    return ListingConfig(
        show_hidden=args.all,
        sort_by_modified=args.sort_modified,
        reverse=args.reverse,
        git_enabled=args.git,
        color_mode=ColorMode(args.color),
        ignore_globs=tuple(args.ignore_glob),
        respect_gitignore=args.git_ignore,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the rls CLI."""
    args = build_parser().parse_args(argv)
    config = config_from_args(args)

    try:
        rows = list_directory(args.directory, config)
    except ListingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    console = make_console(colors_enabled(config.color_mode))
    render_listing(rows, console, show_vcs=config.git_enabled)
    return 0


if __name__ == "__main__":
    sys.exit(main())
