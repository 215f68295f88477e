"""CLI entry point for lrg — I/O boundary only."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from lrg import LrgError, __version__
from lrg.core import Lrg
from lrg.diagnostics import Diagnostic, Reporter, Stage
from lrg.filter import CombinedFilter, EntryFilter, PatternFilter
from lrg.formatter.listing import ListingOptions, format_listing
from lrg.walker import WalkOptions

DEFAULT_NUMBER = 5

_LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``lrg`` command.
    """
    parser = argparse.ArgumentParser(
        prog="lrg",
        description="A utility to help find the largest file(s) in a directory",
    )
    parser.add_argument(
        "filepath",
        nargs="?",
        default=None,
        help="The path to search in (default: current directory)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-n",
        "--number",
        type=int,
        default=DEFAULT_NUMBER,
        metavar="NUM_ENTRIES",
        help=f"Number of files to list (default: {DEFAULT_NUMBER})",
    )
    parser.add_argument(
        "-r",
        "--no-recursion",
        action="store_true",
        dest="no_recursion",
        help="Only visit files in the given directory; takes precedence over --max-depth",
    )
    parser.add_argument(
        "-d",
        "--max-depth",
        type=int,
        default=None,
        dest="max_depth",
        help="Maximum depth of folders to search (default: unlimited)",
    )
    parser.add_argument(
        "-m",
        "--min-depth",
        type=int,
        default=0,
        dest="min_depth",
        help="Minimum depth at which entries are reported (default: 0)",
    )
    parser.add_argument(
        "-l",
        "--follow-links",
        action="store_true",
        dest="follow_links",
        help="Follow symbolic links",
    )
    parser.add_argument(
        "-i",
        "--directories",
        action="store_true",
        dest="include_dirs",
        help="Include directories in the search",
    )
    parser.add_argument(
        "-s",
        "--smallest",
        action="store_true",
        help="List the smallest entries first",
    )
    parser.add_argument(
        "-a",
        "--absolute",
        action="store_true",
        help="Print absolute paths instead of paths relative to the search root",
    )
    parser.add_argument(
        "-I",
        "--exclude",
        action="append",
        default=[],
        dest="patterns",
        help="Exclude entries matching pattern (can be specified multiple times)",
    )
    parser.add_argument(
        "--gitignore",
        action="store_true",
        help="Exclude entries matched by the search root's .gitignore",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    return parser


def print_diagnostic(diagnostic: Diagnostic) -> None:
    """Write a diagnostic to stderr in lrg's message format."""
    if diagnostic.stage is Stage.METADATA:
        action = "cannot get metadata of"
    else:
        action = "error opening"
    sys.stderr.write(f"lrg: {action} '{diagnostic.path}': {diagnostic.label}\n")


def run_lrg(argv: list[str] | None = None, reporter: Reporter | None = None) -> str:
    """Run lrg with provided CLI args and return formatted output.

    Diagnostics go to ``reporter`` (stderr by default); everything else is
    returned.

    Args:
        argv: Command-line argument list without program name. If ``None``,
            uses process arguments via ``argparse`` defaults.
        reporter: Diagnostic sink. Defaults to :func:`print_diagnostic`.

    Returns:
        str: Final rendered output.

    Raises:
        LrgError: On any user-facing validation or I/O error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args, reporter or print_diagnostic)


def _resolve_root(filepath: str | None) -> Path:
    """Return the search root, defaulting to the working directory.

    Raises:
        LrgError: If the working directory cannot be determined.
    """
    if filepath is not None:
        return Path(filepath)
    try:
        return Path(os.getcwd())
    except OSError as exc:
        raise LrgError("couldn't get current directory") from exc


def _build_walk_options(args: argparse.Namespace) -> WalkOptions:
    """Translate CLI depth and link flags into walker options.

    Raises:
        LrgError: If a depth or count is negative or the depths conflict.
    """
    if args.number < 0:
        raise LrgError("number of files to list must be non-negative")
    if args.max_depth is not None and args.max_depth < 0:
        raise LrgError("--max-depth must be non-negative")
    if args.min_depth < 0:
        raise LrgError("--min-depth must be non-negative")

    max_depth = 1 if args.no_recursion else args.max_depth
    try:
        return WalkOptions(
            min_depth=args.min_depth,
            max_depth=max_depth,
            follow_links=args.follow_links,
            include_dirs=args.include_dirs,
        )
    except ValueError as exc:
        raise LrgError(str(exc)) from exc


def _build_entry_filter(args: argparse.Namespace, root: Path) -> EntryFilter | None:
    """Build the exclusion filter from ``-I`` patterns and ``--gitignore``."""
    filters: list[EntryFilter] = []
    if args.patterns:
        filters.append(PatternFilter(args.patterns))
    if args.gitignore:
        from lrg.gitignore import GitignoreFilter

        filters.append(GitignoreFilter(root))
    if not filters:
        return None
    if len(filters) == 1:
        return filters[0]
    return CombinedFilter(filters)


def _run_with_args(args: argparse.Namespace, reporter: Reporter) -> str:
    """Run the walk/rank/format pipeline for parsed arguments.

    Raises:
        LrgError: On any user-facing validation or I/O error.
    """
    root = _resolve_root(args.filepath)
    walk_options = _build_walk_options(args)
    entry_filter = _build_entry_filter(args, root)

    lrg = Lrg(root, walk_options, entry_filter=entry_filter, reporter=reporter)
    if not len(lrg):
        raise LrgError("no files found")

    # Sizes are resolved once so a failing entry is reported only once.
    sizes = {entry: lrg.size_of(entry) for entry in lrg}
    sign = 1 if args.smallest else -1
    entries = lrg.rank_custom(lambda a, b: sign * (sizes[a] - sizes[b])).get_entries()

    listing_opts = ListingOptions(
        root_path=root,
        number=args.number,
        absolute=args.absolute,
    )
    return format_listing(entries, listing_opts, reporter, sizes=sizes)


def _configure_logging(verbosity: int) -> None:
    level = _LOG_LEVELS[min(verbosity, len(_LOG_LEVELS) - 1)]
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """Run the CLI entry point with process arguments.

    Parses args exactly once and writes output to stdout.
    Exits with code 1 on user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()  # single parse
    _configure_logging(args.verbose)

    try:
        output = _run_with_args(args, print_diagnostic)
    except LrgError as exc:
        sys.stderr.write(f"lrg: {exc}\n")
        sys.exit(1)

    if output:
        sys.stdout.write(output + "\n")
