"""Plain ``<size>: <path>`` listing of ranked entries."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from itertools import islice
from pathlib import Path

from lrg.diagnostics import Reporter
from lrg.entry import Entry, size_of
from lrg.formatter.size import format_size


@dataclass(frozen=True, slots=True)
class ListingOptions:
    """Options for the listing formatter.

    Attributes:
        root_path: Walk root, used to relativize displayed paths.
        number: Maximum number of lines. ``None`` lists every entry.
        absolute: Whether to print absolute paths instead of
            root-relative ones.
    """

    root_path: Path | None = None
    number: int | None = None
    absolute: bool = False


def display_path(entry: Entry, options: ListingOptions) -> str:
    """Return the path shown for ``entry``.

    Relative display falls back to the entry path as walked when it does
    not sit under ``root_path``. A directory root is shown as ``.`` and a
    file root by its name.
    """
    if options.absolute:
        return str(entry.path.absolute())
    if options.root_path is None:
        return str(entry.path)
    try:
        relative = entry.path.relative_to(options.root_path)
    except ValueError:
        return str(entry.path)
    if relative == Path("."):
        # A file root is displayed by name
        return "." if entry.is_dir else entry.name
    return str(relative)


def format_listing(
    entries: Iterable[Entry],
    options: ListingOptions | None = None,
    reporter: Reporter | None = None,
    sizes: Mapping[Entry, int] | None = None,
) -> str:
    """Render entries one per line in their given order.

    Sizes come from ``sizes`` when given. Otherwise they are resolved while
    rendering, so an entry that disappeared after the ranking pass is
    listed with size ``0`` and a metadata diagnostic.

    Args:
        entries: Entries, already ranked.
        options: Rendering options. Defaults to ``ListingOptions()``.
        reporter: Diagnostic sink for size resolution.
        sizes: Sizes already resolved by the caller, keyed by entry.

    Returns:
        str: Listing text with LF line endings (no trailing newline).
    """
    opts = options or ListingOptions()
    selected = entries if opts.number is None else islice(entries, opts.number)
    lines = [
        f"{format_size(_size(entry, sizes, reporter))}: {display_path(entry, opts)}"
        for entry in selected
    ]
    return "\n".join(lines)


def _size(entry: Entry, sizes: Mapping[Entry, int] | None, reporter: Reporter | None) -> int:
    if sizes is not None and entry in sizes:
        return sizes[entry]
    return size_of(entry, reporter)
