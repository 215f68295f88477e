"""Entry retention and exclusion.

Retention (:func:`should_retain`) decides whether a discovered node becomes
an :class:`~lrg.entry.Entry`; a directory that is not retained is still
descended into. Exclusion (:class:`EntryFilter`) prunes a node and
everything beneath it.
"""

from __future__ import annotations

from collections.abc import Iterable
from fnmatch import fnmatch
from pathlib import Path
from typing import Protocol

from lrg.entry import EntryKind


def should_retain(kind: EntryKind, include_dirs: bool) -> bool:
    """Return whether a node of ``kind`` is kept as an entry.

    Files and symlinks are always kept. Directories are kept only when
    ``include_dirs`` is set.
    """
    if kind is EntryKind.DIRECTORY:
        return include_dirs
    return True


class EntryFilter(Protocol):
    """Protocol for entry exclusion.

    Keeps walker logic decoupled from matching strategy.
    """

    def should_exclude(self, path: Path, is_dir: bool) -> bool: ...


class PatternFilter:
    """Exclude entries whose basename matches an fnmatch pattern.

    Implements ``-I PATTERN`` exclusion behavior.
    """

    def __init__(self, patterns: Iterable[str] | None = None) -> None:
        self._patterns: list[str] = list(patterns) if patterns else []

    def should_exclude(self, path: Path, is_dir: bool) -> bool:
        """Return whether an entry should be excluded.

        Args:
            path: Entry path.
            is_dir: Whether the entry is a directory.

        Returns:
            bool: ``True`` when any configured pattern matches the basename.
        """
        return any(fnmatch(path.name, pat) for pat in self._patterns)


class CombinedFilter:
    """Exclude an entry when any member filter excludes it."""

    def __init__(self, filters: Iterable[EntryFilter]) -> None:
        self._filters: list[EntryFilter] = list(filters)

    def should_exclude(self, path: Path, is_dir: bool) -> bool:
        return any(f.should_exclude(path, is_dir) for f in self._filters)
