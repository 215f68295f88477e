"""The traversal-and-rank engine: collect entries once, then order them."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import Enum
from functools import cmp_to_key
from pathlib import Path
from typing import Callable

from lrg.diagnostics import Reporter, log_diagnostic
from lrg.entry import Entry, size_of
from lrg.filter import EntryFilter
from lrg.walker import WalkOptions, walk

logger = logging.getLogger(__name__)

Comparator = Callable[[Entry, Entry], int]


class SortBy(Enum):
    """Size ordering used by :meth:`Lrg.rank_by`."""

    ASCENDING = "asc"
    DESCENDING = "desc"


class Lrg:
    """Entries found under a root, ranked in place.

    The walk happens once, in the constructor. Afterwards the collection is
    only ever reordered: ranking methods sort in place and return ``self``
    so calls can be chained::

        entries = Lrg(path).rank_descending().get_entries()

    Sorting is stable. Entries that compare equal keep the order they had
    before the sort (walk order for a freshly built collection).
    """

    def __init__(
        self,
        root: Path | str,
        options: WalkOptions | None = None,
        *,
        entry_filter: EntryFilter | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        """Walk ``root`` and collect the retained entries.

        Args:
            root: Path to walk. Need not exist; a missing root is reported
                as a diagnostic and yields an empty collection.
            options: Walker options. Defaults to ``WalkOptions.defaults()``.
            entry_filter: Optional exclusion filter passed to the walker.
            reporter: Sink for walk and metadata diagnostics. Defaults to
                logging.
        """
        self.root = Path(root)
        self.options = options or WalkOptions.defaults()
        self._reporter: Reporter = reporter or log_diagnostic
        self._entries: list[Entry] = list(
            walk(self.root, self.options, entry_filter, self._reporter)
        )
        logger.debug("Collected %d entries under %s", len(self._entries), self.root)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def size_of(self, entry: Entry) -> int:
        """Resolve ``entry``'s size, reporting failures to this engine's reporter."""
        return size_of(entry, self._reporter)

    def rank_ascending(self) -> Lrg:
        """Sort entries by size, smallest first."""
        self._entries.sort(key=self.size_of)
        return self

    def rank_descending(self) -> Lrg:
        """Sort entries by size, largest first."""
        self._entries.sort(key=self.size_of, reverse=True)
        return self

    def rank_by(self, mode: SortBy) -> Lrg:
        """Sort entries by size in the direction given by ``mode``."""
        if mode is SortBy.ASCENDING:
            return self.rank_ascending()
        if mode is SortBy.DESCENDING:
            return self.rank_descending()
        raise ValueError(f"Unknown sort mode: {mode!r}")

    def rank_custom(self, comparator: Comparator) -> Lrg:
        """Sort entries with a caller-supplied comparison.

        Args:
            comparator: ``comparator(a, b)`` returns a negative number when
                ``a`` sorts first, zero when they are equal and a positive
                number otherwise. It must define a total order.
        """
        self._entries.sort(key=cmp_to_key(comparator))
        return self

    def get_entries(self) -> list[Entry]:
        """Return the entries in their current order."""
        return list(self._entries)
