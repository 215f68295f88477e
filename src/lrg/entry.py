"""Discovered filesystem entries and fail-soft size resolution."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from lrg.diagnostics import Diagnostic, Reporter, Stage, log_diagnostic


class EntryKind(Enum):
    """What a discovered node is, fixed at discovery time."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


@dataclass(frozen=True, slots=True)
class Entry:
    """A single filesystem node retained by a walk.

    Attributes:
        path: Path of the node, joined onto the walk root.
        kind: Node kind as reported by the walker.
        depth: Distance from the walk root; the root itself is ``0``.
        follow_links: Whether the node was discovered with links followed.
            Size queries follow links under the same policy.
    """

    path: Path
    kind: EntryKind
    depth: int
    follow_links: bool = False

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


def size_of(entry: Entry, reporter: Reporter | None = None) -> int:
    """Return the current size of ``entry`` in bytes.

    The filesystem is queried on every call; nothing is cached, so the
    value may differ between calls. A symlink that is not followed reports
    the size of the link itself.

    Failures (node removed since discovery, permission revoked, ...) never
    propagate: the size degrades to ``0`` and one ``METADATA`` diagnostic is
    sent to ``reporter``.

    Args:
        entry: Entry to size.
        reporter: Diagnostic sink. Defaults to logging.

    Returns:
        int: Size in bytes, or ``0`` when it cannot be read.
    """
    try:
        return os.stat(entry.path, follow_symlinks=entry.follow_links).st_size
    except (OSError, ValueError) as exc:
        (reporter or log_diagnostic)(
            Diagnostic.from_exception(entry.path, exc, Stage.METADATA)
        )
        return 0
