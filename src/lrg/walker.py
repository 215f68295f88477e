"""Depth-bounded, link-aware directory walker using os.scandir with an explicit stack."""

from __future__ import annotations

import errno
import logging
import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from lrg.diagnostics import Diagnostic, Reporter, Stage, log_diagnostic
from lrg.entry import Entry, EntryKind
from lrg.filter import EntryFilter, should_retain

logger = logging.getLogger(__name__)

# (st_dev, st_ino) of a directory
_DirId = tuple[int, int]


@dataclass(frozen=True, slots=True)
class WalkOptions:
    """Options controlling walker behavior.

    Attributes:
        min_depth: Nodes shallower than this are not yielded, though they
            are still descended into. ``0`` includes the root itself.
        max_depth: Deepest level that is listed. ``None`` means unlimited.
        follow_links: Whether symlinks are resolved and treated as their
            targets. When ``False`` a symlink is reported as a
            ``SYMLINK`` entry and never descended into.
        include_dirs: Whether directories are retained as entries.
    """

    min_depth: int = 0
    max_depth: int | None = None
    follow_links: bool = False
    include_dirs: bool = False

    def __post_init__(self) -> None:
        if self.min_depth < 0:
            raise ValueError("min_depth must be non-negative")
        if self.max_depth is not None:
            if self.max_depth < 0:
                raise ValueError("max_depth must be non-negative")
            if self.min_depth > self.max_depth:
                raise ValueError("min_depth must not exceed max_depth")

    @classmethod
    def defaults(cls) -> WalkOptions:
        """Return options with every field at its default."""
        return cls()


@dataclass(frozen=True, slots=True)
class _Node:
    path: Path
    kind: EntryKind
    depth: int
    # Directories between the root and this node, used for loop detection
    # when links are followed.
    ancestry: tuple[_DirId, ...] = ()


def _kind_from_mode(mode: int) -> EntryKind:
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    return EntryKind.FILE


def _dir_id(st: os.stat_result) -> _DirId:
    return (st.st_dev, st.st_ino)


def _loop_error(path: Path) -> OSError:
    return OSError(errno.ELOOP, "File system loop found", str(path))


def walk(
    root: Path | str,
    options: WalkOptions | None = None,
    entry_filter: EntryFilter | None = None,
    reporter: Reporter | None = None,
) -> Iterator[Entry]:
    """Walk ``root`` and yield retained entries in pre-order.

    Parents are yielded before their children. Sibling order is whatever
    ``os.scandir`` returns, which is not guaranteed to be stable across
    platforms or filesystems.

    A node that cannot be read (permission denied, dangling link, vanished
    mid-walk, missing root) is skipped and reported once to ``reporter`` as
    a ``WALK`` diagnostic; the walk always continues.

    Args:
        root: Path to walk. A file root yields just that file. A root
            symlink to a directory is always walked into.
        options: Walker options. Defaults to ``WalkOptions()``.
        entry_filter: Optional exclusion filter. Excluded nodes are neither
            yielded nor descended into. Never applied to the root.
        reporter: Diagnostic sink. Defaults to logging.

    Yields:
        Entry: Retained entries.
    """
    walk_options = options or WalkOptions()
    report = reporter or log_diagnostic
    root = Path(root)

    try:
        root_stat = os.stat(root, follow_symlinks=walk_options.follow_links)
    except (OSError, ValueError) as exc:
        report(Diagnostic.from_exception(root, exc, Stage.WALK))
        return

    root_kind = _kind_from_mode(root_stat.st_mode)
    target_stat = root_stat
    if root_kind is EntryKind.SYMLINK:
        # A root link to a directory is walked even when links are not
        # followed; the root entry itself keeps the SYMLINK kind.
        try:
            target_stat = os.stat(root)
        except OSError:
            logger.debug("Root link %s has no reachable target", root)

    root_is_dir = stat.S_ISDIR(target_stat.st_mode)
    ancestry = (_dir_id(target_stat),) if root_is_dir else ()
    stack: list[_Node] = [_Node(root, root_kind, 0, ancestry)]

    while stack:
        node = stack.pop()

        if node.depth >= walk_options.min_depth and should_retain(
            node.kind, walk_options.include_dirs
        ):
            yield Entry(
                path=node.path,
                kind=node.kind,
                depth=node.depth,
                follow_links=walk_options.follow_links,
            )

        # Only the root (depth 0) can be a link that is descended.
        if node.kind is not EntryKind.DIRECTORY and not (node.depth == 0 and root_is_dir):
            continue
        if walk_options.max_depth is not None and node.depth >= walk_options.max_depth:
            continue

        children = _list_children(node, walk_options, entry_filter, report)
        # Push in reverse so the first child is popped first
        stack.extend(reversed(children))


def _list_children(
    parent: _Node,
    options: WalkOptions,
    entry_filter: EntryFilter | None,
    report: Reporter,
) -> list[_Node]:
    """Read one directory and return its admissible children.

    The scandir handle is closed before this returns, so at most one
    directory is open at a time.
    """
    try:
        with os.scandir(parent.path) as it:
            dir_entries = list(it)
    except OSError as exc:
        report(Diagnostic.from_exception(parent.path, exc, Stage.WALK))
        return []

    depth = parent.depth + 1
    children: list[_Node] = []

    for dir_entry in dir_entries:
        path = parent.path / dir_entry.name
        try:
            node = _resolve_child(dir_entry, path, depth, parent, options)
        except OSError as exc:
            report(Diagnostic.from_exception(path, exc, Stage.WALK))
            continue

        if entry_filter is not None and entry_filter.should_exclude(
            path, node.kind is EntryKind.DIRECTORY
        ):
            logger.debug("Excluded by filter: %s", path)
            continue

        children.append(node)

    return children


def _resolve_child(
    dir_entry: os.DirEntry[str],
    path: Path,
    depth: int,
    parent: _Node,
    options: WalkOptions,
) -> _Node:
    """Build the node for one directory entry.

    Raises:
        OSError: When the entry (or its link target) cannot be stat'ed, or
            when following a link would re-enter an ancestor directory.
    """
    if not options.follow_links:
        if dir_entry.is_symlink():
            kind = EntryKind.SYMLINK
        elif dir_entry.is_dir(follow_symlinks=False):
            kind = EntryKind.DIRECTORY
        else:
            kind = EntryKind.FILE
        return _Node(path, kind, depth)

    # Following links: everything is judged by its target.
    st = dir_entry.stat(follow_symlinks=True)
    kind = _kind_from_mode(st.st_mode)
    if kind is not EntryKind.DIRECTORY:
        return _Node(path, kind, depth)

    dir_id = _dir_id(st)
    if dir_id in parent.ancestry:
        logger.debug("Not descending into %s: loops back to an ancestor", path)
        raise _loop_error(path)
    return _Node(path, kind, depth, parent.ancestry + (dir_id,))
