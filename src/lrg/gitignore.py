"""Gitignore integration — load .gitignore patterns via pathspec."""

from __future__ import annotations

import logging
from pathlib import Path

from pathspec import GitIgnoreSpec

logger = logging.getLogger(__name__)


def load_gitignore_spec(root: Path) -> GitIgnoreSpec | None:
    """Load .gitignore patterns from *root* directory.

    Args:
        root: Directory containing the ``.gitignore`` file.

    Returns:
        A compiled spec when a ``.gitignore`` exists and is readable,
        otherwise ``None``.
    """
    gitignore_path = root / ".gitignore"
    try:
        lines = gitignore_path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError):
        logger.debug("Cannot read .gitignore: %s", gitignore_path)
        return None
    return GitIgnoreSpec.from_lines(lines)


class GitignoreFilter:
    """Exclude entries matched by the root ``.gitignore``.

    Paths are matched relative to ``root``; directories are matched with a
    trailing slash so that ``build/`` style patterns apply to them.
    """

    def __init__(self, root: Path, spec: GitIgnoreSpec | None = None) -> None:
        self._root = root
        self._spec = spec if spec is not None else load_gitignore_spec(root)

    @property
    def active(self) -> bool:
        """Whether a ``.gitignore`` was found."""
        return self._spec is not None

    def should_exclude(self, path: Path, is_dir: bool) -> bool:
        if self._spec is None:
            return False
        try:
            relative = path.relative_to(self._root).as_posix()
        except ValueError:
            return False
        if is_dir:
            relative += "/"
        return self._spec.match_file(relative)
