"""Shared fixtures for lrg tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from lrg.diagnostics import DiagnosticCollector

SIZES = {
    "somefile": 1024000,
    "smallerfile": 51200,
    "evensmallerfile": 10240,
    "subdir/subsomefile": 102400,
    "subdir/subsmallerfile": 20480,
    "subdir/subsubdir/subsubsomefile": 204800,
}

LINK_TARGET = "../somefile"


def make_symlink(link: Path, target: str, target_is_directory: bool = False) -> None:
    """Create a symlink or skip the calling test when the OS refuses."""
    try:
        os.symlink(target, link, target_is_directory=target_is_directory)
    except (OSError, NotImplementedError) as exc:
        pytest.skip(f"symlinks not supported here: {exc}")


@pytest.fixture
def size_tree(tmp_path: Path) -> Path:
    """Create the standard ranking tree.

    Structure::

        testdir/
        ├── subdir/
        │   ├── subsubdir/
        │   │   └── subsubsomefile   204800
        │   ├── link_somefile        -> ../somefile (link itself is 11 bytes)
        │   ├── subsmallerfile        20480
        │   └── subsomefile          102400
        ├── evensmallerfile           10240
        ├── smallerfile               51200
        └── somefile                1024000
    """
    root = tmp_path / "testdir"
    (root / "subdir" / "subsubdir").mkdir(parents=True)
    for relative, size in SIZES.items():
        (root / relative).write_bytes(b"\0" * size)
    make_symlink(root / "subdir" / "link_somefile", LINK_TARGET)
    return root


@pytest.fixture
def collector() -> DiagnosticCollector:
    return DiagnosticCollector()


def is_root_user() -> bool:
    return hasattr(os, "geteuid") and os.geteuid() == 0
