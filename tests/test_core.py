"""Tests for lrg.core — collection and ranking."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import SIZES, make_symlink
from lrg.core import Lrg, SortBy
from lrg.diagnostics import DiagnosticCollector, Stage
from lrg.entry import Entry, size_of
from lrg.walker import WalkOptions


def _sizes(entries: list[Entry]) -> list[int]:
    return [size_of(e) for e in entries]


def _names(entries: list[Entry]) -> list[str]:
    return [e.name for e in entries]


def _by_size_descending(a: Entry, b: Entry) -> int:
    return size_of(b) - size_of(a)


def _by_name(a: Entry, b: Entry) -> int:
    return (a.name > b.name) - (a.name < b.name)


class TestLrgCollection:
    def test_collects_on_construction(self, size_tree: Path) -> None:
        lrg = Lrg(size_tree)
        assert len(lrg) == 7
        assert lrg.root == size_tree
        assert lrg.options == WalkOptions.defaults()

    def test_get_entries_returns_copy(self, size_tree: Path) -> None:
        lrg = Lrg(size_tree)
        entries = lrg.get_entries()
        entries.clear()
        assert len(lrg.get_entries()) == 7

    def test_iteration_matches_get_entries(self, size_tree: Path) -> None:
        lrg = Lrg(size_tree).rank_ascending()
        assert list(lrg) == lrg.get_entries()

    def test_missing_root_is_empty_and_reported(
        self, tmp_path: Path, collector: DiagnosticCollector
    ) -> None:
        lrg = Lrg(tmp_path / "missing", reporter=collector)
        assert len(lrg) == 0
        assert [d.stage for d in collector.diagnostics] == [Stage.WALK]

    def test_sorting_never_adds_or_removes(self, size_tree: Path) -> None:
        lrg = Lrg(size_tree, WalkOptions(include_dirs=True))
        before = set(lrg.get_entries())
        lrg.rank_descending().rank_custom(_by_name).rank_ascending()
        assert set(lrg.get_entries()) == before


class TestRankBySize:
    def test_descending_sizes(self, size_tree: Path) -> None:
        entries = Lrg(size_tree).rank_descending().get_entries()
        assert _sizes(entries) == [1024000, 204800, 102400, 51200, 20480, 10240, 11]

    def test_descending_names(self, size_tree: Path) -> None:
        entries = Lrg(size_tree).rank_descending().get_entries()
        assert _names(entries) == [
            "somefile",
            "subsubsomefile",
            "subsomefile",
            "smallerfile",
            "subsmallerfile",
            "evensmallerfile",
            "link_somefile",
        ]

    def test_ascending_sizes(self, size_tree: Path) -> None:
        entries = Lrg(size_tree).rank_ascending().get_entries()
        assert _sizes(entries) == [11, 10240, 20480, 51200, 102400, 204800, 1024000]

    def test_max_depth_one(self, size_tree: Path) -> None:
        entries = Lrg(size_tree, WalkOptions(max_depth=1)).rank_descending().get_entries()
        assert _sizes(entries) == [1024000, 51200, 10240]
        assert _names(entries) == ["somefile", "smallerfile", "evensmallerfile"]

    def test_min_depth_two(self, size_tree: Path) -> None:
        opts = WalkOptions(min_depth=2, include_dirs=True)
        entries = Lrg(size_tree, opts).rank_descending().get_entries()
        assert all(e.depth >= 2 for e in entries)
        assert "smallerfile" not in _names(entries)
        assert "subdir" not in _names(entries)

    def test_single_file_root(self, size_tree: Path) -> None:
        entries = Lrg(size_tree / "somefile").rank_descending().get_entries()
        assert [e.path for e in entries] == [size_tree / "somefile"]
        assert _sizes(entries) == [SIZES["somefile"]]

    def test_linked_root_ranks_its_contents(self, size_tree: Path, tmp_path: Path) -> None:
        root = tmp_path / "root_link"
        make_symlink(root, str(size_tree), target_is_directory=True)
        entries = Lrg(root).rank_descending().get_entries()
        contents = [e for e in entries if e.path != root]
        assert _sizes(contents) == [1024000, 204800, 102400, 51200, 20480, 10240, 11]
        assert entries[0].path == root / "somefile"

    def test_follow_links_ranks_link_as_target(self, size_tree: Path) -> None:
        opts = WalkOptions(follow_links=True)
        entries = Lrg(size_tree, opts).rank_descending().get_entries()
        assert _sizes(entries) == [
            1024000,
            1024000,
            204800,
            102400,
            51200,
            20480,
            10240,
        ]
        assert set(_names(entries[:2])) == {"somefile", "link_somefile"}

    def test_ascending_then_descending_is_reverse(self, size_tree: Path) -> None:
        lrg = Lrg(size_tree)
        ascending = lrg.rank_ascending().get_entries()
        descending = lrg.rank_descending().get_entries()
        assert descending == list(reversed(ascending))

    def test_ascending_is_idempotent(self, size_tree: Path) -> None:
        lrg = Lrg(size_tree)
        first = lrg.rank_ascending().get_entries()
        second = lrg.rank_ascending().get_entries()
        assert first == second

    @pytest.mark.parametrize(
        ("mode", "expected_first"),
        [(SortBy.ASCENDING, "link_somefile"), (SortBy.DESCENDING, "somefile")],
    )
    def test_rank_by(self, size_tree: Path, mode: SortBy, expected_first: str) -> None:
        entries = Lrg(size_tree).rank_by(mode).get_entries()
        assert entries[0].name == expected_first

    def test_rank_by_rejects_unknown_mode(self, size_tree: Path) -> None:
        with pytest.raises(ValueError):
            Lrg(size_tree).rank_by("desc")  # type: ignore[arg-type]

    def test_chaining_returns_same_instance(self, size_tree: Path) -> None:
        lrg = Lrg(size_tree)
        assert lrg.rank_ascending() is lrg
        assert lrg.rank_descending() is lrg
        assert lrg.rank_by(SortBy.ASCENDING) is lrg
        assert lrg.rank_custom(_by_name) is lrg


class TestRankCustom:
    def test_custom_descending_matches_builtin(self, size_tree: Path) -> None:
        builtin = Lrg(size_tree).rank_descending().get_entries()
        custom = Lrg(size_tree).rank_custom(_by_size_descending).get_entries()
        assert custom == builtin

    def test_custom_by_name(self, size_tree: Path) -> None:
        entries = Lrg(size_tree).rank_custom(_by_name).get_entries()
        assert _names(entries) == sorted(_names(entries))

    def test_custom_by_depth_never_touches_size(
        self, size_tree: Path, collector: DiagnosticCollector
    ) -> None:
        lrg = Lrg(size_tree, reporter=collector)
        for entry in lrg.get_entries():
            if entry.path.is_file() and not entry.path.is_symlink():
                entry.path.unlink()
        entries = lrg.rank_custom(lambda a, b: a.depth - b.depth).get_entries()
        assert [e.depth for e in entries] == sorted(e.depth for e in entries)
        assert collector.diagnostics == []


class TestTiesAndFailures:
    def test_equal_sizes_keep_walk_order(self, tmp_path: Path) -> None:
        for name in ("a", "b", "c", "d"):
            (tmp_path / name).write_bytes(b"\0" * 100)
        lrg = Lrg(tmp_path)
        walk_order = lrg.get_entries()
        assert lrg.rank_descending().get_entries() == walk_order
        assert lrg.rank_ascending().get_entries() == walk_order

    def test_vanished_file_ranks_as_zero(
        self, size_tree: Path, collector: DiagnosticCollector
    ) -> None:
        lrg = Lrg(size_tree, reporter=collector)
        (size_tree / "somefile").unlink()
        entries = lrg.rank_descending().get_entries()
        assert entries[-1].name == "somefile"
        metadata = collector.for_stage(Stage.METADATA)
        assert [d.path for d in metadata] == [size_tree / "somefile"]

    def test_size_of_uses_engine_reporter(
        self, tmp_path: Path, collector: DiagnosticCollector
    ) -> None:
        (tmp_path / "f").write_bytes(b"\0" * 3)
        lrg = Lrg(tmp_path, reporter=collector)
        entry = lrg.get_entries()[0]
        (tmp_path / "f").unlink()
        assert lrg.size_of(entry) == 0
        assert len(collector.diagnostics) == 1
