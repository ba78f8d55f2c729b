"""Tests for directory listing, ordering and symlink policy."""

from __future__ import annotations

import os
import stat
import tempfile
import unittest
from pathlib import Path

from lds.entries import (
    TreeEntry,
    TreeOptions,
    apply_symlink_policy,
    list_directory_children,
    read_entry,
    sort_entries,
)


def _entry(name: str) -> TreeEntry:
    return TreeEntry(
        name=name,
        path=Path(name),
        mode=stat.S_IFREG | 0o644,
        size=0,
        mtime=0.0,
        is_dir=False,
        is_symlink=False,
    )


class SortEntriesTests(unittest.TestCase):
    def test_orders_names_case_insensitively(self) -> None:
        entries = [_entry(name) for name in ("beta", "Alpha", "gamma", "alpha2")]
        ordered = [entry.name for entry in sort_entries(entries)]
        self.assertEqual(ordered, ["Alpha", "alpha2", "beta", "gamma"])

    def test_sorting_twice_is_idempotent(self) -> None:
        entries = [_entry(name) for name in ("b", "A", "c", "a", "B")]
        once = sort_entries(entries)
        self.assertEqual(sort_entries(once), once)

    def test_reverse_matches_reversed_ascending_order(self) -> None:
        entries = [_entry(name) for name in ("b", "A", "c", "a", "B")]
        ascending = sort_entries(entries)
        descending = sort_entries(entries, reverse=True)
        self.assertEqual(descending, list(reversed(ascending)))
        self.assertEqual([entry.name for entry in descending], ["c", "b", "B", "a", "A"])


class ListDirectoryChildrenTests(unittest.TestCase):
    def test_hidden_entries_are_dropped_unless_enabled(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a.txt").write_text("a", encoding="utf-8")
            (root / ".hidden").write_text("h", encoding="utf-8")
            (root / "sub").mkdir()

            visible, scan_error = list_directory_children(root, show_hidden=False)
            self.assertIsNone(scan_error)
            self.assertEqual([child.name for child in visible], ["a.txt", "sub"])
            self.assertEqual(
                {child.name for child in visible},
                {name for name in os.listdir(root) if not name.startswith(".")},
            )

            everything, _ = list_directory_children(root, show_hidden=True)
            self.assertEqual([child.name for child in everything], [".hidden", "a.txt", "sub"])

    def test_reports_metadata_for_children(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "data.bin").write_bytes(b"12345")
            (root / "nested").mkdir()

            children, _ = list_directory_children(root, show_hidden=False)
            by_name = {child.name: child for child in children}

            self.assertEqual(by_name["data.bin"].size, 5)
            self.assertFalse(by_name["data.bin"].is_dir)
            self.assertTrue(by_name["nested"].is_dir)
            self.assertEqual(by_name["nested"].path, root / "nested")

    def test_unreadable_directory_returns_error_instead_of_raising(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing"
            children, scan_error = list_directory_children(missing, show_hidden=False)
            self.assertEqual(children, [])
            self.assertIsInstance(scan_error, FileNotFoundError)

    def test_reverse_flag_reverses_listing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for name in ("b.txt", "A.txt", "c.txt"):
                (root / name).write_text(name, encoding="utf-8")
            children, _ = list_directory_children(root, show_hidden=False, reverse=True)
            self.assertEqual([child.name for child in children], ["c.txt", "b.txt", "A.txt"])


@unittest.skipIf(os.name == "nt", "symlinks need privileges on Windows")
class SymlinkPolicyTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        (self.root / "realdir").mkdir()
        (self.root / "realdir" / "inner.txt").write_text("x", encoding="utf-8")
        os.symlink("realdir", self.root / "link")
        os.symlink("nowhere", self.root / "broken")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_symlink_shows_immediate_target_and_is_not_a_directory(self) -> None:
        entry = apply_symlink_policy(read_entry(self.root / "link"), TreeOptions())
        self.assertTrue(entry.is_symlink)
        self.assertFalse(entry.is_dir)
        self.assertEqual(entry.link_target, "realdir")

    def test_no_symlink_leaves_entry_untouched(self) -> None:
        original = read_entry(self.root / "link")
        entry = apply_symlink_policy(original, TreeOptions(no_symlink=True))
        self.assertEqual(entry, original)
        self.assertIsNone(entry.link_target)

    def test_dereference_substitutes_target_metadata_and_path(self) -> None:
        entry = apply_symlink_policy(read_entry(self.root / "link"), TreeOptions(deref_links=True))
        self.assertFalse(entry.is_symlink)
        self.assertTrue(entry.is_dir)
        self.assertEqual(entry.name, "realdir")
        self.assertEqual(entry.path, self.root / "realdir")

    def test_dereference_follows_chained_links(self) -> None:
        os.symlink("link", self.root / "link2")
        entry = apply_symlink_policy(read_entry(self.root / "link2"), TreeOptions(deref_links=True))
        self.assertEqual(entry.path, self.root / "realdir")

    def test_broken_link_stays_unresolved_when_dereferencing(self) -> None:
        original = read_entry(self.root / "broken")
        entry = apply_symlink_policy(original, TreeOptions(deref_links=True))
        self.assertEqual(entry, original)

    def test_broken_link_still_shows_target_without_dereference(self) -> None:
        entry = apply_symlink_policy(read_entry(self.root / "broken"), TreeOptions())
        self.assertEqual(entry.link_target, "nowhere")

    def test_regular_entries_pass_through(self) -> None:
        original = read_entry(self.root / "realdir")
        self.assertIs(apply_symlink_policy(original, TreeOptions(deref_links=True)), original)


if __name__ == "__main__":
    unittest.main()
