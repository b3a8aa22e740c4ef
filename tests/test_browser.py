"""Tests for tessera.browser module."""

from pathlib import Path

import pytest

from tessera.browser import (
    ListOptions,
    SortBy,
    SortOrder,
    count_files,
    files_modified_between,
    get_parent,
    get_siblings,
    list_directory,
    natural_sort_key,
    search_files,
)


class TestNaturalSort:
    def test_numbers_by_value(self):
        names = ["image10.jpg", "image2.jpg", "image1.jpg", "image20.jpg"]
        assert sorted(names, key=natural_sort_key) == [
            "image1.jpg",
            "image2.jpg",
            "image10.jpg",
            "image20.jpg",
        ]

    def test_case_insensitive(self):
        assert sorted(["b.jpg", "A.jpg"], key=natural_sort_key) == ["A.jpg", "b.jpg"]


class TestListDirectory:
    def test_folders_first_then_natural_order(self, sample_tree):
        names = [e.name for e in list_directory(sample_tree)]
        assert names == [
            "a-trip",
            "b-empty",
            "c-party",
            "img1.png",
            "img2.jpg",
            "img10.jpg",
            "notes.txt",
        ]

    def test_show_hidden(self, sample_tree):
        names = [e.name for e in list_directory(sample_tree, ListOptions(show_hidden=True))]
        assert ".hidden.jpg" in names

    def test_images_only_keeps_folders(self, sample_tree):
        names = [e.name for e in list_directory(sample_tree, ListOptions.images_only())]
        assert "notes.txt" not in names
        assert "a-trip" in names
        assert "img10.jpg" in names

    def test_files_only(self, sample_tree):
        entries = list_directory(sample_tree, ListOptions(show_directories=False))
        assert all(not e.is_dir for e in entries)
        assert len(entries) == 4

    def test_sort_by_modified(self, sample_tree):
        options = ListOptions(show_directories=False, sort_by=SortBy.MODIFIED)
        names = [e.name for e in list_directory(sample_tree, options)]
        assert names[:3] == ["img1.png", "img2.jpg", "img10.jpg"]

    def test_sort_descending(self, sample_tree):
        options = ListOptions(show_directories=False, sort_order=SortOrder.DESCENDING)
        names = [e.name for e in list_directory(sample_tree, options)]
        assert names == ["notes.txt", "img10.jpg", "img2.jpg", "img1.png"]

    def test_entry_metadata(self, sample_tree):
        entries = {e.name: e for e in list_directory(sample_tree)}
        assert entries["img2.jpg"].size == 10
        assert entries["img2.jpg"].modified == 2_000_000
        assert entries["a-trip"].is_dir
        assert entries["a-trip"].size is None

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            list_directory(tmp_path / "missing")

    def test_not_a_directory(self, sample_tree):
        with pytest.raises(NotADirectoryError):
            list_directory(sample_tree / "notes.txt")


class TestCountFiles:
    def test_counts_visible_files(self, sample_tree):
        assert count_files(sample_tree) == 4

    def test_subfolders(self, sample_tree):
        assert count_files(sample_tree / "a-trip") == 2
        assert count_files(sample_tree / "b-empty") == 0

    def test_missing_is_zero(self, tmp_path):
        assert count_files(tmp_path / "missing") == 0

    def test_respects_extension_filter(self, sample_tree):
        assert count_files(sample_tree, ListOptions.images_only()) == 3


class TestSiblings:
    def test_middle_folder(self, sample_tree):
        prev, following = get_siblings(sample_tree / "b-empty")
        base = sample_tree.resolve()
        assert prev == str(base / "a-trip")
        assert following == str(base / "c-party")

    def test_first_folder(self, sample_tree):
        prev, following = get_siblings(sample_tree / "a-trip")
        assert prev is None
        assert following == str(sample_tree.resolve() / "b-empty")

    def test_skip_empty(self, sample_tree):
        base = sample_tree.resolve()
        assert get_siblings(sample_tree / "a-trip", skip_empty=True) == (
            None,
            str(base / "c-party"),
        )
        assert get_siblings(sample_tree / "c-party", skip_empty=True) == (
            str(base / "a-trip"),
            None,
        )

    def test_only_child(self, sample_tree):
        assert get_siblings(sample_tree) == (None, None)

    def test_root(self):
        assert get_siblings("/") == (None, None)


class TestParent:
    def test_parent(self, sample_tree):
        assert get_parent(sample_tree / "a-trip") == str(sample_tree.resolve())

    def test_root_has_no_parent(self):
        assert get_parent(Path("/")) is None


class TestSearchFiles:
    def test_recursive_name_match_newest_first(self, sample_tree):
        names = [e.name for e in search_files(sample_tree, "IMG")]
        assert names == ["img10.jpg", "img2.jpg", "img1.png"]

    def test_finds_nested(self, sample_tree):
        names = [e.name for e in search_files(sample_tree, "beach")]
        assert names == ["beach.jpg"]

    def test_empty_query(self, sample_tree):
        assert search_files(sample_tree, "   ") == []

    def test_hidden_skipped(self, sample_tree):
        assert search_files(sample_tree, "hidden") == []
        assert len(search_files(sample_tree, "hidden", show_hidden=True)) == 1

    def test_limit(self, sample_tree):
        assert len(search_files(sample_tree, "img", limit=2)) == 2


class TestFilesModifiedBetween:
    def test_range(self, sample_tree):
        names = [e.name for e in files_modified_between(sample_tree, 1_500_000, 3_000_000)]
        assert names == ["img10.jpg", "img2.jpg"]

    def test_reversed_range(self, sample_tree):
        names = [e.name for e in files_modified_between(sample_tree, 3_000_000, 1_500_000)]
        assert names == ["img10.jpg", "img2.jpg"]

    def test_empty_range(self, sample_tree):
        assert files_modified_between(sample_tree, 0, 10) == []
