"""Tests for tessera.context module."""

from datetime import datetime

import pytest

from conftest import make_entries
from tessera.context import (
    Archive,
    NavigationContext,
    PhysicalFolder,
    Search,
    TagSearch,
    Timeline,
)

ALL_VARIANTS = [
    lambda files: NavigationContext.physical_folder("/photos", files),
    lambda files: NavigationContext.tag_search((1, 2), "cats dogs", files),
    lambda files: NavigationContext.timeline(0, 86400, files),
    lambda files: NavigationContext.archive("/books/comic.cbz", "ch1", files),
    lambda files: NavigationContext.search("beach", files),
]


@pytest.mark.parametrize("build", ALL_VARIANTS)
class TestUniformCursor:
    def test_current_files(self, build):
        files = make_entries(3)
        context = build(files)
        assert list(context.current_files()) == files

    def test_set_index_clamps(self, build):
        context = build(make_entries(3))
        context.set_index(10)
        assert context.current_index == 2
        assert context.current_file().name == "img2.jpg"

    def test_set_index_on_empty_is_noop(self, build):
        context = build([])
        context.set_index(4)
        assert context.current_index == 0
        assert context.current_file() is None

    def test_entries_are_a_snapshot(self, build):
        files = make_entries(2)
        context = build(files)
        files.append(make_entries(3)[2])
        assert len(context) == 2


class TestIdentity:
    def test_kinds(self):
        assert NavigationContext.physical_folder("/a").kind == "PhysicalFolder"
        assert NavigationContext.tag_search((1,), "x").kind == "TagSearch"
        assert NavigationContext.timeline(0, 1).kind == "Timeline"
        assert NavigationContext.archive("/a.zip").kind == "Archive"
        assert NavigationContext.search("x").kind == "Search"

    def test_sources_carry_identity(self):
        assert NavigationContext.physical_folder("/a").source == PhysicalFolder("/a")
        assert NavigationContext.tag_search([3, 4], "q").source == TagSearch((3, 4), "q")
        assert NavigationContext.timeline(5, 9).source == Timeline(5, 9)
        assert NavigationContext.archive("/a.zip", "in").source == Archive("/a.zip", "in")
        assert NavigationContext.search("q").source == Search("q")

    def test_initial_index_is_clamped(self):
        context = NavigationContext.search("q", make_entries(2), current_index=8)
        assert context.current_index == 1

    def test_titles(self):
        assert NavigationContext.search("cat").title == "search: cat"
        assert NavigationContext.tag_search((1,), "cat").title == "tags: cat"
        assert NavigationContext.archive("/b/comic.cbz").title == "comic.cbz:/"
        assert NavigationContext.archive("/b/comic.cbz", "ch1").title == "comic.cbz:/ch1"

    def test_timeline_title(self):
        start = int(datetime(2024, 5, 1).timestamp())
        end = int(datetime(2024, 5, 31).timestamp())
        assert NavigationContext.timeline(start, end).title == "timeline: 2024-05-01 .. 2024-05-31"

    def test_timeline_title_outside_calendar_range(self):
        context = NavigationContext.timeline(-(2**63), 2**63 - 1)
        assert context.title == f"timeline: {-(2**63)} .. {2**63 - 1}"

    def test_timeline_title_past_year_9999(self):
        assert NavigationContext.timeline(0, 2**40).title.endswith(f" .. {2**40}")
