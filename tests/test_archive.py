"""Tests for tessera.archive module."""

import zipfile

import pytest

from tessera.archive import ArchiveError, inner_path_of, list_archive


@pytest.fixture
def comic(tmp_path):
    """Create a small cbz archive with nested folders."""
    path = tmp_path / "comic.cbz"
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("cover.jpg", b"c" * 3)
        zf.writestr("page10.jpg", b"p")
        zf.writestr("page2.jpg", b"p")
        zf.writestr("extras/", b"")
        zf.writestr("ch1/001.png", b"1")
        zf.writestr("ch1/002.png", b"2")
        zf.writestr("ch1/bonus/art.png", b"a")
    return path


class TestListArchive:
    def test_top_level(self, comic):
        entries = list_archive(comic)
        assert [e.name for e in entries] == [
            "ch1",
            "extras",
            "cover.jpg",
            "page2.jpg",
            "page10.jpg",
        ]
        assert entries[0].is_dir
        assert entries[2].size == 3

    def test_entry_paths(self, comic):
        entries = {e.name: e for e in list_archive(comic)}
        assert entries["cover.jpg"].path == f"{comic}/cover.jpg"
        assert entries["ch1"].path == f"{comic}/ch1"

    def test_inner_path(self, comic):
        entries = list_archive(comic, "ch1")
        assert [e.name for e in entries] == ["bonus", "001.png", "002.png"]

    def test_inner_path_trailing_slash(self, comic):
        assert len(list_archive(comic, "/ch1/")) == 3

    def test_empty_folder(self, comic):
        assert list_archive(comic, "extras") == []

    def test_unsupported_format(self, tmp_path):
        with pytest.raises(ArchiveError):
            list_archive(tmp_path / "book.rar")

    def test_corrupt_archive(self, tmp_path):
        path = tmp_path / "broken.zip"
        path.write_bytes(b"not a zip")
        with pytest.raises(ArchiveError):
            list_archive(path)

    def test_archive_error_is_value_error(self):
        assert issubclass(ArchiveError, ValueError)


class TestInnerPathOf:
    def test_round_trip_with_listing(self, comic):
        folder = next(e for e in list_archive(comic) if e.is_dir)
        assert inner_path_of(comic, folder.path) == "ch1"

    def test_foreign_path_unchanged(self, comic):
        assert inner_path_of(comic, "/elsewhere/x.jpg") == "/elsewhere/x.jpg"
