"""Navigation contexts: the active item source and its cursor.

Every context pairs an ordered snapshot of ``FileEntry`` items with a
current index. What differs between sources is only their identity
(a folder path, a tag query, a date range, an archive or a search
string), so the cursor lives in one class and the identity in a small
frozen dataclass per source.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import PurePath
from typing import Iterable, Union

from .entries import FileEntry


@dataclass(frozen=True)
class PhysicalFolder:
    """A directory on disk."""

    path: str

    @property
    def title(self) -> str:
        return self.path


@dataclass(frozen=True)
class TagSearch:
    """Files carrying all of the given tags."""

    tag_ids: tuple[int, ...]
    query: str

    @property
    def title(self) -> str:
        return f"tags: {self.query}"


def _format_day(timestamp: int) -> str:
    """Local date of ``timestamp``, or the raw number when it has no calendar date."""
    try:
        return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d")
    except (OverflowError, OSError, ValueError):
        return str(timestamp)


@dataclass(frozen=True)
class Timeline:
    """Files modified within ``[start_date, end_date]`` (epoch seconds)."""

    start_date: int
    end_date: int

    @property
    def title(self) -> str:
        return f"timeline: {_format_day(self.start_date)} .. {_format_day(self.end_date)}"


@dataclass(frozen=True)
class Archive:
    """One directory level inside an archive file."""

    archive_path: str
    inner_path: str | None = None

    @property
    def title(self) -> str:
        name = PurePath(self.archive_path).name
        if self.inner_path:
            return f"{name}:/{self.inner_path}"
        return f"{name}:/"


@dataclass(frozen=True)
class Search:
    """Free-text search results."""

    query: str

    @property
    def title(self) -> str:
        return f"search: {self.query}"


ContextSource = Union[PhysicalFolder, TagSearch, Timeline, Archive, Search]


@dataclass
class NavigationContext:
    """An item source with its entries and cursor position.

    ``current_index`` only means something when ``entries`` is non-empty;
    for an empty context it stays 0 and must not be used to index entries.
    """

    source: ContextSource
    entries: tuple[FileEntry, ...] = ()
    current_index: int = 0

    def __post_init__(self) -> None:
        self.entries = tuple(self.entries)
        self.set_index(self.current_index)

    @property
    def kind(self) -> str:
        return type(self.source).__name__

    @property
    def title(self) -> str:
        return self.source.title

    def current_files(self) -> tuple[FileEntry, ...]:
        return self.entries

    def set_index(self, index: int) -> None:
        """Move the cursor, clamping to the last entry. No-op when empty."""
        if not self.entries:
            self.current_index = 0
            return
        self.current_index = max(0, min(index, len(self.entries) - 1))

    def current_file(self) -> FileEntry | None:
        if not self.entries:
            return None
        return self.entries[self.current_index]

    def __len__(self) -> int:
        return len(self.entries)

    @classmethod
    def physical_folder(
        cls, path: str, files: Iterable[FileEntry] = (), current_index: int = 0
    ) -> "NavigationContext":
        return cls(PhysicalFolder(str(path)), tuple(files), current_index)

    @classmethod
    def tag_search(
        cls,
        tag_ids: Iterable[int],
        query: str,
        results: Iterable[FileEntry] = (),
        current_index: int = 0,
    ) -> "NavigationContext":
        return cls(TagSearch(tuple(tag_ids), query), tuple(results), current_index)

    @classmethod
    def timeline(
        cls,
        start_date: int,
        end_date: int,
        results: Iterable[FileEntry] = (),
        current_index: int = 0,
    ) -> "NavigationContext":
        return cls(Timeline(start_date, end_date), tuple(results), current_index)

    @classmethod
    def archive(
        cls,
        archive_path: str,
        inner_path: str | None = None,
        entries: Iterable[FileEntry] = (),
        current_index: int = 0,
    ) -> "NavigationContext":
        return cls(Archive(str(archive_path), inner_path), tuple(entries), current_index)

    @classmethod
    def search(
        cls, query: str, results: Iterable[FileEntry] = (), current_index: int = 0
    ) -> "NavigationContext":
        return cls(Search(query), tuple(results), current_index)
