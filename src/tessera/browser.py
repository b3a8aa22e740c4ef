"""Directory listing, sibling lookup and file counting for the browser."""

import logging
import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .entries import ARCHIVE_EXTENSIONS, IMAGE_EXTENSIONS, FileEntry

logger = logging.getLogger(__name__)

# Digit runs compare numerically: "image2" sorts before "image10"
_NATURAL_CHUNK = re.compile(r"(\d+)")


class SortBy(str, Enum):
    NAME = "name"
    SIZE = "size"
    MODIFIED = "modified"
    EXTENSION = "extension"


class SortOrder(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass
class ListOptions:
    """Filters and ordering for directory listings."""

    show_hidden: bool = False
    show_directories: bool = True
    show_files: bool = True
    sort_by: SortBy = SortBy.NAME
    sort_order: SortOrder = SortOrder.ASCENDING
    filter_extensions: frozenset[str] | None = None

    @classmethod
    def images_only(cls) -> "ListOptions":
        return cls(filter_extensions=IMAGE_EXTENSIONS)

    @classmethod
    def archives_only(cls) -> "ListOptions":
        return cls(filter_extensions=ARCHIVE_EXTENSIONS)

    def accepts(self, entry: FileEntry) -> bool:
        """Check if an entry passes the hidden, kind and extension filters."""
        if not self.show_hidden and entry.is_hidden:
            return False
        if entry.is_dir:
            return self.show_directories
        if not self.show_files:
            return False
        if self.filter_extensions is not None:
            return entry.extension in self.filter_extensions
        return True


def natural_sort_key(name: str) -> tuple:
    """Sort key that orders embedded numbers by value, text case-insensitively."""
    parts = []
    for chunk in _NATURAL_CHUNK.split(name):
        if not chunk:
            continue
        if chunk.isdigit():
            parts.append((0, int(chunk), ""))
        else:
            parts.append((1, 0, chunk.lower()))
    return tuple(parts)


def sort_entries(
    entries: list[FileEntry],
    sort_by: SortBy = SortBy.NAME,
    order: SortOrder = SortOrder.ASCENDING,
) -> list[FileEntry]:
    """Sort entries in place with directories first and return them."""
    if sort_by == SortBy.SIZE:
        key = lambda e: (e.size or 0, natural_sort_key(e.name))
    elif sort_by == SortBy.MODIFIED:
        key = lambda e: (e.modified or 0, natural_sort_key(e.name))
    elif sort_by == SortBy.EXTENSION:
        key = lambda e: (e.extension, natural_sort_key(e.name))
    else:
        key = lambda e: natural_sort_key(e.name)

    reverse = order == SortOrder.DESCENDING
    dirs = sorted((e for e in entries if e.is_dir), key=key, reverse=reverse)
    files = sorted((e for e in entries if not e.is_dir), key=key, reverse=reverse)
    entries[:] = dirs + files
    return entries


def list_directory(path: Path | str, options: ListOptions | None = None) -> list[FileEntry]:
    """List the entries of a directory.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        NotADirectoryError: If ``path`` is not a directory.
    """
    options = options or ListOptions()
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Not found: {path}")
    if not path.is_dir():
        raise NotADirectoryError(f"Not a directory: {path}")

    entries = []
    with os.scandir(path) as it:
        for dir_entry in it:
            try:
                entry = FileEntry.from_dir_entry(dir_entry)
            except OSError:
                # Broken symlinks and permission errors are skipped
                continue
            if options.accepts(entry):
                entries.append(entry)

    return sort_entries(entries, options.sort_by, options.sort_order)


def count_files(path: Path | str, options: ListOptions | None = None) -> int:
    """Count the non-directory entries of a folder, 0 if it can't be read."""
    base = options or ListOptions()
    files_only = ListOptions(
        show_hidden=base.show_hidden,
        show_directories=False,
        show_files=True,
        filter_extensions=base.filter_extensions,
    )
    try:
        return len(list_directory(path, files_only))
    except OSError as e:
        logger.warning("Cannot count files in %s: %s", path, e)
        return 0


def get_parent(path: Path | str) -> str | None:
    """Get the parent folder, or None at the filesystem root."""
    path = Path(path).resolve()
    if path.parent == path:
        return None
    return str(path.parent)


def _has_visible_entries(path: str) -> bool:
    try:
        return len(list_directory(path)) > 0
    except OSError:
        return False


def get_siblings(path: Path | str, skip_empty: bool = False) -> tuple[str | None, str | None]:
    """Find the previous and next sibling folders of ``path``.

    Args:
        path: The current folder
        skip_empty: Skip sibling folders with nothing visible inside

    Returns:
        Tuple of (previous_sibling, next_sibling); either may be None
    """
    path = Path(path).resolve()
    if path.parent == path:
        return None, None

    folders_only = ListOptions(show_directories=True, show_files=False)
    try:
        siblings = list_directory(path.parent, folders_only)
    except OSError:
        return None, None

    if skip_empty:
        siblings = [
            e for e in siblings if e.name == path.name or _has_visible_entries(e.path)
        ]

    names = [e.name for e in siblings]
    if path.name not in names:
        return None, None

    index = names.index(path.name)
    prev = siblings[index - 1].path if index > 0 else None
    following = siblings[index + 1].path if index + 1 < len(siblings) else None
    return prev, following


def _walk_files(root: Path, show_hidden: bool):
    """Yield FileEntry for every file below ``root``, skipping unreadable ones."""
    for dirpath, dirnames, filenames in os.walk(root):
        if not show_hidden:
            dirnames[:] = [d for d in dirnames if not d.startswith(".")]
        for filename in filenames:
            if not show_hidden and filename.startswith("."):
                continue
            try:
                yield FileEntry.from_path(Path(dirpath) / filename)
            except OSError:
                continue


def search_files(
    root: Path | str,
    query: str,
    limit: int = 1000,
    show_hidden: bool = False,
) -> list[FileEntry]:
    """Search files below ``root`` by partial, case-insensitive name match.

    Returns:
        Matching entries sorted by modification time, newest first
    """
    query_lower = query.lower().strip()
    if not query_lower:
        return []

    results = [
        entry
        for entry in _walk_files(Path(root), show_hidden)
        if query_lower in entry.name.lower()
    ]
    results.sort(key=lambda e: e.modified or 0, reverse=True)
    return results[:limit]


def files_modified_between(
    root: Path | str,
    start: int,
    end: int,
    limit: int = 1000,
    show_hidden: bool = False,
) -> list[FileEntry]:
    """List files below ``root`` modified within ``[start, end]`` (epoch seconds).

    Returns:
        Matching entries sorted by modification time, newest first
    """
    if start > end:
        start, end = end, start

    results = [
        entry
        for entry in _walk_files(Path(root), show_hidden)
        if entry.modified is not None and start <= entry.modified <= end
    ]
    results.sort(key=lambda e: e.modified or 0, reverse=True)
    return results[:limit]
