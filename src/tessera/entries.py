"""File entries shown by the browser and the extension predicates used on them."""

import os
from dataclasses import dataclass
from pathlib import Path

IMAGE_EXTENSIONS = frozenset(
    {"jpg", "jpeg", "png", "gif", "webp", "bmp", "ico", "tiff", "tif"}
)

ARCHIVE_EXTENSIONS = frozenset(
    {"zip", "cbz", "rar", "cbr", "7z", "cb7", "lzh", "tar", "gz", "tgz"}
)


def extension_of(name: str) -> str:
    """Return the lower-cased extension of a file name, without the dot."""
    suffix = Path(name).suffix
    return suffix[1:].lower() if suffix else ""


def is_image_path(name: str) -> bool:
    """Check if a file name has an image extension."""
    return extension_of(name) in IMAGE_EXTENSIONS


def is_archive_path(name: str) -> bool:
    """Check if a file name has an archive extension."""
    return extension_of(name) in ARCHIVE_EXTENSIONS


@dataclass(frozen=True)
class FileEntry:
    """One addressable item in a navigation context."""

    path: str
    name: str
    is_dir: bool = False
    size: int | None = None
    modified: int | None = None
    thumbnail_hash: int | None = None

    @property
    def extension(self) -> str:
        return "" if self.is_dir else extension_of(self.name)

    @property
    def is_image(self) -> bool:
        return not self.is_dir and self.extension in IMAGE_EXTENSIONS

    @property
    def is_archive(self) -> bool:
        return not self.is_dir and self.extension in ARCHIVE_EXTENSIONS

    @property
    def is_hidden(self) -> bool:
        return self.name.startswith(".")

    @classmethod
    def from_path(cls, path: Path | str) -> "FileEntry":
        """Build an entry from the filesystem metadata of ``path``.

        Raises OSError if the path cannot be stat'ed.
        """
        path = Path(path)
        stat = path.stat()
        is_dir = path.is_dir()
        return cls(
            path=str(path),
            name=path.name or str(path),
            is_dir=is_dir,
            size=None if is_dir else stat.st_size,
            modified=int(stat.st_mtime),
        )

    @classmethod
    def from_dir_entry(cls, entry: os.DirEntry) -> "FileEntry":
        """Build an entry from an ``os.scandir`` result."""
        is_dir = entry.is_dir()
        stat = entry.stat()
        return cls(
            path=entry.path,
            name=entry.name,
            is_dir=is_dir,
            size=None if is_dir else stat.st_size,
            modified=int(stat.st_mtime),
        )
