"""Listing the contents of zip-family archives."""

import logging
import zipfile
from datetime import datetime
from pathlib import Path, PurePosixPath

from .browser import natural_sort_key
from .entries import FileEntry, extension_of

logger = logging.getLogger(__name__)

SUPPORTED_ARCHIVES = {"zip", "cbz"}


class ArchiveError(ValueError):
    """Raised when an archive can't be listed."""


def _member_mtime(info: zipfile.ZipInfo) -> int | None:
    try:
        return int(datetime(*info.date_time).timestamp())
    except (ValueError, OverflowError):
        return None


def list_archive(archive_path: Path | str, inner_path: str | None = None) -> list[FileEntry]:
    """List one directory level inside an archive.

    Args:
        archive_path: The archive file on disk
        inner_path: Directory inside the archive (None for the top level)

    Returns:
        Entries with folders first, each in natural name order. Entry paths
        have the form ``<archive_path>/<member path>``.

    Raises:
        ArchiveError: If the format is unsupported or the archive is unreadable
    """
    archive_path = Path(archive_path)
    if extension_of(archive_path.name) not in SUPPORTED_ARCHIVES:
        raise ArchiveError(f"Unsupported archive format: {archive_path.name}")

    prefix = (inner_path or "").strip("/")
    prefix = f"{prefix}/" if prefix else ""

    try:
        with zipfile.ZipFile(archive_path) as zf:
            infos = zf.infolist()
    except (OSError, zipfile.BadZipFile) as e:
        raise ArchiveError(f"Cannot read archive {archive_path}: {e}") from e

    dirs: dict[str, FileEntry] = {}
    files: list[FileEntry] = []

    for info in infos:
        name = info.filename
        if not name.startswith(prefix) or name == prefix:
            continue
        rest = name[len(prefix):]
        head, sep, tail = rest.partition("/")
        if sep:
            # Folder, either explicit or implied by a deeper member
            if head not in dirs:
                dirs[head] = FileEntry(
                    path=f"{archive_path}/{prefix}{head}",
                    name=head,
                    is_dir=True,
                )
            continue
        files.append(
            FileEntry(
                path=f"{archive_path}/{name}",
                name=PurePosixPath(name).name,
                size=info.file_size,
                modified=_member_mtime(info),
            )
        )

    logger.debug("Listed %s:/%s (%d entries)", archive_path, prefix, len(dirs) + len(files))
    ordered_dirs = sorted(dirs.values(), key=lambda e: natural_sort_key(e.name))
    files.sort(key=lambda e: natural_sort_key(e.name))
    return ordered_dirs + files


def inner_path_of(archive_path: Path | str, entry_path: str) -> str:
    """Recover the in-archive path from an entry path built by ``list_archive``."""
    base = f"{archive_path}/"
    if entry_path.startswith(base):
        return entry_path[len(base):]
    return entry_path
