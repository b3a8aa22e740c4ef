"""JSON-based tag index: tag ids, tag names and the files carrying them."""

import json
import os
import re
import threading
from pathlib import Path
from typing import TypedDict


class TagIndex(TypedDict):
    """Type for the on-disk tag index."""

    next_id: int
    tags: dict[str, str]
    files: dict[str, list[int]]


# In-memory index cache
_index: TagIndex = {"next_id": 1, "tags": {}, "files": {}}

# Configured index file path
_index_path: Path | None = None

# Thread lock for index writes to prevent concurrent corruption
_write_lock = threading.Lock()

_QUERY_SPLIT = re.compile(r"[\s,]+")


def _empty_index() -> TagIndex:
    return {"next_id": 1, "tags": {}, "files": {}}


def _get_index_path() -> Path:
    """Get the configured index path."""
    if _index_path is None:
        raise RuntimeError("Tag index not initialized. Call init_tags() first.")
    return _index_path


def _load_index() -> TagIndex:
    """Load index from JSON file."""
    index_path = _get_index_path()
    if not index_path.exists():
        return _empty_index()

    try:
        data = json.loads(index_path.read_text())
        return {
            "next_id": int(data["next_id"]),
            "tags": dict(data["tags"]),
            "files": {k: list(v) for k, v in data["files"].items()},
        }
    except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError):
        return _empty_index()


def _save_index() -> None:
    """Save index to JSON file with atomic write."""
    with _write_lock:
        index_path = _get_index_path()
        index_path.parent.mkdir(parents=True, exist_ok=True)

        temp_path = index_path.with_suffix(".json.tmp")
        temp_path.write_text(json.dumps(_index, indent=2))
        os.replace(temp_path, index_path)


def init_tags(index_path: Path) -> None:
    """Initialize the tag index by loading from JSON file.

    Args:
        index_path: Path to the tags.json file.
    """
    global _index, _index_path
    _index_path = index_path
    _index = _load_index()


def get_tag_id(name: str) -> int | None:
    """Look up a tag id by name (case-insensitive)."""
    wanted = name.strip().lower()
    for tag_id, tag_name in _index["tags"].items():
        if tag_name.lower() == wanted:
            return int(tag_id)
    return None


def get_tag_name(tag_id: int) -> str | None:
    return _index["tags"].get(str(tag_id))


def create_tag(name: str) -> int:
    """Create a tag and return its id. Existing tags are returned as is."""
    name = name.strip()
    if not name:
        raise ValueError("Tag name must not be empty")

    existing = get_tag_id(name)
    if existing is not None:
        return existing

    tag_id = _index["next_id"]
    _index["tags"][str(tag_id)] = name
    _index["next_id"] = tag_id + 1
    _save_index()
    return tag_id


def tag_file(path: Path | str, tag_id: int) -> None:
    """Attach a tag to a file."""
    if str(tag_id) not in _index["tags"]:
        raise KeyError(f"Unknown tag id: {tag_id}")
    ids = _index["files"].setdefault(str(path), [])
    if tag_id not in ids:
        ids.append(tag_id)
        _save_index()


def untag_file(path: Path | str, tag_id: int) -> None:
    """Detach a tag from a file."""
    key = str(path)
    ids = _index["files"].get(key)
    if not ids or tag_id not in ids:
        return
    ids.remove(tag_id)
    if not ids:
        del _index["files"][key]
    _save_index()


def get_file_tags(path: Path | str) -> list[int]:
    return list(_index["files"].get(str(path), []))


def get_all_tags() -> list[tuple[int, str, int]]:
    """Get all tags as (id, name, file count), sorted by count descending."""
    counts: dict[int, int] = {int(tag_id): 0 for tag_id in _index["tags"]}
    for ids in _index["files"].values():
        for tag_id in ids:
            if tag_id in counts:
                counts[tag_id] += 1

    result = [
        (tag_id, _index["tags"][str(tag_id)], count) for tag_id, count in counts.items()
    ]
    # Sort by count descending, then name ascending
    result.sort(key=lambda x: (-x[2], x[1].lower()))
    return result


def get_files_by_tags(tag_ids: tuple[int, ...] | list[int]) -> list[Path]:
    """Get files carrying every one of ``tag_ids``, sorted by path."""
    if not tag_ids:
        return []
    wanted = set(tag_ids)
    return sorted(
        Path(path_str)
        for path_str, ids in _index["files"].items()
        if wanted.issubset(ids)
    )


def resolve_tag_query(query: str) -> tuple[int, ...]:
    """Turn a space/comma separated list of tag names into tag ids.

    Returns an empty tuple if any name is unknown, since no file can
    carry a tag that doesn't exist.
    """
    ids = []
    for name in _QUERY_SPLIT.split(query.strip().lstrip("#")):
        name = name.lstrip("#")
        if not name:
            continue
        tag_id = get_tag_id(name)
        if tag_id is None:
            return ()
        if tag_id not in ids:
            ids.append(tag_id)
    return tuple(ids)


def clear_tags() -> None:
    """Clear all tag data."""
    global _index
    _index = _empty_index()
    _save_index()
