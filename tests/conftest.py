"""Shared fixtures for tessera tests."""

import os
from pathlib import Path

import pytest

from tessera import tags
from tessera.context import NavigationContext
from tessera.entries import FileEntry
from tessera.navigation import NavigationState


def make_entries(count: int, prefix: str = "img", ext: str = "jpg") -> list[FileEntry]:
    """Build ``count`` in-memory file entries."""
    return [
        FileEntry(path=f"/photos/{prefix}{i}.{ext}", name=f"{prefix}{i}.{ext}")
        for i in range(count)
    ]


def make_state(
    count: int,
    current: int = 0,
    columns: int = 1,
    visible_rows: int = 1,
) -> NavigationState:
    """Build a state whose active folder holds ``count`` entries."""
    state = NavigationState()
    state.context = NavigationContext.physical_folder(
        "/photos", make_entries(count), current
    )
    state.update_layout(columns, visible_rows)
    return state


@pytest.fixture
def tmp_tags(tmp_path):
    """Initialize the tag index with a fresh temp file and clean up after."""
    index_path = tmp_path / "tags.json"
    tags.init_tags(index_path)
    yield index_path
    # Reset module-level state
    tags._index = tags._empty_index()
    tags._index_path = None


@pytest.fixture
def sample_tree(tmp_path):
    """Create a small photo folder tree in a temp directory."""
    root = tmp_path / "photos"
    root.mkdir()

    for name in ("img10.jpg", "img2.jpg", "img1.png", "notes.txt"):
        (root / name).write_bytes(b"x" * 10)
    (root / ".hidden.jpg").write_bytes(b"x")

    for name in ("a-trip", "b-empty", "c-party"):
        (root / name).mkdir()
    (root / "a-trip" / "beach.jpg").write_bytes(b"x" * 100)
    (root / "a-trip" / "sunset.jpg").write_bytes(b"x" * 50)
    (root / "c-party" / "cake.png").write_bytes(b"x")

    # Fixed mtimes for timeline tests
    os.utime(root / "img1.png", (1_000_000, 1_000_000))
    os.utime(root / "img2.jpg", (2_000_000, 2_000_000))
    os.utime(root / "img10.jpg", (3_000_000, 3_000_000))

    return root
