"""Search, tag and timeline action handlers for TesseraApp."""

from __future__ import annotations

import logging
from datetime import datetime
from functools import partial
from pathlib import Path

from ..browser import files_modified_between, search_files
from ..context import Archive, NavigationContext, PhysicalFolder
from ..entries import FileEntry
from ..tags import create_tag, get_files_by_tags, resolve_tag_query, tag_file
from ..widgets import QueryModal

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"


def parse_date_range(text: str) -> tuple[int, int]:
    """Parse ``YYYY-MM-DD..YYYY-MM-DD`` (or a single date) into epoch seconds.

    The end date is inclusive: the range stops at the last second of that
    day. Reversed ranges are swapped.

    Raises:
        ValueError: If a date can't be parsed or has no epoch timestamp
    """
    start_text, sep, end_text = text.strip().partition("..")
    start = datetime.strptime(start_text.strip(), DATE_FORMAT)
    end = datetime.strptime(end_text.strip(), DATE_FORMAT) if sep else start
    if end < start:
        start, end = end, start
    end = end.replace(hour=23, minute=59, second=59)
    try:
        return int(start.timestamp()), int(end.timestamp())
    except (OverflowError, OSError) as e:
        raise ValueError(f"Date out of range: {text}") from e


def entries_for_paths(paths: list[Path]) -> list[FileEntry]:
    """Build entries for indexed paths, dropping files that no longer exist."""
    entries = []
    for path in paths:
        try:
            entries.append(FileEntry.from_path(path))
        except OSError:
            logger.debug("Skipping missing tagged file: %s", path)
    return entries


class SourceActionsMixin:
    """Mixin providing free-text search, tag search, tagging and timeline actions."""

    def _search_root(self) -> Path:
        """Folder searched by search and timeline: the current one, if any."""
        source = self.state.context.source
        if isinstance(source, PhysicalFolder):
            return Path(source.path)
        return self.config.start_directory

    def action_search(self) -> None:
        self.push_screen(
            QueryModal("SEARCH", f"File names below {self._search_root()}"),
            self._on_search_dismissed,
        )

    def _on_search_dismissed(self, query: str | None) -> None:
        if not query:
            return
        root = self._search_root()
        self.notify(f"Searching for '{query}'...")
        self.run_worker(
            partial(self._background_search, root, query),
            name="_background_search",
            exclusive=True,
            thread=True,
        )

    def _background_search(self, root: Path, query: str) -> NavigationContext:
        """Run a file name search in a background thread."""
        results = search_files(root, query, show_hidden=self.config.filer.show_hidden_files)
        return NavigationContext.search(query, results)

    def action_timeline(self) -> None:
        self.push_screen(
            QueryModal("TIMELINE", "YYYY-MM-DD..YYYY-MM-DD"),
            self._on_timeline_dismissed,
        )

    def _on_timeline_dismissed(self, text: str | None) -> None:
        if not text:
            return
        try:
            start, end = parse_date_range(text)
        except ValueError:
            self.notify(f"Invalid date range: {text}", severity="error")
            return
        root = self._search_root()
        self.run_worker(
            partial(self._background_timeline, root, start, end),
            name="_background_timeline",
            exclusive=True,
            thread=True,
        )

    def _background_timeline(self, root: Path, start: int, end: int) -> NavigationContext:
        """Collect files modified in a date range in a background thread."""
        results = files_modified_between(
            root, start, end, show_hidden=self.config.filer.show_hidden_files
        )
        return NavigationContext.timeline(start, end, results)

    def action_tag_search(self) -> None:
        self.push_screen(
            QueryModal("TAG SEARCH", "Tag names, separated by spaces"),
            self._on_tag_search_dismissed,
        )

    def _on_tag_search_dismissed(self, query: str | None) -> None:
        if not query:
            return
        tag_ids = resolve_tag_query(query)
        paths = get_files_by_tags(tag_ids)
        entries = entries_for_paths(paths)
        skipped = len(paths) - len(entries)
        if skipped:
            self.notify(f"Skipped {skipped} tagged file(s) that no longer exist", severity="warning")
        if not entries:
            self.notify(f"No files tagged {query}", severity="warning")
        self.show_results(NavigationContext.tag_search(tag_ids, query, entries))

    def action_tag_selection(self) -> None:
        """Tag the selected files (or the current one)."""
        if not self.state.selected_entries() and self.state.current_file() is None:
            return
        if isinstance(self.state.context.source, Archive):
            self.notify("Files inside archives can't be tagged", severity="warning")
            return
        self.push_screen(QueryModal("ADD TAG", "Tag name"), self._on_tag_dismissed)

    def _on_tag_dismissed(self, name: str | None) -> None:
        name = (name or "").lstrip("#").strip()
        if not name:
            return
        entries = self.state.selected_entries()
        if not entries and self.state.current_file() is not None:
            entries = [self.state.current_file()]
        tag_id = create_tag(name)
        for entry in entries:
            tag_file(entry.path, tag_id)
        self.notify(f"Tagged {len(entries)} file(s) with #{name}")

    def show_results(self, context: NavigationContext) -> None:
        """Make a result context current."""
        self.state.navigate_to(context)
        self.mode = "browse"
        self._after_context_change()
