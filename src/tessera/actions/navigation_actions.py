"""Navigation action handlers for TesseraApp."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from ..archive import ArchiveError, inner_path_of, list_archive
from ..browser import count_files, get_parent, get_siblings, list_directory
from ..context import Archive, NavigationContext, PhysicalFolder
from ..navigation import NavigationState
from ..widgets import ItemViewer, StatusBar, ThumbnailGrid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnterDecision:
    """Outcome of pressing enter on the current item."""

    browse: bool
    view: bool
    count: int


def resolve_enter(
    state: NavigationState,
    threshold: int,
    count_files: Callable[[str], int],
) -> EnterDecision:
    """Turn the state's enter decision into a concrete one.

    Files open in the viewer. Folders are browsed; when the folder holds
    between 1 and ``threshold`` files it is also opened straight in the
    viewer. ``count_files`` is only called for folders.
    """
    should_browse, should_view, count = state.should_enter_viewer(threshold)
    entry = state.current_file()
    if not should_browse or entry is None:
        return EnterDecision(should_browse, should_view, count)

    count = count_files(entry.path)
    return EnterDecision(True, 0 < count <= threshold, count)


def first_file_index(context: NavigationContext) -> int:
    """Index of the first non-folder entry, or 0 if there is none."""
    for index, entry in enumerate(context.current_files()):
        if not entry.is_dir:
            return index
    return 0


class NavigationActionsMixin:
    """Mixin providing cursor, folder and history navigation actions."""

    # -- view refresh ------------------------------------------------------

    def _refresh_view(self) -> None:
        """Redraw the grid, viewer and status bar from the navigation state."""
        grid = self.query_one("#grid", ThumbnailGrid)
        viewer = self.query_one("#viewer", ItemViewer)
        grid.display = self.mode == "browse"
        viewer.display = self.mode == "view"
        if self.mode == "view":
            viewer.show_entry(
                self.state.current_file(),
                self.state.current_index(),
                self.state.file_count(),
            )
        grid.refresh()
        self.query_one("#status", StatusBar).show_state(self.state, self.mode)

    def _set_mode(self, mode: str) -> None:
        self.mode = mode
        self._refresh_view()

    def _after_context_change(self) -> None:
        """Follow the new context with the watcher and reset the grid."""
        source = self.state.context.source
        if isinstance(source, PhysicalFolder):
            self._watcher.watch(source.path)
        else:
            self._watcher.stop()
        self.query_one("#grid", ThumbnailGrid).reset_scroll()
        self._refresh_view()

    # -- folder and archive transitions ------------------------------------

    def open_folder(self, path: Path | str, focus: str | None = None) -> bool:
        """List ``path`` and make it the current context.

        Args:
            path: Folder to open
            focus: Entry path to put the cursor on, if present
        """
        try:
            files = list_directory(path, self.config.list_options())
        except OSError as e:
            logger.warning("Cannot open folder %s: %s", path, e)
            self.notify(f"Cannot open {path}: {e}", severity="error")
            return False

        context = NavigationContext.physical_folder(str(Path(path).resolve()), files)
        if focus is not None:
            for index, entry in enumerate(files):
                if entry.path == focus:
                    context.set_index(index)
                    break
        self.state.navigate_to(context)
        self.mode = "browse"
        self._after_context_change()
        return True

    def open_archive(self, archive_path: str, inner_path: str | None = None) -> bool:
        """List a level of an archive and make it the current context."""
        try:
            entries = list_archive(archive_path, inner_path)
        except ArchiveError as e:
            logger.warning("%s", e)
            self.notify(str(e), severity="error")
            return False

        self.state.navigate_to(NavigationContext.archive(archive_path, inner_path, entries))
        self.mode = "browse"
        self._after_context_change()
        return True

    def _count_in_context(self, path: str) -> int:
        """Count the files of a folder entry in the current context."""
        source = self.state.context.source
        if isinstance(source, Archive):
            inner = inner_path_of(source.archive_path, path)
            try:
                return sum(1 for e in list_archive(source.archive_path, inner) if not e.is_dir)
            except ArchiveError:
                return 0
        return count_files(path, self.config.list_options())

    def action_enter(self) -> None:
        """Open the current item: browse folders, view files, open archives."""
        entry = self.state.current_file()
        if entry is None:
            return

        if self.mode == "browse" and entry.is_archive:
            self.open_archive(entry.path)
            return

        threshold = self.config.navigation.enter_threshold
        decision = resolve_enter(self.state, threshold, self._count_in_context)
        if decision.browse:
            source = self.state.context.source
            if isinstance(source, Archive):
                opened = self.open_archive(
                    source.archive_path, inner_path_of(source.archive_path, entry.path)
                )
            else:
                opened = self.open_folder(entry.path)
            if opened and decision.view:
                self.state.set_index(first_file_index(self.state.context))
                self._set_mode("view")
        elif decision.view:
            self._set_mode("view")

    def action_leave_viewer(self) -> None:
        """Return from the viewer to the grid."""
        if self.mode == "view":
            self.state.selection.select_single(self.state.current_index())
            self._set_mode("browse")

    def action_parent(self) -> None:
        """Go up one folder (or one level inside an archive)."""
        source = self.state.context.source
        if isinstance(source, Archive):
            if source.inner_path:
                parent = source.inner_path.strip("/").rpartition("/")[0]
                self.open_archive(source.archive_path, parent or None)
            else:
                archive = Path(source.archive_path)
                self.open_folder(archive.parent, focus=str(archive))
            return

        if not isinstance(source, PhysicalFolder):
            self.notify("Not browsing a folder", severity="warning")
            return
        parent = get_parent(source.path)
        if parent is not None:
            self.open_folder(parent, focus=str(Path(source.path).resolve()))

    def action_sibling(self, direction: str) -> None:
        """Jump to the previous or next sibling folder."""
        folder = self.state.current_path()
        if folder is None or not isinstance(self.state.context.source, PhysicalFolder):
            return
        prev, following = get_siblings(folder, self.config.navigation.skip_empty_siblings)
        target = prev if direction == "prev" else following
        if target is None:
            self.notify("No more folders", severity="warning")
            return
        self.open_folder(target)

    # -- history -----------------------------------------------------------

    def action_go_back(self) -> None:
        if self.state.go_back():
            self.mode = "browse"
            self._after_context_change()

    def action_go_forward(self) -> None:
        if self.state.go_forward():
            self.mode = "browse"
            self._after_context_change()

    # -- cursor movement ---------------------------------------------------

    def action_move(self, direction: str, select: bool = False) -> None:
        """Move the cursor; in the viewer, any direction steps through items."""
        wrap = self.config.navigation.wrap_navigation
        if self.mode == "view":
            if direction in ("right", "down"):
                moved = self.state.next_item(1, wrap)
            else:
                moved = self.state.prev_item(1, wrap)
        elif direction == "up":
            moved = self.state.move_up(1, select)
        elif direction == "down":
            moved = self.state.move_down(1, select)
        elif direction == "left":
            moved = self.state.move_left(1, select, wrap)
        else:
            moved = self.state.move_right(1, select, wrap)

        if moved:
            self._refresh_view()

    def action_page(self, direction: str, select: bool = False) -> None:
        if direction == "up":
            moved = self.state.page_up(1, select)
        else:
            moved = self.state.page_down(1, select)
        if moved:
            self._refresh_view()

    def action_jump(self, where: str, select: bool = False) -> None:
        """Jump to the first or last item."""
        moved = self.state.home(select) if where == "home" else self.state.end(select)
        if moved:
            self._refresh_view()

    def action_step(self, direction: str) -> None:
        """Step through items linearly, regardless of the grid."""
        wrap = self.config.navigation.wrap_navigation
        if direction == "next":
            moved = self.state.next_item(1, wrap)
        else:
            moved = self.state.prev_item(1, wrap)
        if moved:
            self._refresh_view()

    def action_toggle_select(self) -> None:
        if self.mode == "browse" and self.state.toggle_selection():
            self._refresh_view()

    def action_select_all(self) -> None:
        if self.mode == "browse" and self.state.select_all():
            self._refresh_view()
