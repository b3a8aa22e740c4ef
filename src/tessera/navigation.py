"""Navigation state: cursor movement, multi-select, and back/forward history.

This module performs no I/O. Directory listings, file counts and sibling
lookups are supplied by the caller (see ``tessera.browser``).
"""

import logging
from typing import Callable, Iterator

from .context import Archive, NavigationContext, PhysicalFolder
from .entries import FileEntry, is_image_path
from .selection import GridLayout, SelectionState

logger = logging.getLogger(__name__)

DEFAULT_ENTER_THRESHOLD = 5


class HistoryStack:
    """Stack of navigation contexts for back/forward history."""

    def __init__(self) -> None:
        self._stack: list[NavigationContext] = []

    def push(self, context: NavigationContext) -> None:
        """Push a context onto the stack."""
        self._stack.append(context)

    def pop(self) -> NavigationContext | None:
        """Pop and return the most recent context, or None if empty."""
        if self._stack:
            return self._stack.pop()
        return None

    def clear(self) -> None:
        self._stack.clear()

    def prune(self, limit: int) -> int:
        """Drop the oldest contexts so at most ``limit`` remain.

        A limit of 0 or less means unbounded. Returns the number dropped.
        """
        overflow = len(self._stack) - limit
        if limit <= 0 or overflow <= 0:
            return 0
        del self._stack[:overflow]
        return overflow

    def is_empty(self) -> bool:
        return len(self._stack) == 0

    def __len__(self) -> int:
        return len(self._stack)

    def __iter__(self) -> Iterator[NavigationContext]:
        return iter(self._stack)


class NavigationState:
    """The active context plus history, grid geometry and selection.

    All methods are synchronous and assume a single writer. Movement past
    an edge clamps; nothing here raises for out-of-range requests.

    Args:
        enter_threshold: File-count cutoff used by callers to decide whether
            entering a folder should jump straight to the viewer.
        history_limit: Maximum number of back-history entries kept (0 keeps
            everything).
        reload: Optional hook applied to contexts restored by ``go_back`` and
            ``go_forward``. When unset, history restores the exact snapshot
            that was displaced.
    """

    def __init__(
        self,
        enter_threshold: int = DEFAULT_ENTER_THRESHOLD,
        history_limit: int = 0,
        reload: Callable[[NavigationContext], NavigationContext] | None = None,
    ) -> None:
        self.context = NavigationContext.physical_folder(".")
        self._history = HistoryStack()
        self._forward = HistoryStack()
        self.grid_layout = GridLayout()
        self.selection = SelectionState()
        self.enter_threshold = enter_threshold
        self.history_limit = history_limit
        self.reload = reload

    # -- history -----------------------------------------------------------

    @property
    def history(self) -> list[NavigationContext]:
        """Back-history contexts, oldest first."""
        return list(self._history)

    @property
    def forward(self) -> list[NavigationContext]:
        """Forward contexts, the next one to restore last."""
        return list(self._forward)

    def can_go_back(self) -> bool:
        return not self._history.is_empty()

    def can_go_forward(self) -> bool:
        return not self._forward.is_empty()

    def navigate_to(self, context: NavigationContext) -> None:
        """Make ``context`` current, saving the previous one to history."""
        self._history.push(self.context)
        dropped = self._history.prune(self.history_limit)
        if dropped:
            logger.debug("Pruned %d history entries", dropped)
        self.context = context
        self._forward.clear()
        self.selection.clear()
        logger.debug("Navigated to %s (%d entries)", context.source, len(context))

    def go_back(self) -> bool:
        """Restore the previous context. Returns False when there is none."""
        previous = self._history.pop()
        if previous is None:
            return False
        self._forward.push(self.context)
        self.context = self._restore(previous)
        self.selection.clear()
        logger.debug("Back to %s", self.context.source)
        return True

    def go_forward(self) -> bool:
        """Undo the last ``go_back``. Returns False when there is nothing to redo."""
        following = self._forward.pop()
        if following is None:
            return False
        self._history.push(self.context)
        self._history.prune(self.history_limit)
        self.context = self._restore(following)
        self.selection.clear()
        logger.debug("Forward to %s", self.context.source)
        return True

    def _restore(self, context: NavigationContext) -> NavigationContext:
        if self.reload is None:
            return context
        return self.reload(context)

    # -- accessors ---------------------------------------------------------

    def current_files(self) -> tuple[FileEntry, ...]:
        return self.context.current_files()

    def current_index(self) -> int:
        return self.context.current_index

    def set_index(self, index: int) -> None:
        self.context.set_index(index)

    def current_file(self) -> FileEntry | None:
        return self.context.current_file()

    def file_count(self) -> int:
        return len(self.context)

    def current_path(self) -> str | None:
        """Location of the active context on disk.

        The folder path for a physical folder, the archive file for an
        archive, None for tag, timeline and search results.
        """
        source = self.context.source
        if isinstance(source, PhysicalFolder):
            return source.path
        if isinstance(source, Archive):
            return source.archive_path
        return None

    def is_current_dir(self) -> bool:
        entry = self.current_file()
        return entry is not None and entry.is_dir

    def is_current_image(self) -> bool:
        entry = self.current_file()
        return entry is not None and not entry.is_dir and is_image_path(entry.name)

    # -- grid movement -----------------------------------------------------

    def update_layout(self, columns: int, visible_rows: int) -> None:
        self.grid_layout.update(columns, visible_rows)

    def _move_to(self, target: int, select: bool) -> bool:
        """Move the cursor; with ``select`` a missing anchor is set to the old cursor first."""
        count = self.file_count()
        current = self.current_index()
        if count == 0 or target == current:
            return False

        self.set_index(target)
        target = self.current_index()
        if select:
            anchor = self.selection.anchor
            if anchor is None:
                anchor = current
                self.selection.set_anchor(anchor)
            self.selection.select_range(anchor, target)
        else:
            self.selection.select_single(target)
        return True

    def move_up(self, amount: int = 1, select: bool = False) -> bool:
        """Move ``amount`` rows up, stopping in the first row."""
        if self.file_count() == 0:
            return False
        columns = self.grid_layout.columns
        current = self.current_index()
        step = columns * max(0, amount)

        if step == 0:
            return False
        if current < columns:
            target = 0
        elif current >= step:
            target = current - step
        else:
            target = current % columns
        return self._move_to(target, select)

    def move_down(self, amount: int = 1, select: bool = False) -> bool:
        """Move ``amount`` rows down, stopping at the last item."""
        count = self.file_count()
        if count == 0:
            return False
        step = self.grid_layout.columns * max(0, amount)
        target = min(self.current_index() + step, count - 1)
        return self._move_to(target, select)

    def move_left(self, amount: int = 1, select: bool = False, wrap: bool = False) -> bool:
        """Move left within the row, or to the end of the previous row with ``wrap``."""
        if self.file_count() == 0:
            return False
        columns = self.grid_layout.columns
        current = self.current_index()
        amount = max(0, amount)
        column = current % columns
        row_start = current - column

        if column >= amount:
            target = current - amount
        elif wrap and row_start > 0:
            target = row_start - 1
        else:
            target = row_start
        return self._move_to(target, select)

    def move_right(self, amount: int = 1, select: bool = False, wrap: bool = False) -> bool:
        """Move right within the row, or to the start of the next row with ``wrap``."""
        count = self.file_count()
        if count == 0:
            return False
        columns = self.grid_layout.columns
        current = self.current_index()
        amount = max(0, amount)
        row_start = current - current % columns
        next_row = row_start + columns
        row_end = min(next_row - 1, count - 1)

        if current + amount <= row_end:
            target = current + amount
        elif wrap and next_row < count:
            target = next_row
        else:
            target = row_end
        return self._move_to(target, select)

    def page_up(self, amount: int = 1, select: bool = False) -> bool:
        if self.file_count() == 0:
            return False
        step = self.grid_layout.page_size * max(0, amount)
        return self._move_to(max(0, self.current_index() - step), select)

    def page_down(self, amount: int = 1, select: bool = False) -> bool:
        count = self.file_count()
        if count == 0:
            return False
        step = self.grid_layout.page_size * max(0, amount)
        return self._move_to(min(self.current_index() + step, count - 1), select)

    def home(self, select: bool = False) -> bool:
        return self._move_to(0, select)

    def end(self, select: bool = False) -> bool:
        return self._move_to(self.file_count() - 1, select)

    # -- linear stepping (viewer mode) -------------------------------------

    def next_item(self, amount: int = 1, wrap: bool = False) -> bool:
        """Step forward ``amount`` items, ignoring the grid."""
        count = self.file_count()
        if count == 0:
            return False
        current = self.current_index()
        target = current + max(0, amount)
        if target > count - 1:
            target = target % count if wrap else count - 1
        if target == current:
            return False
        self.set_index(target)
        return True

    def prev_item(self, amount: int = 1, wrap: bool = False) -> bool:
        """Step back ``amount`` items, ignoring the grid."""
        count = self.file_count()
        if count == 0:
            return False
        current = self.current_index()
        amount = max(0, amount)
        if amount <= current:
            target = current - amount
        elif wrap:
            diff = (amount - current) % count
            target = 0 if diff == 0 else count - diff
        else:
            target = 0
        if target == current:
            return False
        self.set_index(target)
        return True

    # -- selection ---------------------------------------------------------

    def toggle_selection(self, index: int | None = None) -> bool:
        """Toggle ``index`` (default: the cursor) in the selection."""
        count = self.file_count()
        if count == 0:
            return False
        if index is None:
            index = self.current_index()
        if not 0 <= index < count:
            return False
        if len(self.selection) == 0:
            self.selection.set_anchor(index)
        self.selection.toggle(index)
        return True

    def select_all(self) -> bool:
        count = self.file_count()
        if count == 0:
            return False
        self.selection.select_range(0, count - 1)
        return True

    def selected_entries(self) -> list[FileEntry]:
        """Selected entries in selection order, ignoring stale indices."""
        files = self.current_files()
        return [files[i] for i in self.selection.selected if 0 <= i < len(files)]

    # -- mode transitions --------------------------------------------------

    def should_enter_viewer(self, threshold: int | None = None) -> tuple[bool, bool, int]:
        """Decide what entering the current item means.

        Returns ``(should_browse, should_view, resolved_count)``. A file is
        always opened in the viewer: ``(False, True, 1)``. A directory yields
        ``(True, False, 0)``: the caller must count the directory's files
        itself and compare against ``threshold``. An empty context yields
        ``(False, False, 0)``.
        """
        entry = self.current_file()
        if entry is None:
            return False, False, 0
        if entry.is_dir:
            logger.debug(
                "Enter %s: folder, count deferred (threshold %s)",
                entry.path,
                self.enter_threshold if threshold is None else threshold,
            )
            return True, False, 0
        return False, True, 1

    def refresh_entries(self, files: list[FileEntry] | tuple[FileEntry, ...]) -> None:
        """Replace the active context's entries with a fresh listing.

        The cursor stays on the same path if it still exists. History
        snapshots are left untouched.
        """
        previous = self.current_file()
        self.context.entries = tuple(files)
        index = self.context.current_index
        if previous is not None:
            for i, entry in enumerate(self.context.entries):
                if entry.path == previous.path:
                    index = i
                    break
        self.context.set_index(index)
        self.selection.clear()
        logger.debug("Refreshed %s (%d entries)", self.context.source, len(self.context))
