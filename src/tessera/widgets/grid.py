"""Thumbnail grid widget: the browser-mode view of the active context."""

from rich.text import Text

from textual.events import Resize
from textual.message import Message
from textual.widget import Widget

from ..entries import FileEntry
from ..navigation import NavigationState

# Tile geometry in terminal cells
TILE_WIDTH = 18
TILE_HEIGHT = 3


def tile_label(entry: FileEntry) -> str:
    """Short kind marker shown above the tile name."""
    if entry.is_dir:
        return "[DIR]"
    if entry.is_image:
        return "[IMG]"
    if entry.is_archive:
        return "[ARC]"
    return f"[{entry.extension[:3].upper() or '---'}]"


def _fit(text: str, width: int) -> str:
    if len(text) <= width:
        return text.ljust(width)
    return text[: width - 1] + "…"


class ThumbnailGrid(Widget, can_focus=True):
    """Grid of file tiles driven by a NavigationState.

    The grid never moves the cursor itself: it renders the state and
    reports its geometry so that row and page movement match what is on
    screen.
    """

    DEFAULT_CSS = """
    ThumbnailGrid {
        width: 1fr;
        height: 1fr;
        padding: 0 1;
    }
    """

    class LayoutChanged(Message):
        """Message emitted when the number of columns or rows changes."""

        def __init__(self, columns: int, visible_rows: int) -> None:
            super().__init__()
            self.columns = columns
            self.visible_rows = visible_rows

    def __init__(self, state: NavigationState, **kwargs) -> None:
        super().__init__(**kwargs)
        self.state = state
        self._top_row = 0

    def on_resize(self, event: Resize) -> None:
        columns = max(1, event.size.width // TILE_WIDTH)
        rows = max(1, event.size.height // TILE_HEIGHT)
        layout = self.state.grid_layout
        if (columns, rows) != (layout.columns, layout.visible_rows):
            self.state.update_layout(columns, rows)
            self.post_message(self.LayoutChanged(columns, rows))
        self.refresh()

    def _scroll_to_cursor(self) -> None:
        """Keep the cursor row inside the visible window."""
        columns = self.state.grid_layout.columns
        rows = self.state.grid_layout.visible_rows
        cursor_row = self.state.current_index() // columns
        if cursor_row < self._top_row:
            self._top_row = cursor_row
        elif cursor_row >= self._top_row + rows:
            self._top_row = cursor_row - rows + 1

    def reset_scroll(self) -> None:
        self._top_row = 0
        self.refresh()

    def render(self) -> Text:
        files = self.state.current_files()
        if not files:
            return Text("(empty)", style="dim italic")

        self._scroll_to_cursor()
        columns = self.state.grid_layout.columns
        rows = self.state.grid_layout.visible_rows
        cursor = self.state.current_index()
        selection = self.state.selection
        width = TILE_WIDTH - 1

        text = Text()
        first = self._top_row * columns
        last = min(len(files), first + rows * columns)
        for row_start in range(first, last, columns):
            row = range(row_start, min(row_start + columns, last))
            for line in range(TILE_HEIGHT - 1):
                for index in row:
                    entry = files[index]
                    if index == cursor:
                        style = "reverse bold"
                    elif selection.is_selected(index):
                        style = "bold yellow"
                    elif entry.is_dir:
                        style = "cyan"
                    else:
                        style = "default"
                    content = tile_label(entry) if line == 0 else entry.name
                    text.append(_fit(content, width), style=style)
                    text.append(" ")
                text.append("\n")
            text.append("\n")
        return text
