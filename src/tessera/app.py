"""Main Textual application for Tessera."""

from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer
from textual.worker import Worker

from .actions import NavigationActionsMixin, SourceActionsMixin
from .browser import list_directory
from .config import Config
from .context import NavigationContext, PhysicalFolder
from .navigation import NavigationState
from .tags import init_tags
from .watcher import FolderWatcher
from .widgets import ItemViewer, StatusBar, ThumbnailGrid


class TesseraApp(NavigationActionsMixin, SourceActionsMixin, App):
    """Tessera - terminal image and file browser."""

    TITLE = "Tessera"
    SUB_TITLE = "Image Browser"

    CSS = """
    #main-container {
        width: 100%;
        height: 1fr;
    }

    #grid {
        border: solid $accent;
    }

    #grid:focus {
        border: solid cyan;
    }

    #viewer {
        border: solid $success;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("up", "move('up')", "Up", show=False),
        Binding("down", "move('down')", "Down", show=False),
        Binding("left", "move('left')", "Left", show=False),
        Binding("right", "move('right')", "Right", show=False),
        Binding("shift+up", "move('up', True)", show=False),
        Binding("shift+down", "move('down', True)", show=False),
        Binding("shift+left", "move('left', True)", show=False),
        Binding("shift+right", "move('right', True)", show=False),
        Binding("pageup", "page('up')", show=False),
        Binding("pagedown", "page('down')", show=False),
        Binding("shift+pageup", "page('up', True)", show=False),
        Binding("shift+pagedown", "page('down', True)", show=False),
        Binding("home", "jump('home')", show=False),
        Binding("end", "jump('end')", show=False),
        Binding("shift+home", "jump('home', True)", show=False),
        Binding("shift+end", "jump('end', True)", show=False),
        Binding("n", "step('next')", "Next", show=False),
        Binding("p", "step('prev')", "Prev", show=False),
        Binding("enter", "enter", "Open"),
        Binding("escape", "leave_viewer", "Grid", show=False),
        Binding("backspace", "parent", "Up Folder"),
        Binding("left_square_bracket", "go_back", "Back"),
        Binding("right_square_bracket", "go_forward", "Forward"),
        Binding("comma", "sibling('prev')", "Prev Folder", show=False),
        Binding("full_stop", "sibling('next')", "Next Folder", show=False),
        Binding("space", "toggle_select", "Select", show=False),
        Binding("a", "select_all", "Select All", show=False),
        Binding("slash", "search", "Search"),
        Binding("t", "tag_search", "Tags"),
        Binding("T", "tag_selection", "Tag", show=False),
        Binding("l", "timeline", "Timeline"),
    ]

    def __init__(self, config: Config, start_directory: Path | None = None) -> None:
        super().__init__()
        self.config = config
        self.start_directory = start_directory or config.start_directory
        self.state = NavigationState(
            enter_threshold=config.navigation.enter_threshold,
            history_limit=config.navigation.history_limit,
        )
        self.mode = "browse"
        self._watcher = FolderWatcher(self._on_folder_change)

    def compose(self) -> ComposeResult:
        yield StatusBar(id="status")
        with Vertical(id="main-container"):
            yield ThumbnailGrid(self.state, id="grid")
            yield ItemViewer(id="viewer")
        yield Footer()

    def on_mount(self) -> None:
        """Open the start folder after mounting."""
        init_tags(self.config.get_tag_index_path())

        start = self.start_directory.expanduser().resolve()
        try:
            files = list_directory(start, self.config.list_options())
        except OSError as e:
            self.notify(f"Cannot open {start}: {e}", severity="error")
            files = []
        # The start folder replaces the placeholder context instead of
        # becoming a history entry
        self.state.context = NavigationContext.physical_folder(str(start), files)
        self._after_context_change()
        self.query_one("#grid", ThumbnailGrid).focus()

    async def on_unmount(self) -> None:
        """Clean up when app closes."""
        self._watcher.stop()

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        """Handle background search completion."""
        worker_name = event.worker.name

        if event.state.name == "ERROR":
            self.notify(f"Search failed: {event.worker.error}", severity="error")
            return

        if event.state.name != "SUCCESS":
            return

        if worker_name in ("_background_search", "_background_timeline"):
            context = event.worker.result
            if context is not None:
                self.notify(f"{len(context)} result(s)")
                self.show_results(context)

    def on_thumbnail_grid_layout_changed(self, event: ThumbnailGrid.LayoutChanged) -> None:
        self.query_one("#status", StatusBar).show_state(self.state, self.mode)

    def _on_folder_change(self, folder: Path) -> None:
        """Handle folder changes (called from watcher thread)."""
        # Schedule refresh on the main thread
        self.call_from_thread(self._handle_folder_change, folder)

    def _handle_folder_change(self, folder: Path) -> None:
        """Reload the current folder if it is the one that changed."""
        source = self.state.context.source
        if not isinstance(source, PhysicalFolder) or Path(source.path).resolve() != folder:
            return
        try:
            files = list_directory(folder, self.config.list_options())
        except OSError:
            # Folder itself removed; keep the last listing
            return
        self.state.refresh_entries(files)
        self._refresh_view()


def run_app(config: Config, start_directory: Path | None = None) -> None:
    """Run the Tessera application."""
    app = TesseraApp(config, start_directory)
    app.run()
