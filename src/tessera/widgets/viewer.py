"""Single-item viewer widget."""

from datetime import datetime

from rich.text import Text

from textual.widgets import Static

from ..entries import FileEntry


def format_size(size: int | None) -> str:
    """Format a byte count for display."""
    if size is None:
        return "-"
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            return f"{int(value)} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{size} B"


def format_date(timestamp: int | None) -> str:
    if timestamp is None:
        return "-"
    try:
        return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M")
    except (OverflowError, OSError, ValueError):
        return "Invalid"


class ItemViewer(Static):
    """Shows the current item in viewer mode."""

    DEFAULT_CSS = """
    ItemViewer {
        width: 1fr;
        height: 1fr;
        padding: 1 2;
        content-align: center middle;
    }
    """

    def show_entry(self, entry: FileEntry | None, index: int, count: int) -> None:
        """Display ``entry`` as item ``index`` of ``count``."""
        if entry is None:
            self.update(Text("Nothing to show", style="dim italic"))
            return

        kind = "image" if entry.is_image else "folder" if entry.is_dir else "file"
        text = Text()
        text.append(entry.name, style="bold")
        text.append(f"\n\n{kind}", style="italic cyan")
        text.append(f"\nSize:     {format_size(entry.size)}")
        text.append(f"\nModified: {format_date(entry.modified)}")
        text.append(f"\nPath:     {entry.path}", style="dim")
        text.append(f"\n\n{index + 1} / {count}", style="bold yellow")
        self.update(text)
