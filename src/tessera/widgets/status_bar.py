"""Status bar showing the active context, position and selection."""

from textual.widgets import Static

from ..navigation import NavigationState


class StatusBar(Static):
    """One-line summary of the navigation state."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        background: $primary-background;
        color: $accent;
        padding: 0 1;
    }
    """

    def show_state(self, state: NavigationState, mode: str) -> None:
        count = state.file_count()
        position = f"{state.current_index() + 1}/{count}" if count else "0/0"
        parts = [mode.upper(), state.context.title, position]
        selected = len(state.selection)
        if selected > 1:
            parts.append(f"{selected} selected")
        if state.can_go_back():
            parts.append("[ back")
        if state.can_go_forward():
            parts.append("] forward")
        self.update("  │  ".join(parts))
