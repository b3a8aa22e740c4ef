"""Modal for entering search, tag and timeline queries."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Label, Static


class QueryModal(ModalScreen):
    """Modal screen that asks for a single line of input.

    Dismisses with the entered text, or None when cancelled or empty.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    CSS = """
    QueryModal {
        align: center middle;
    }

    #query-container {
        width: 60;
        height: auto;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }

    #query-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    .query-hint {
        color: $text-muted;
    }
    """

    def __init__(self, title: str, hint: str = "", value: str = "") -> None:
        super().__init__()
        self.query_title = title
        self.hint = hint
        self.initial_value = value

    def compose(self) -> ComposeResult:
        with Vertical(id="query-container"):
            yield Static(self.query_title, id="query-title")
            if self.hint:
                yield Label(self.hint, classes="query-hint")
            yield Input(value=self.initial_value, id="query-input")

    def on_mount(self) -> None:
        """Focus the input on mount."""
        self.query_one("#query-input", Input).focus()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        value = event.value.strip()
        self.dismiss(value or None)
