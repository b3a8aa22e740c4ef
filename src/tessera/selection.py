"""Grid geometry and multi-select state."""

from dataclasses import dataclass, field


@dataclass
class GridLayout:
    """Viewport geometry used for cursor arithmetic only."""

    columns: int = 1
    visible_rows: int = 1

    def __post_init__(self) -> None:
        self.update(self.columns, self.visible_rows)

    def update(self, columns: int, visible_rows: int) -> None:
        """Set the geometry, clamping both values to at least 1."""
        self.columns = max(1, columns)
        self.visible_rows = max(1, visible_rows)

    @property
    def page_size(self) -> int:
        return self.columns * self.visible_rows


@dataclass
class SelectionState:
    """Selected indices in insertion order, plus the shift-select anchor."""

    selected: list[int] = field(default_factory=list)
    anchor: int | None = None

    def clear(self) -> None:
        self.selected.clear()
        self.anchor = None

    def select_single(self, index: int) -> None:
        self.selected = [index]
        self.anchor = index

    def toggle(self, index: int) -> None:
        """Add or remove ``index`` without moving the anchor."""
        if index in self.selected:
            self.selected.remove(index)
        else:
            self.selected.append(index)

    def select_range(self, start: int, end: int) -> None:
        """Replace the selection with every index between start and end inclusive."""
        low, high = min(start, end), max(start, end)
        self.selected = list(range(low, high + 1))

    def set_anchor(self, index: int | None) -> None:
        self.anchor = index

    def is_selected(self, index: int) -> bool:
        return index in self.selected

    def __len__(self) -> int:
        return len(self.selected)
