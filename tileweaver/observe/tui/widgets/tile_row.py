"""Tile row widget for TileWeaver TUI.

One row per tile: name label, weight slider, weight label. The parts are
created up front so the binder can find and seed them before the row has
finished mounting.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widget import Widget
from textual.widgets import Static

from tileweaver.observe.binder import NAME_PART, SLIDER_PART, WEIGHT_PART, ROW_PARTS
from .seek_slider import SeekSlider


class TileLabel(Static):
    """Static text with the editor's label interface."""

    def __init__(self, text: str = "", *, classes: str | None = None):
        super().__init__(text, classes=classes)
        self.label_text = text

    def set_text(self, text: str) -> None:
        self.label_text = text
        self.update(text)


class TileRow(Horizontal):
    """An editable tile row."""

    DEFAULT_CSS = """
    TileRow {
        height: 1;
        width: 1fr;
    }
    TileRow .tile-name {
        width: 14;
    }
    TileRow .tile-weight {
        width: 8;
        text-align: right;
    }
    """

    def __init__(self, parts: tuple[str, ...] = ROW_PARTS, *, classes: str | None = None):
        """Initialize TileRow.

        Args:
            parts: Which named parts this template provides
            classes: CSS classes
        """
        super().__init__(classes=classes)
        self._parts: dict[str, Widget] = {}
        if NAME_PART in parts:
            self._parts[NAME_PART] = TileLabel(classes="tile-name")
        if SLIDER_PART in parts:
            self._parts[SLIDER_PART] = SeekSlider(classes="tile-slider")
        if WEIGHT_PART in parts:
            self._parts[WEIGHT_PART] = TileLabel(classes="tile-weight")

    def compose(self) -> ComposeResult:
        yield from self._parts.values()

    def find(self, part: str) -> Widget | None:
        return self._parts.get(part)
